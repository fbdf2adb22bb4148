"""
pth-manager — CLI entrypoint.

Usage:
    pthm --help
    pthm status
    pthm run
    pthm hook --cd-status 0 "$PWD"
    eval "$(pthm shell-init)"
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pth_manager import __version__
from pth_manager.core.config.loader import ENV_DEBUG, is_flag_set
from pth_manager.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="pthm")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Optional YAML config file (environment variables take precedence).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pth-manager — inject dev paths into the active venv while inside a project."""
    ctx.ensure_object(dict)
    debug = debug or is_flag_set(os.environ.get(ENV_DEBUG))
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            default=os.environ.get("PTH_MANAGER_LOG_LEVEL"),
        ),
        log_file=os.environ.get("PTH_MANAGER_LOG_FILE"),
        log_file_level=os.environ.get("PTH_MANAGER_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show configuration and session state (read-only)."""
    from pth_manager.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    def na(value: object) -> str:
        return str(value) if value not in (None, "") else "N/A"

    click.secho("📋 Configuration", fg="cyan", bold=True)
    if result.error:
        click.secho(f"   ❌ {result.error}", fg="red")
    elif result.config is not None:
        cfg = result.config
        click.echo(f"   SHOULD_INJECT_PTH_FILE: {cfg.inject_trigger}")
        click.echo(f"   PTH_MANAGER_ROOT:       {na(cfg.project_root)}")
        click.echo(f"   DEV_SITE_PACKAGES_DIR:  {na(cfg.dev_library_path)}")
        click.echo(f"   PTH_FILE_NAME:          {na(cfg.injection_file_name)}")
        click.echo(f"   DEBUG:                  {cfg.debug_enabled}")
        version = result.interpreter_version or "not available"
        click.echo(f"   Interpreter:            {cfg.python} ({version})")

    state = result.state
    click.echo()
    click.secho("💾 Session state", fg="cyan", bold=True)
    click.echo(f"   Session:                {result.session}")
    click.echo(f"   State file:             {result.state_path}")
    if state is not None:
        click.echo(f"   Action done:            {state.action_done}")
        click.echo(f"   Action kind:            {state.action_kind.value}")
        click.echo(f"   Injected directory:     {na(state.injected_directory)}")
        click.echo(f"   Site-packages cache:    {na(state.resolved_packages_cache)}")

    click.echo()
    scope_label = "inside" if result.in_scope else "outside"
    click.echo(f"   {result.current_dir} is {scope_label} the project root")
    if result.injection_file:
        marker = "✓ present" if result.injection_file_exists else "✗ missing"
        click.echo(f"   Injection file: {result.injection_file} ({marker})")

    if result.nested_envrc:
        click.echo()
        click.secho(f"⚠️  Nested .envrc detected: {result.nested_envrc}", fg="yellow")
        click.echo("   Nested projects are not supported; state management may fail.")

    if not ctx.obj.get("quiet"):
        click.echo()
        click.echo("   To run logic, cd within the project scope, or call 'pthm run'.")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to evaluate (default: current directory).",
)
@click.pass_context
def run(ctx: click.Context, as_json: bool, directory: str | None) -> None:
    """Evaluate the current directory now: inject, clean up, or do nothing."""
    from pth_manager.core.use_cases.run import run_manage

    result = run_manage(
        current_dir=os.path.abspath(directory) if directory else None,
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _report(ctx, result)

    if result.exit_code != 0:
        sys.exit(result.exit_code)


@cli.command(hidden=True)
@click.option("--cd-status", type=int, required=True, help="Exit status of the cd itself.")
@click.argument("directory", required=False)
@click.pass_context
def hook(ctx: click.Context, cd_status: int, directory: str | None) -> None:
    """Directory-change hook, called by the shell after every cd."""
    from pth_manager.core.use_cases.run import run_hook

    result = run_hook(
        new_dir=os.path.abspath(directory) if directory else os.getcwd(),
        cd_status=cd_status,
        config_path=ctx.obj.get("config_path"),
    )
    _report(ctx, result)

    if result.exit_code != 0:
        sys.exit(result.exit_code)


@cli.command()
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Forget this session's state and cached site-packages path."""
    from pth_manager.core.use_cases.run import reset_session

    path, existed = reset_session()
    if ctx.obj.get("quiet"):
        return
    if existed:
        click.secho(f"✅ Session state cleared ({path})", fg="green")
    else:
        click.echo(f"   No session state at {path}")


def _report(ctx: click.Context, result) -> None:
    """Print the user-facing line for an evaluation, if anything happened."""
    from pth_manager.core.engine.controller import Decision
    from pth_manager.core.services.injection import InjectionResult

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)

    evaluation = result.evaluation
    # Failed evaluations were already logged by the controller.
    if evaluation is None or not evaluation.ok or ctx.obj.get("quiet"):
        return

    if evaluation.decision is Decision.INJECT:
        if evaluation.injection is InjectionResult.CREATED:
            click.secho(f"✅ Created {evaluation.target_file} and injected path.", fg="green")
        elif evaluation.injection is InjectionResult.APPENDED:
            click.secho(f"✅ Appended path to {evaluation.target_file}.", fg="green")
        elif ctx.obj.get("verbose"):
            click.echo(f"   Path already present in {evaluation.target_file}.")
    elif evaluation.decision is Decision.CLEANUP:
        if evaluation.removed:
            click.secho(f"✅ Removed stale PTH file: {evaluation.target_file}", fg="green")
        elif ctx.obj.get("verbose"):
            click.echo("   Nothing to remove; session state reset.")
    elif ctx.obj.get("verbose"):
        click.echo("   No action required.")


# ── Register sub-command groups from pth_manager/ui/cli/ ──────────

from pth_manager.ui.cli.history import history  # noqa: E402
from pth_manager.ui.cli.shell import shell_init  # noqa: E402

cli.add_command(history)
cli.add_command(shell_init)


if __name__ == "__main__":
    cli()
