"""
CLI command for shell integration.

Prints the snippet that wires ``pthm hook`` into the shell's ``cd``.
Install with ``eval "$(pthm shell-init)"`` in ``~/.bashrc``.
"""

from __future__ import annotations

import click

BASH_SNIPPET = """\
# pth-manager shell integration
export PTH_MANAGER_SESSION="${{PTH_MANAGER_SESSION:-$$}}"

cd() {{
    builtin cd "$@"
    local cd_status=$?
    if [[ "${{cd_status}}" -ne 0 ]]; then
        return "${{cd_status}}"
    fi
    if [[ "${{SHOULD_INJECT_PTH_FILE}}" == '1' ]] || [[ "${{SHOULD_INJECT_PTH_FILE}}" == 'true' ]]; then
        command {prog} hook --cd-status "${{cd_status}}" "${{PWD}}"
    fi
}}

please_manage_pth() {{
    command {prog} run "$@"
}}

check_pth_manager() {{
    command {prog} status "$@"
}}
"""

SUPPORTED_SHELLS = ("bash",)


def render_snippet(shell: str = "bash", prog: str = "pthm") -> str:
    """Render the integration snippet for ``shell``."""
    if shell not in SUPPORTED_SHELLS:
        raise ValueError(f"Unsupported shell '{shell}'. Supported: {', '.join(SUPPORTED_SHELLS)}")
    return BASH_SNIPPET.format(prog=prog)


@click.command("shell-init")
@click.option(
    "--shell",
    type=click.Choice(SUPPORTED_SHELLS),
    default="bash",
    show_default=True,
    help="Target shell.",
)
@click.option("--prog", default="pthm", show_default=True, help="Command the snippet calls.")
def shell_init(shell: str, prog: str) -> None:
    """Print the cd hook snippet. Use: eval "$(pthm shell-init)"."""
    click.echo(render_snippet(shell, prog), nl=False)
