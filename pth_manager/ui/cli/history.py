"""
CLI command for the audit ledger.

Thin wrapper over ``pth_manager.core.persistence.audit``.
"""

from __future__ import annotations

import json

import click


@click.command()
@click.option("-n", "count", default=20, show_default=True, type=int, help="Entries to show.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def history(count: int, as_json: bool) -> None:
    """Show recent injections and cleanups."""
    from pth_manager.core.persistence.audit import AuditLog
    from pth_manager.core.persistence.state_file import default_state_dir

    ledger = AuditLog(state_dir=default_state_dir())
    entries = ledger.tail(count)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
        return

    if not entries:
        click.echo(f"   No history yet ({ledger.path})")
        return

    status_color = {"ok": "green", "refused": "yellow", "failed": "red"}
    click.secho(f"📜 Last {len(entries)} action(s):", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   {entry.timestamp}  ", nl=False)
        click.secho(f"{entry.decision:<8} {entry.status:<8}",
                    fg=status_color.get(entry.status, "white"), nl=False)
        label = entry.outcome or ""
        click.echo(f" {label:<16} {entry.target_file or entry.current_dir}")
        if entry.error:
            click.echo(f"      │ {entry.error}")
    click.echo()
