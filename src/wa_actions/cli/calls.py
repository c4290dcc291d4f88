"""CLI: wa call list|end"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from wa_actions.errors import WAActionError

console = Console()


def _get_client():
    from wa_actions.cli.main import _get_client
    return _get_client()


def _run(coro):
    from wa_actions.cli.main import _run
    return _run(coro)


@click.group()
def call():
    """Call control commands."""


@call.command("list")
@click.option("--json-output", "--json", is_flag=True)
def call_list(json_output: bool):
    """List calls known to the bridge."""

    async def _list():
        client = _get_client()
        try:
            calls = await client.refresh_calls()
        finally:
            await client.close()
        if json_output:
            click.echo(json.dumps([c.model_dump(mode="json") for c in calls], indent=2))
            return
        table = Table(title=f"Calls ({len(calls)})")
        table.add_column("ID", style="bold")
        table.add_column("Peer")
        table.add_column("State")
        table.add_column("Group")
        for c in calls:
            table.add_row(c.id, c.peer_jid.to_string(), c.state.value, "yes" if c.is_group else "")
        console.print(table)

    _run(_list())


@call.command("end")
@click.argument("call_id", required=False)
def call_end(call_id: Optional[str]):
    """End a call. Without CALL_ID, ends the first outgoing, active or group call."""

    async def _end():
        client = _get_client()
        await client.connect()
        try:
            await client.refresh_calls()
            with console.status("Ending call..."):
                await client.end_call(call_id)
        except WAActionError as e:
            console.print(f"[red]{e.code}:[/red] {e}")
            raise SystemExit(1)
        finally:
            await client.close()
        console.print("[green]Call terminated.[/green]")

    _run(_end())
