"""CLI: wa send"""

import json
from typing import Optional

import click
from rich.console import Console

from wa_actions.errors import WAActionError
from wa_actions.models.message import TextMessage

console = Console()


def _get_client():
    from wa_actions.cli.main import _get_client
    return _get_client()


def _run(coro):
    from wa_actions.cli.main import _run
    return _run(coro)


@click.command("send")
@click.argument("chat_id")
@click.argument("text")
@click.option("--delay", default=0.0, type=float, help="Seconds to show 'typing...' before sending")
@click.option("--mention", "mentions", multiple=True, help="WID to mention (repeatable)")
@click.option("--no-detect-mentions", is_flag=True, help="Do not scan the text for @mentions")
@click.option("--quote", "quoted", default=None, help="Message key to reply to")
@click.option("--message-id", default=None, help="Explicit message key to send with")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(
    chat_id: str, text: str, delay: float, mentions: tuple[str, ...], no_detect_mentions: bool,
    quoted: Optional[str], message_id: Optional[str], json_output: bool,
):
    """Send a text message."""
    options = {
        "delay": delay,
        "detect_mentioned": not no_detect_mentions,
        "mentioned_list": list(mentions) if mentions else None,
        "quoted_msg": quoted,
        "message_id": message_id,
    }

    async def _send():
        client = _get_client()
        await client.connect()
        try:
            msg = await client.send_message(chat_id, TextMessage(body=text), options)
        except WAActionError as e:
            console.print(f"[red]{e.code}:[/red] {e}")
            raise SystemExit(1)
        finally:
            await client.close()
        if json_output:
            click.echo(json.dumps(msg.to_wire()))
        else:
            console.print(f"[green]Sent[/green] {msg.id}")

    _run(_send())
