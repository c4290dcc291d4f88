"""
wa-actions CLI: `wa` command.

Commands:
  wa config set|show       Bridge URL, token and own jid
  wa send <chat> <text>    Compose and send a text message
  wa call list|end         Inspect and terminate calls
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install wa-actions[cli]")

from wa_actions.client import AsyncWAClient
from wa_actions.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".wa-actions" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncWAClient:
    cfg = _load_config()
    if not cfg.get("token") or not cfg.get("me"):
        console.print("[red]Not configured. Run `wa config set` first.[/red]")
        raise SystemExit(1)
    return AsyncWAClient(
        me=cfg["me"],
        token=cfg["token"],
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    """wa-actions CLI: send messages and control calls through the bridge."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")


# Register subcommands from separate modules
from wa_actions.cli.calls import call
from wa_actions.cli.config import config
from wa_actions.cli.messages import send_cmd

main.add_command(config)
main.add_command(send_cmd)
main.add_command(call)


if __name__ == "__main__":
    main()
