"""CLI: wa config set|show"""

from typing import Optional

import click
from rich.console import Console

from wa_actions.errors import WAActionError
from wa_actions.models.wid import assert_wid

console = Console()


def _load_config() -> dict:
    from wa_actions.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from wa_actions.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Bridge configuration."""


@config.command("set")
@click.option("--base-url", default=None, help="Bridge base URL")
@click.option("--token", default=None, help="Bridge access token")
@click.option("--me", default=None, help="Own WID, e.g. 5511999999999@c.us")
def config_set(base_url: Optional[str], token: Optional[str], me: Optional[str]):
    """Save bridge settings to ~/.wa-actions/config.json."""
    cfg = _load_config()
    if me is not None:
        try:
            me = assert_wid(me).to_string()
        except WAActionError as e:
            raise click.BadParameter(str(e), param_hint="--me")
    updates = {"base_url": base_url, "token": token, "me": me}
    cfg.update({k: v for k, v in updates.items() if v is not None})
    _save_config(cfg)
    console.print("[green]Configuration saved.[/green]")


@config.command("show")
def config_show():
    """Show the current configuration."""
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]Not configured. Run `wa config set`.[/yellow]")
        return
    token = cfg.get("token")
    console.print(f"base_url: {cfg.get('base_url', '<default>')}")
    console.print(f"me:       {cfg.get('me', '<unset>')}")
    console.print(f"token:    {'****' + token[-4:] if token else '<unset>'}")
