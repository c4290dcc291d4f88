"""
WhatsApp identifiers (WIDs): ``<user>@<server>``.

Servers recognised by the action layer:
  c.us        individual user (legacy wire form: s.whatsapp.net)
  lid         individual user, linked-id addressing
  g.us        group
  bot         bot account
  call        group call link
  broadcast   broadcast lists and ``status@broadcast``
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from wa_actions.errors import InvalidWidError

USER_SERVER = "c.us"
LEGACY_USER_SERVER = "s.whatsapp.net"
LID_SERVER = "lid"
GROUP_SERVER = "g.us"
BOT_SERVER = "bot"
GROUP_CALL_SERVER = "call"
BROADCAST_SERVER = "broadcast"
STATUS_USER = "status"


class Wid(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: str
    server: str

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _split(data)
        return data

    @model_serializer
    def _serialize(self) -> str:
        return self.to_string()

    @classmethod
    def parse(cls, value: str) -> "Wid":
        return cls.model_validate(value)

    def to_string(self, legacy: bool = False) -> str:
        server = self.server
        if legacy and server == USER_SERVER:
            server = LEGACY_USER_SERVER
        return f"{self.user}@{server}"

    def is_user(self) -> bool:
        return self.server in (USER_SERVER, LID_SERVER)

    def is_group(self) -> bool:
        return self.server == GROUP_SERVER

    def is_bot(self) -> bool:
        return self.server == BOT_SERVER

    def is_group_call(self) -> bool:
        return self.server == GROUP_CALL_SERVER

    def is_broadcast(self) -> bool:
        return self.server == BROADCAST_SERVER

    def is_status(self) -> bool:
        return self.is_broadcast() and self.user == STATUS_USER

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Wid({self.to_string()!r})"


def _split(value: str) -> dict[str, str]:
    user, sep, server = value.strip().partition("@")
    if not sep or not user or not server or "@" in server:
        raise InvalidWidError(value)
    server = server.lower()
    if server == LEGACY_USER_SERVER:
        server = USER_SERVER
    return {"user": user, "server": server}


def assert_wid(value: Union[str, Wid]) -> Wid:
    """Return *value* as a :class:`Wid`, raising :class:`InvalidWidError` if it is not one."""
    if isinstance(value, Wid):
        return value
    if not isinstance(value, str):
        raise InvalidWidError(value)
    return Wid.parse(value)
