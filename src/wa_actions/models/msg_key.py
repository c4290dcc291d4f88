"""
Message keys: ``<fromMe>_<remote>_<id>[_<participant>]``.
"""

import secrets
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from wa_actions.errors import InvalidMsgKeyError, WAActionError
from wa_actions.models.wid import Wid

MESSAGE_ID_PREFIX = "3EB0"


class MsgKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_me: bool
    remote: Wid
    id: str
    participant: Optional[Wid] = None

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
    def from_string(cls, value: str) -> "MsgKey":
        return cls.model_validate(value)

    @staticmethod
    def new_id() -> str:
        """Fresh random stanza id, e.g. ``3EB0A1B2C3D4E5F6A7B8C9``."""
        return MESSAGE_ID_PREFIX + secrets.token_hex(9).upper()

    def to_string(self) -> str:
        parts = ["true" if self.from_me else "false", self.remote.to_string(), self.id]
        if self.participant is not None:
            parts.append(self.participant.to_string())
        return "_".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"MsgKey({self.to_string()!r})"


def _split(value: str) -> dict[str, Any]:
    parts = value.split("_")
    if len(parts) not in (3, 4) or parts[0] not in ("true", "false") or not parts[2]:
        raise InvalidMsgKeyError(value)
    try:
        data: dict[str, Any] = {
            "from_me": parts[0] == "true",
            "remote": Wid.parse(parts[1]),
            "id": parts[2],
        }
        if len(parts) == 4:
            data["participant"] = Wid.parse(parts[3])
    except WAActionError:
        raise InvalidMsgKeyError(value) from None
    return data
