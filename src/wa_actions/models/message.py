"""
Message models.

Outbound intents are a tagged union discriminated on ``type``; ``Message`` is
the finalised, immutable record produced by the composer and the shape the
message store returns for quoted-message lookups.
"""

from enum import Enum, IntEnum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from wa_actions.errors import InvalidMessageError
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.wid import Wid


class MessageType(str, Enum):
    CHAT = "chat"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PTT = "ptt"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    PROTOCOL = "protocol"
    REVOKED = "revoked"
    CIPHERTEXT = "ciphertext"
    NOTIFICATION = "notification"
    E2E_NOTIFICATION = "e2e_notification"
    GP2 = "gp2"
    CALL_LOG = "call_log"


class Ack(IntEnum):
    FAILED = -1
    CLOCK = 0
    SENT = 1
    RECEIVED = 2
    READ = 3
    PLAYED = 4


# ---------------------------------------------------------------------------
# Outbound intents
# ---------------------------------------------------------------------------

class _Intent(BaseModel):
    # Extra fields are carried through and override the stamped defaults
    model_config = ConfigDict(extra="allow")


class TextMessage(_Intent):
    type: Literal["chat"] = "chat"
    body: str


class MediaMessage(_Intent):
    type: Literal["image", "video", "audio", "document", "sticker"]
    caption: Optional[str] = None
    mimetype: Optional[str] = None
    filename: Optional[str] = None


class VoiceNoteMessage(_Intent):
    type: Literal["ptt"] = "ptt"
    mimetype: Optional[str] = None
    duration: Optional[int] = None


class LocationMessage(_Intent):
    type: Literal["location"] = "location"
    lat: float
    lng: float
    loc: Optional[str] = None  # free-text comment shown under the map


class ProtocolMessage(_Intent):
    type: Literal["protocol"] = "protocol"
    subtype: Optional[str] = None


OutgoingMessage = Annotated[
    Union[TextMessage, MediaMessage, VoiceNoteMessage, LocationMessage, ProtocolMessage],
    Field(discriminator="type"),
]

_intent_adapter: TypeAdapter[Any] = TypeAdapter(OutgoingMessage)


def parse_intent(raw: Union[dict[str, Any], BaseModel]) -> Any:
    """Validate a raw dict into one of the outbound intent variants."""
    if isinstance(raw, _Intent):
        return raw
    try:
        return _intent_adapter.validate_python(raw)
    except ValidationError as e:
        raise invalid_message(e)


def invalid_message(e: ValidationError) -> InvalidMessageError:
    return InvalidMessageError(
        f"Invalid message: {e.error_count()} error(s)",
        {"errors": [err["loc"] for err in e.errors()]},
    )


# ---------------------------------------------------------------------------
# Finalised message
# ---------------------------------------------------------------------------

class Message(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_bytes="base64",
    )

    id: MsgKey
    type: MessageType
    t: int
    from_: Wid = Field(alias="from")
    to: Wid
    direction: str = Field("out", alias="self")
    is_new_msg: bool = False
    local: bool = False
    ack: Ack = Ack.CLOCK
    author: Optional[Wid] = None

    body: Optional[str] = None
    caption: Optional[str] = None

    ephemeral_duration: Optional[int] = None
    ephemeral_setting_timestamp: Optional[int] = None
    disappearing_mode_initiator: Optional[str] = None

    mentioned_jid_list: Optional[list[Wid]] = None

    message_secret: Optional[bytes] = None
    bot_persona_id: Optional[str] = None

    quoted_msg: Optional[dict[str, Any]] = None
    quoted_stanza_id: Optional[str] = Field(None, alias="quotedStanzaID")
    quoted_participant: Optional[Wid] = None
    quoted_remote_jid: Optional[Wid] = None

    @property
    def is_status_v3(self) -> bool:
        return self.id.remote.is_status()

    @property
    def sender(self) -> Wid:
        return self.author or self.from_

    def to_wire(self) -> dict[str, Any]:
        """camelCase, JSON-ready representation for the bridge."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
