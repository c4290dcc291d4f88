"""
Field derivation for outbound messages.

Pure helpers the composer merges into a message: ephemeral fields, reply
context, bot message secrets, fresh keys and mention detection.
"""

import re
import time
from typing import Any, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from wa_actions.models.chat import Chat
from wa_actions.models.message import (
    Ack,
    Message,
    MessageType,
    TextMessage,
)
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.wid import USER_SERVER, Wid

BOT_MESSAGE_INFO = b"Bot Message"
MESSAGE_SECRET_LENGTH = 32

# Numeric mentions only, e.g. "@5511999999999"
MENTION_PATTERN = re.compile(r"(?<=@)(\d+)\b", re.ASCII)

NON_REPLYABLE_TYPES = frozenset({
    MessageType.PROTOCOL,
    MessageType.REVOKED,
    MessageType.CIPHERTEXT,
    MessageType.NOTIFICATION,
    MessageType.E2E_NOTIFICATION,
    MessageType.GP2,
    MessageType.CALL_LOG,
})

# Payload fields copied into quoted_msg when replying
QUOTED_PAYLOAD_FIELDS = ("type", "body", "caption", "lat", "lng", "loc", "mimetype", "filename")


def unix_time() -> int:
    return int(time.time())


def get_ephemeral_fields(chat: Chat) -> dict[str, Any]:
    if not chat.is_ephemeral:
        return {}
    return {
        "ephemeral_duration": chat.ephemeral_duration,
        "ephemeral_setting_timestamp": chat.ephemeral_setting_timestamp,
        "disappearing_mode_initiator": chat.disappearing_mode_initiator,
    }


def gen_bot_msg_secret(secret: bytes, persona_id: str) -> bytes:
    """Derive the bot message secret from a random message secret (HKDF-SHA256)."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=MESSAGE_SECRET_LENGTH,
        salt=persona_id.encode(),
        info=BOT_MESSAGE_INFO,
    )
    return hkdf.derive(secret)


def generate_message_id(chat: Chat, me: Wid) -> MsgKey:
    return MsgKey(
        from_me=True,
        remote=chat.id,
        id=MsgKey.new_id(),
        participant=me if chat.is_group else None,
    )


def can_reply_msg(msg: Message) -> bool:
    if msg.type in NON_REPLYABLE_TYPES:
        return False
    if msg.ack == Ack.FAILED:
        return False
    return bool(msg.id.id)


def msg_context_info(quoted: Message, chat_id: Wid) -> dict[str, Any]:
    """Quote fields for replying to *quoted* from inside *chat_id*."""
    wire = quoted.model_dump(mode="json", exclude_none=True)
    info: dict[str, Any] = {
        "quoted_msg": {k: wire[k] for k in QUOTED_PAYLOAD_FIELDS if k in wire},
        "quoted_stanza_id": quoted.id.id,
        "quoted_participant": quoted.id.participant or quoted.sender,
    }
    if quoted.id.remote != chat_id:
        info["quoted_remote_jid"] = quoted.id.remote
    return info


def extract_text(intent: Any) -> Optional[str]:
    if isinstance(intent, TextMessage):
        return intent.body
    return getattr(intent, "caption", None)


def detect_mentions(text: Optional[str], participants: list[Wid]) -> list[Wid]:
    """Participants mentioned as ``@<digits>`` in *text*, in match order.

    Repeated mentions are kept; each regex match counts once.
    """
    if not text:
        return []
    members = {p.to_string() for p in participants}
    found: list[Wid] = []
    for user in MENTION_PATTERN.findall(text):
        wid = Wid(user=user, server=USER_SERVER)
        if wid.to_string() in members:
            found.append(wid)
    return found
