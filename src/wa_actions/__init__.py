"""
wa-actions: outbound action layer for a WhatsApp Web bridge.

Composes validated outbound messages and call-control stanzas and
dispatches them over a Socket.IO + REST bridge.
"""

from wa_actions.client import AsyncWAClient, WAClient
from wa_actions.composer import ActionComposer, build_terminate_node
from wa_actions.errors import (
    WAActionError,
    InvalidWidError,
    InvalidMsgKeyError,
    InvalidOptionsError,
    InvalidMessageError,
    InvalidMentionListError,
    MentionedNotUserError,
    NotFromMeError,
    RemoteMismatchError,
    InvalidQuotedMsgError,
    QuotedCannotReplyError,
    PersonaNotFoundError,
    CompositionCancelledError,
    ChatNotFoundError,
    CallNotFoundError,
    CallNotOutgoingError,
    TransportError,
    ConnectionError,
)
from wa_actions.models.call import Call, CallState
from wa_actions.models.chat import Chat
from wa_actions.models.message import (
    Ack,
    LocationMessage,
    MediaMessage,
    Message,
    MessageType,
    ProtocolMessage,
    TextMessage,
    VoiceNoteMessage,
)
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.node import ProtocolNode, smax
from wa_actions.models.options import SendMessageOptions
from wa_actions.models.wid import Wid

__version__ = "0.1.0"
__all__ = [
    "AsyncWAClient",
    "WAClient",
    "ActionComposer",
    "build_terminate_node",
    "WAActionError",
    "InvalidWidError",
    "InvalidMsgKeyError",
    "InvalidOptionsError",
    "InvalidMessageError",
    "InvalidMentionListError",
    "MentionedNotUserError",
    "NotFromMeError",
    "RemoteMismatchError",
    "InvalidQuotedMsgError",
    "QuotedCannotReplyError",
    "PersonaNotFoundError",
    "CompositionCancelledError",
    "ChatNotFoundError",
    "CallNotFoundError",
    "CallNotOutgoingError",
    "TransportError",
    "ConnectionError",
    "Call",
    "CallState",
    "Chat",
    "Ack",
    "LocationMessage",
    "MediaMessage",
    "Message",
    "MessageType",
    "ProtocolMessage",
    "TextMessage",
    "VoiceNoteMessage",
    "MsgKey",
    "ProtocolNode",
    "smax",
    "SendMessageOptions",
    "Wid",
]
