"""
wa-actions error types.

Every failure carries a machine-readable ``code``, a human message and a
``details`` payload with the offending identifiers or values.
"""

from typing import Any, Optional


class WAActionError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidWidError(WAActionError):
    def __init__(self, value: Any):
        super().__init__("invalid_wid", f"Invalid WID value for {value!r}", {"id": value})


class InvalidMsgKeyError(WAActionError):
    def __init__(self, value: Any):
        super().__init__("invalid_msg_key", f"Invalid message key {value!r}", {"key": value})


class InvalidOptionsError(WAActionError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_send_options", message, details)


class InvalidMessageError(WAActionError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_message", message, details)


class InvalidMentionListError(WAActionError):
    def __init__(self, mentioned_list: Any):
        super().__init__(
            "mentioned_list_is_not_array",
            "The option mentioned_list is not an array",
            {"mentioned_list": mentioned_list},
        )


class MentionedNotUserError(WAActionError):
    def __init__(self, mentioned_id: str):
        super().__init__("mentioned_is_not_user", "Mentioned is not an user", {"mentioned_id": mentioned_id})


class NotFromMeError(WAActionError):
    def __init__(self, message_id: str):
        super().__init__("message_key_is_not_from_me", "Message key is not from me", {"message_id": message_id})


class RemoteMismatchError(WAActionError):
    def __init__(self, message_id: str, chat_id: str):
        super().__init__(
            "message_key_remote_id_is_not_same_of_chat",
            "Message key remote ID is not same of chat",
            {"message_id": message_id, "chat_id": chat_id},
        )


class InvalidQuotedMsgError(WAActionError):
    def __init__(self, quoted_msg: Any):
        super().__init__("invalid_quoted_msg", "Invalid quoted_msg", {"quoted_msg": quoted_msg})


class QuotedCannotReplyError(WAActionError):
    def __init__(self, quoted_msg: Any):
        super().__init__("quoted_msg_can_not_reply", "quoted_msg can not reply", {"quoted_msg": quoted_msg})


class PersonaNotFoundError(WAActionError):
    """No bot persona is registered for a bot chat. Indicates a broken registry."""

    def __init__(self, chat_id: str):
        super().__init__("persona_not_found", f"No bot persona registered for {chat_id}", {"chat_id": chat_id})


class CompositionCancelledError(WAActionError):
    def __init__(self, chat_id: str):
        super().__init__("composition_cancelled", f"Message composition for {chat_id} was cancelled", {"chat_id": chat_id})


class ChatNotFoundError(WAActionError):
    def __init__(self, chat_id: str):
        super().__init__("chat_not_found", f"Chat {chat_id} not found", {"chat_id": chat_id})


class CallNotFoundError(WAActionError):
    def __init__(self, call_id: Optional[str]):
        super().__init__("call_not_found", f"Call {call_id or '<empty>'} not found", {"call_id": call_id})


class CallNotOutgoingError(WAActionError):
    def __init__(self, call_id: Optional[str], state: str):
        super().__init__(
            "call_is_not_outcoming_calling",
            f"Call {call_id or '<empty>'} is not outgoing calling",
            {"call_id": call_id, "state": state},
        )


class TransportError(WAActionError):
    def __init__(self, message: str, code: str = "transport_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class ConnectionError(WAActionError):
    def __init__(self, message: str):
        super().__init__("connection_error", message)
