"""
Action composer: turns send/end-call intents into validated messages and
protocol nodes.

Message pipeline (order matters):
  1. merge options over defaults
  2. stamp base fields, caller fields win
  3. optional typing/recording delay
  4. ephemeral fields (not for protocol messages)
  5. bot message secret + persona
  6. adopt an explicit message key, or
  7. generate one
  8-10. mention list: validate, detect, normalise
  11. quoted message context
"""

import asyncio
import logging
import secrets
from typing import Any, Optional, Union

from pydantic import ValidationError

from wa_actions.enrichment import (
    MENTION_PATTERN,
    MESSAGE_SECRET_LENGTH,
    can_reply_msg,
    detect_mentions,
    extract_text,
    gen_bot_msg_secret,
    generate_message_id,
    get_ephemeral_fields,
    msg_context_info,
    unix_time,
)
from wa_actions.errors import (
    CallNotFoundError,
    CallNotOutgoingError,
    CompositionCancelledError,
    InvalidMentionListError,
    InvalidQuotedMsgError,
    MentionedNotUserError,
    NotFromMeError,
    PersonaNotFoundError,
    QuotedCannotReplyError,
    RemoteMismatchError,
)
from wa_actions.models.call import OUTGOING_STATES, Call
from wa_actions.models.chat import Chat
from wa_actions.models.message import (
    Ack,
    Message,
    MessageType,
    TextMessage,
    VoiceNoteMessage,
    invalid_message,
    parse_intent,
)
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.node import ProtocolNode, smax
from wa_actions.models.options import SendMessageOptions, merge_options
from wa_actions.models.wid import Wid, assert_wid
from wa_actions.stores import (
    BotProfileStore,
    CallStore,
    GroupDirectory,
    MessageStore,
    PresenceSignaler,
    SignalingTransport,
)

logger = logging.getLogger(__name__)


class ActionComposer:
    def __init__(
        self,
        me: Wid,
        calls: CallStore,
        messages: MessageStore,
        groups: GroupDirectory,
        bots: BotProfileStore,
        presence: PresenceSignaler,
        transport: SignalingTransport,
    ):
        self._me = me
        self._calls = calls
        self._messages = messages
        self._groups = groups
        self._bots = bots
        self._presence = presence
        self._transport = transport

    # ------------------------------------------------------------------
    # Message path
    # ------------------------------------------------------------------

    async def compose_outbound_message(
        self,
        chat: Chat,
        message: Union[dict[str, Any], Any],
        options: Union[SendMessageOptions, dict[str, Any], None] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Message:
        """Build a finalised outbound message for *chat*.

        *message* is an outbound intent (or a raw dict validated into one).
        *cancel*, when set during the delay, aborts with
        :class:`CompositionCancelledError` after signalling paused.
        """
        opts = merge_options(options)
        intent = parse_intent(message)

        fields: dict[str, Any] = {
            "t": unix_time(),
            "from_": self._me,
            "to": chat.id,
            "direction": "out",
            "is_new_msg": True,
            "local": True,
            "ack": Ack.CLOCK,
        }
        fields.update(intent.model_dump(exclude_none=True))

        if opts.delay:
            await self._simulate_activity(chat.id, intent, opts.delay, cancel)

        if intent.type != MessageType.PROTOCOL:
            fields = {**get_ephemeral_fields(chat), **fields}

        if chat.is_bot:
            persona_id = await self._bots.get_persona_id(chat.id)
            if persona_id is None:
                raise PersonaNotFoundError(chat.id.to_string())
            fields["message_secret"] = gen_bot_msg_secret(secrets.token_bytes(MESSAGE_SECRET_LENGTH), persona_id)
            fields["bot_persona_id"] = persona_id

        if opts.message_id:
            fields["id"] = self._adopt_message_key(chat, opts.message_id)

        if not fields.get("id"):
            fields["id"] = generate_message_id(chat, self._me)

        mentioned_list = opts.mentioned_list
        if mentioned_list is not None and not isinstance(mentioned_list, (list, tuple)):
            raise InvalidMentionListError(mentioned_list)

        if opts.detect_mentioned and chat.is_group and not mentioned_list:
            mentioned_list = await self._detect_mentions(chat, intent)

        if mentioned_list is not None:
            fields["mentioned_jid_list"] = self._normalize_mentions(mentioned_list)

        if opts.quoted_msg:
            quoted = await self._resolve_quoted(opts.quoted_msg)
            fields.update(msg_context_info(quoted, chat.id))

        logger.debug("Composed %s message %s for %s", intent.type, fields["id"], chat.id)
        try:
            return Message.model_validate(fields)
        except ValidationError as e:
            raise invalid_message(e)

    async def _simulate_activity(
        self, chat_id: Wid, intent: Any, delay: float, cancel: Optional[asyncio.Event],
    ) -> None:
        if isinstance(intent, TextMessage):
            await self._signal("composing", chat_id)
        elif isinstance(intent, VoiceNoteMessage):
            await self._signal("recording", chat_id)

        cancelled = False
        try:
            if cancel is None:
                await asyncio.sleep(delay)
            else:
                try:
                    await asyncio.wait_for(cancel.wait(), timeout=delay)
                    cancelled = True
                except asyncio.TimeoutError:
                    pass
        finally:
            await self._signal("paused", chat_id)

        if cancelled:
            raise CompositionCancelledError(chat_id.to_string())

    async def _signal(self, state: str, chat_id: Wid) -> None:
        try:
            await getattr(self._presence, f"mark_{state}")(chat_id)
        except Exception as e:
            logger.warning("Presence update %s for %s failed: %s", state, chat_id, e)

    def _adopt_message_key(self, chat: Chat, message_id: Any) -> MsgKey:
        key = MsgKey.from_string(message_id) if isinstance(message_id, str) else message_id
        if not key.from_me:
            raise NotFromMeError(key.to_string())
        if key.remote != chat.id:
            raise RemoteMismatchError(key.to_string(), chat.id.to_string())
        return key

    async def _detect_mentions(self, chat: Chat, intent: Any) -> list[Wid]:
        text = extract_text(intent)
        if not text or not MENTION_PATTERN.search(text):
            return []
        participants = await self._groups.get_participants(chat.id)
        return detect_mentions(text, participants)

    @staticmethod
    def _normalize_mentions(mentioned_list: Any) -> list[Wid]:
        normalized = [assert_wid(m) for m in mentioned_list]
        for wid in normalized:
            if not wid.is_user():
                raise MentionedNotUserError(wid.to_string())
        return normalized

    async def _resolve_quoted(self, quoted: Any) -> Message:
        if isinstance(quoted, str):
            quoted = MsgKey.from_string(quoted)
        if isinstance(quoted, MsgKey):
            quoted = await self._messages.get_message_by_id(quoted)

        if not isinstance(quoted, Message):
            raise InvalidQuotedMsgError(str(quoted) if quoted is not None else None)

        if not quoted.is_status_v3 and not can_reply_msg(quoted):
            raise QuotedCannotReplyError(quoted.id.to_string())
        return quoted

    # ------------------------------------------------------------------
    # Call path
    # ------------------------------------------------------------------

    async def end_call(self, call_id: Optional[str] = None) -> bool:
        """Terminate *call_id*, or the first outgoing/active/group call."""
        call = self.resolve_call(call_id)

        if not call.can_end:
            raise CallNotOutgoingError(call_id, call.state.value)

        if not call.peer_jid.is_group_call():
            await self._transport.ensure_e2e_sessions([call.peer_jid])

        node = build_terminate_node(call, self._transport.generate_id())
        await self._transport.send_node(node)
        logger.info("Sent terminate for call %s to %s", call.id, call.peer_jid)
        return True

    def resolve_call(self, call_id: Optional[str] = None) -> Call:
        if call_id:
            call = self._calls.get(call_id)
        else:
            call = self._calls.find_first(lambda c: c.state in OUTGOING_STATES or c.is_group)
        if call is None:
            raise CallNotFoundError(call_id)
        return call


def build_terminate_node(call: Call, stanza_id: str) -> ProtocolNode:
    peer = call.peer_jid.to_string(legacy=True)
    return smax(
        "call",
        {"to": peer, "id": stanza_id},
        [smax("terminate", {"call-id": call.id, "call-creator": peer})],
    )
