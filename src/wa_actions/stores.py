"""Collaborator interfaces the composer is built from.

The composer only reads these; storage, indexing and mutation belong to
whoever implements them (the bridge, or the in-memory registries in
:mod:`wa_actions.memory`).
"""

from collections.abc import Callable, Iterable
from typing import Any, Optional, Protocol, runtime_checkable

from wa_actions.models.call import Call
from wa_actions.models.chat import Chat
from wa_actions.models.message import Message
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.node import ProtocolNode
from wa_actions.models.wid import Wid


@runtime_checkable
class ChatStore(Protocol):
    async def get_chat(self, chat_id: Wid) -> Optional[Chat]:
        """Return the chat or None if it is not known."""
        ...


@runtime_checkable
class CallStore(Protocol):
    """Live call registry, iterated in insertion order."""

    def get(self, call_id: str) -> Optional[Call]:
        ...

    def find_first(self, predicate: Callable[[Call], bool]) -> Optional[Call]:
        ...


@runtime_checkable
class MessageStore(Protocol):
    async def get_message_by_id(self, key: MsgKey) -> Optional[Message]:
        ...


@runtime_checkable
class GroupDirectory(Protocol):
    async def get_participants(self, chat_id: Wid) -> list[Wid]:
        ...


@runtime_checkable
class BotProfileStore(Protocol):
    async def get_persona_id(self, chat_id: Wid) -> Optional[str]:
        ...


@runtime_checkable
class PresenceSignaler(Protocol):
    """Chat-state indicators. Advisory only, last signal wins."""

    async def mark_composing(self, chat_id: Wid) -> None:
        ...

    async def mark_recording(self, chat_id: Wid) -> None:
        ...

    async def mark_paused(self, chat_id: Wid) -> None:
        ...


@runtime_checkable
class SignalingTransport(Protocol):
    def generate_id(self) -> str:
        """Fresh transport-level stanza id."""
        ...

    async def ensure_e2e_sessions(self, wids: Iterable[Wid]) -> None:
        ...

    async def send_node(self, node: ProtocolNode) -> Any:
        """Resolve when the server acknowledges the node, raise when it rejects it."""
        ...
