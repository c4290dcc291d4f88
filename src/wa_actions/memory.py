"""
In-memory registries.

Used as the client's live call registry (fed by bridge events) and as
deterministic stand-ins for the bridge lookups in tests.
"""

from collections.abc import Callable, Iterable
from typing import Optional

from wa_actions.models.call import Call
from wa_actions.models.chat import Chat
from wa_actions.models.message import Message
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.wid import Wid


class InMemoryChatStore:
    def __init__(self, chats: Iterable[Chat] = ()):
        self._chats: dict[Wid, Chat] = {c.id: c for c in chats}

    def add(self, chat: Chat) -> None:
        self._chats[chat.id] = chat

    async def get_chat(self, chat_id: Wid) -> Optional[Chat]:
        return self._chats.get(chat_id)


class InMemoryCallStore:
    """Calls keyed by id; iteration follows insertion order."""

    def __init__(self, calls: Iterable[Call] = ()):
        self._calls: dict[str, Call] = {}
        for call in calls:
            self.upsert(call)

    def upsert(self, call: Call) -> None:
        self._calls[call.id] = call

    def remove(self, call_id: str) -> Optional[Call]:
        return self._calls.pop(call_id, None)

    def get(self, call_id: str) -> Optional[Call]:
        return self._calls.get(call_id)

    def find_first(self, predicate: Callable[[Call], bool]) -> Optional[Call]:
        return next((c for c in self._calls.values() if predicate(c)), None)

    def all(self) -> list[Call]:
        return list(self._calls.values())

    def __len__(self) -> int:
        return len(self._calls)


class InMemoryMessageStore:
    def __init__(self, messages: Iterable[Message] = ()):
        self._messages: dict[MsgKey, Message] = {m.id: m for m in messages}

    def add(self, message: Message) -> None:
        self._messages[message.id] = message

    async def get_message_by_id(self, key: MsgKey) -> Optional[Message]:
        return self._messages.get(key)


class InMemoryGroupDirectory:
    def __init__(self, groups: Optional[dict[Wid, list[Wid]]] = None):
        self._groups = dict(groups or {})

    def set_participants(self, chat_id: Wid, participants: list[Wid]) -> None:
        self._groups[chat_id] = list(participants)

    async def get_participants(self, chat_id: Wid) -> list[Wid]:
        return list(self._groups.get(chat_id, []))


class InMemoryBotProfileStore:
    def __init__(self, personas: Optional[dict[Wid, str]] = None):
        self._personas = dict(personas or {})

    def register(self, chat_id: Wid, persona_id: str) -> None:
        self._personas[chat_id] = persona_id

    async def get_persona_id(self, chat_id: Wid) -> Optional[str]:
        return self._personas.get(chat_id)
