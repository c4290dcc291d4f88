"""Shared fakes and fixtures."""

from typing import Any, Iterable, Optional

import pytest

from wa_actions.composer import ActionComposer
from wa_actions.memory import (
    InMemoryBotProfileStore,
    InMemoryCallStore,
    InMemoryGroupDirectory,
    InMemoryMessageStore,
)
from wa_actions.models.chat import Chat
from wa_actions.models.node import ProtocolNode
from wa_actions.models.wid import Wid

ME = Wid.parse("5511900000000@c.us")
PEER = Wid.parse("5511911111111@c.us")
GROUP = Wid.parse("120363000000000001@g.us")
BOT = Wid.parse("13135550002@bot")


class FakePresence:
    """Records chat-state signals in order."""

    def __init__(self, fail: bool = False) -> None:
        self.signals: list[tuple[str, Wid]] = []
        self.fail = fail

    async def _mark(self, state: str, chat_id: Wid) -> None:
        self.signals.append((state, chat_id))
        if self.fail:
            raise RuntimeError("presence unavailable")

    async def mark_composing(self, chat_id: Wid) -> None:
        await self._mark("composing", chat_id)

    async def mark_recording(self, chat_id: Wid) -> None:
        await self._mark("recording", chat_id)

    async def mark_paused(self, chat_id: Wid) -> None:
        await self._mark("paused", chat_id)


class FakeTransport:
    """Records e2e requests and sent nodes; can be told to fail."""

    def __init__(self) -> None:
        self.e2e_requests: list[list[Wid]] = []
        self.nodes: list[ProtocolNode] = []
        self.send_error: Optional[Exception] = None
        self.e2e_error: Optional[Exception] = None
        self._counter = 0

    def generate_id(self) -> str:
        self._counter += 1
        return f"1234.5678-{self._counter}"

    async def ensure_e2e_sessions(self, wids: Iterable[Wid]) -> None:
        self.e2e_requests.append(list(wids))
        if self.e2e_error:
            raise self.e2e_error

    async def send_node(self, node: ProtocolNode) -> Any:
        if self.send_error:
            raise self.send_error
        self.nodes.append(node)
        return None


@pytest.fixture()
def presence() -> FakePresence:
    return FakePresence()


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def calls() -> InMemoryCallStore:
    return InMemoryCallStore()


@pytest.fixture()
def messages() -> InMemoryMessageStore:
    return InMemoryMessageStore()


@pytest.fixture()
def groups() -> InMemoryGroupDirectory:
    return InMemoryGroupDirectory()


@pytest.fixture()
def bots() -> InMemoryBotProfileStore:
    return InMemoryBotProfileStore()


@pytest.fixture()
def composer(
    calls: InMemoryCallStore,
    messages: InMemoryMessageStore,
    groups: InMemoryGroupDirectory,
    bots: InMemoryBotProfileStore,
    presence: FakePresence,
    transport: FakeTransport,
) -> ActionComposer:
    return ActionComposer(
        me=ME,
        calls=calls,
        messages=messages,
        groups=groups,
        bots=bots,
        presence=presence,
        transport=transport,
    )


@pytest.fixture()
def direct_chat() -> Chat:
    return Chat(id=PEER)


@pytest.fixture()
def group_chat() -> Chat:
    return Chat(id=GROUP, name="Team")
