"""
Bridge transport: signaling, presence and message dispatch over Socket.IO.

Events (client -> bridge, each answered with the same request_id):
  node:send         one protocol node, resolves on server ack
  e2e:ensure        make sure Signal sessions exist for a set of jids
  presence:update   composing / recording / paused chat state
  message:send      a finalised message
"""

import itertools
import logging
import secrets
from typing import Any, Iterable

from wa_actions.models.message import Message
from wa_actions.models.node import ProtocolNode
from wa_actions.models.wid import Wid
from wa_actions.transport.socketio import SocketIOManager

logger = logging.getLogger(__name__)


class BridgeEvent:
    NODE_SEND = "node:send"
    E2E_ENSURE = "e2e:ensure"
    PRESENCE_UPDATE = "presence:update"
    MESSAGE_SEND = "message:send"
    # bridge -> client
    CALL_UPDATE = "call:update"
    CALL_REMOVE = "call:remove"


class ChatState:
    COMPOSING = "composing"
    RECORDING = "recording"
    PAUSED = "paused"


def _tag_prefix() -> str:
    return f"{secrets.randbelow(65536)}.{secrets.randbelow(65536)}-"


class BridgeTransport:
    def __init__(self, sio: SocketIOManager):
        self._sio = sio
        self._prefix = _tag_prefix()
        self._epoch = itertools.count(1)

    def generate_id(self) -> str:
        """Fresh stanza id, ``<n>.<n>-<counter>``."""
        return f"{self._prefix}{next(self._epoch)}"

    async def ensure_e2e_sessions(self, wids: Iterable[Wid]) -> None:
        await self._sio.emit_and_wait(BridgeEvent.E2E_ENSURE, {"jids": [w.to_string() for w in wids]})

    async def send_node(self, node: ProtocolNode) -> Any:
        logger.debug("Sending node %s", node.to_xml())
        return await self._sio.emit_and_wait(BridgeEvent.NODE_SEND, {"node": node.model_dump()})

    async def send_message(self, message: Message, wait_for_ack: bool = True) -> Any:
        return await self._sio.emit_and_wait(
            BridgeEvent.MESSAGE_SEND,
            {"message": message.to_wire(), "wait_for_ack": wait_for_ack},
        )

    async def _update_presence(self, chat_id: Wid, state: str) -> None:
        await self._sio.emit_and_wait(BridgeEvent.PRESENCE_UPDATE, {"chat_id": chat_id.to_string(), "state": state})

    async def mark_composing(self, chat_id: Wid) -> None:
        await self._update_presence(chat_id, ChatState.COMPOSING)

    async def mark_recording(self, chat_id: Wid) -> None:
        await self._update_presence(chat_id, ChatState.RECORDING)

    async def mark_paused(self, chat_id: Wid) -> None:
        await self._update_presence(chat_id, ChatState.PAUSED)
