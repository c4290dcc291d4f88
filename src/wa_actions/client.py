"""
AsyncWAClient / WAClient: main SDK clients.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Optional, Union

from wa_actions.composer import ActionComposer
from wa_actions.directory import HttpDirectory
from wa_actions.errors import ChatNotFoundError, ConnectionError, WAActionError
from wa_actions.memory import InMemoryCallStore
from wa_actions.models.call import Call
from wa_actions.models.message import Message
from wa_actions.models.options import SendMessageOptions, merge_options
from wa_actions.models.wid import Wid, assert_wid
from wa_actions.transport.bridge import BridgeEvent, BridgeTransport
from wa_actions.transport.envelope import parse_envelope
from wa_actions.transport.http import DEFAULT_BASE_URL, HttpClient
from wa_actions.transport.socketio import SocketIOManager

DEVICE_ID_FILE = Path.home() / ".wa-actions" / "device_id"

logger = logging.getLogger(__name__)


def _get_or_create_device_id(provided: Optional[str] = None) -> str:
    if provided:
        return provided
    try:
        return DEVICE_ID_FILE.read_text().strip()
    except FileNotFoundError:
        device_id = str(uuid.uuid4())
        try:
            DEVICE_ID_FILE.parent.mkdir(parents=True, exist_ok=True)
            DEVICE_ID_FILE.write_text(device_id)
        except OSError:
            pass
        return device_id


class AsyncWAClient:
    """Async bridge client (primary)."""

    def __init__(
        self,
        me: Union[str, Wid],
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        device_id: Optional[str] = None,
        transports: Optional[list[str]] = None,
        ready_timeout: float = 15.0,
        request_timeout: float = 20.0,
    ):
        self._me = assert_wid(me)
        self._token = token
        self._base_url = base_url
        self._device_id = _get_or_create_device_id(device_id)
        self._transports = transports
        self._ready_timeout = ready_timeout
        self._request_timeout = request_timeout

        self.http = HttpClient(base_url=base_url, token=token)
        self.directory = HttpDirectory(self.http)
        self.calls = InMemoryCallStore()

        self._sio: Optional[SocketIOManager] = None
        self._bridge: Optional[BridgeTransport] = None
        self._composer: Optional[ActionComposer] = None
        self._remove_handler: Optional[Any] = None

    @property
    def me(self) -> Wid:
        return self._me

    @property
    def connected(self) -> bool:
        return self._sio is not None and self._sio.connected

    async def connect(self) -> None:
        self._sio = SocketIOManager(
            base_url=self._base_url,
            token=self._token,
            jid=self._me.to_string(),
            device_id=self._device_id,
            transports=self._transports,
            ready_timeout=self._ready_timeout,
            request_timeout=self._request_timeout,
        )
        self._bridge = BridgeTransport(self._sio)
        self._composer = ActionComposer(
            me=self._me,
            calls=self.calls,
            messages=self.directory,
            groups=self.directory,
            bots=self.directory,
            presence=self._bridge,
            transport=self._bridge,
        )
        self._remove_handler = self._sio.add_event_handler(self._on_bridge_event)
        await self._sio.connect()

    async def disconnect(self) -> None:
        if self._remove_handler:
            self._remove_handler()
            self._remove_handler = None
        if self._sio:
            await self._sio.disconnect()
            self._sio = None
            self._bridge = None
            self._composer = None

    async def close(self) -> None:
        await self.disconnect()
        await self.http.close()

    def _on_bridge_event(self, event: str, raw: dict[str, Any]) -> None:
        """Keep the local call registry in sync with the phone."""
        if event not in (BridgeEvent.CALL_UPDATE, BridgeEvent.CALL_REMOVE):
            return
        envelope = parse_envelope(raw)
        data = envelope.payload.data if envelope else None
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed %s event", event)
            return
        if event == BridgeEvent.CALL_REMOVE:
            self.calls.remove(str(data.get("id")))
            return
        try:
            self.calls.upsert(Call.model_validate(data))
        except (ValueError, WAActionError) as e:
            logger.warning("Ignoring invalid call update: %s", e)

    async def refresh_calls(self) -> list[Call]:
        """Seed the local call registry from the bridge."""
        calls = await self.directory.list_calls()
        for call in calls:
            self.calls.upsert(call)
        return calls

    async def compose(
        self,
        chat_id: Union[str, Wid],
        message: Any,
        options: Union[SendMessageOptions, dict[str, Any], None] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Message:
        """Build the finalised message for *chat_id* without sending it."""
        self._ensure_connected()
        chat_wid = assert_wid(chat_id)
        chat = await self.directory.get_chat(chat_wid)
        if chat is None:
            raise ChatNotFoundError(chat_wid.to_string())
        return await self._composer.compose_outbound_message(  # type: ignore[union-attr]
            chat, message, options, cancel=cancel,
        )

    async def send_message(
        self,
        chat_id: Union[str, Wid],
        message: Any,
        options: Union[SendMessageOptions, dict[str, Any], None] = None,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> Message:
        """Compose and dispatch a message. Returns the message that was sent."""
        opts = merge_options(options)
        msg = await self.compose(chat_id, message, opts, cancel=cancel)
        await self._bridge.send_message(msg, wait_for_ack=opts.wait_for_ack)  # type: ignore[union-attr]
        logger.info("Sent message %s to %s", msg.id, msg.to)
        return msg

    async def end_call(self, call_id: Optional[str] = None) -> bool:
        """End *call_id*, or the first outgoing/active/group call."""
        self._ensure_connected()
        return await self._composer.end_call(call_id)  # type: ignore[union-attr]

    def _ensure_connected(self) -> None:
        if not self._composer or not self._sio or not self._sio.connected:
            raise ConnectionError("Not connected. Call connect() first.")


class WAClient:
    """Sync wrapper around AsyncWAClient. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncWAClient(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def calls(self) -> InMemoryCallStore:
        return self._async.calls

    @property
    def connected(self) -> bool:
        return self._async.connected

    def connect(self) -> None:
        self._run(self._async.connect())

    def disconnect(self) -> None:
        self._run(self._async.disconnect())

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def send_message(self, chat_id: Union[str, Wid], message: Any, options: Any = None) -> Message:
        return self._run(self._async.send_message(chat_id, message, options))

    def refresh_calls(self) -> list[Call]:
        return self._run(self._async.refresh_calls())

    def end_call(self, call_id: Optional[str] = None) -> bool:
        return self._run(self._async.end_call(call_id))
