"""
Socket.IO session with the WhatsApp bridge.

Connects to {baseUrl}/wa/socket.io/ with auth={token} and resolves connect()
once the bridge emits `ready`. Requests are correlated with their replies by
the envelope request_id; everything else is fanned out to listeners.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Optional

import socketio

from wa_actions.errors import ConnectionError, TransportError
from wa_actions.transport.envelope import build_envelope, parse_envelope

SOCKETIO_PATH = "/wa/socket.io/"

# Socket.IO lifecycle events never forwarded to listeners
_LIFECYCLE_EVENTS = frozenset({"connect", "disconnect", "connect_error", "ready"})

Listener = Callable[[str, dict[str, Any]], None]

logger = logging.getLogger(__name__)


class SocketIOManager:
    def __init__(
        self,
        base_url: str,
        token: str,
        jid: Optional[str] = None,
        device_id: Optional[str] = None,
        transports: Optional[list[str]] = None,
        ready_timeout: float = 15.0,
        request_timeout: float = 20.0,
    ):
        self._base_url = base_url
        self._token = token
        self._jid = jid
        self._device_id = device_id or str(uuid.uuid4())
        self._transports = transports or ["websocket"]
        self._ready_timeout = ready_timeout
        self._request_timeout = request_timeout
        self._sio: Optional[socketio.AsyncClient] = None
        self._ready = asyncio.Event()
        self._pending: dict[str, asyncio.Future[dict[str, Any]]] = {}
        self._listeners: list[Listener] = []

    @property
    def connected(self) -> bool:
        return self._ready.is_set() and self._sio is not None and self._sio.connected

    @property
    def device_id(self) -> str:
        return self._device_id

    def add_event_handler(self, handler: Listener) -> Callable[[], None]:
        """Register *handler* for unsolicited bridge events. Returns its remover."""
        self._listeners.append(handler)

        def remove() -> None:
            if handler in self._listeners:
                self._listeners.remove(handler)
        return remove

    async def connect(self) -> None:
        if self.connected:
            return
        self._ready.clear()
        self._sio = socketio.AsyncClient()
        self._sio.on("ready", self._on_ready)
        self._sio.on("disconnect", self._on_disconnect)
        self._sio.on("*", self._on_event)

        await self._sio.connect(
            self._base_url,
            auth={"token": self._token},
            transports=self._transports,
            socketio_path=SOCKETIO_PATH,
        )
        try:
            await asyncio.wait_for(self._ready.wait(), timeout=self._ready_timeout)
        except asyncio.TimeoutError:
            await self._sio.disconnect()
            raise ConnectionError(f"Bridge sent no 'ready' within {self._ready_timeout}s")
        logger.debug("Bridge ready at %s", self._base_url)

    async def _on_ready(self, *_args: Any) -> None:
        self._ready.set()

    async def _on_disconnect(self, *_args: Any) -> None:
        self._ready.clear()
        logger.info("Bridge disconnected")
        for future in self._pending.values():
            if not future.done():
                future.set_exception(ConnectionError("Bridge disconnected"))

    async def _on_event(self, event: str, data: Any) -> None:
        if event in _LIFECYCLE_EVENTS or not isinstance(data, dict):
            return
        request_id = (data.get("metadata") or {}).get("request_id")
        future = self._pending.get(request_id) if request_id else None
        if future is not None and not future.done():
            future.set_result(data)
            return
        for listener in list(self._listeners):
            listener(event, data)

    async def emit_and_wait(self, event_type: str, data: Any, timeout: Optional[float] = None) -> Any:
        """Send *data* as *event_type* and return the data of the matching reply.

        Raises TransportError when the bridge rejects the request or does not
        answer in time.
        """
        if not self.connected:
            raise ConnectionError("Bridge not connected")
        request_id = str(uuid.uuid4())
        envelope = build_envelope(event_type, data, device_id=self._device_id, jid=self._jid, request_id=request_id)

        future: asyncio.Future[dict[str, Any]] = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        try:
            await self._sio.emit(event_type, envelope)  # type: ignore[union-attr]
            raw = await asyncio.wait_for(future, timeout=timeout or self._request_timeout)
        except asyncio.TimeoutError:
            raise TransportError(
                f"No reply to {event_type}", code="transport_timeout",
                details={"event": event_type, "request_id": request_id},
            )
        finally:
            self._pending.pop(request_id, None)

        reply = parse_envelope(raw)
        if reply is None:
            raise TransportError(f"Malformed reply to {event_type}", details={"event": event_type})
        error = reply.payload.error
        if error is not None:
            raise TransportError(error.message or f"{event_type} rejected", code=error.code, details=error.details)
        return reply.payload.data

    async def disconnect(self) -> None:
        self._ready.clear()
        if self._sio:
            await self._sio.disconnect()
            self._sio = None
