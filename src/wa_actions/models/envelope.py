"""
Bridge envelope: every client-to-bridge event is wrapped in one.
"""

from typing import Any, Optional
from pydantic import BaseModel


class DeviceSource(BaseModel):
    role: str  # "client" | "bridge"
    device_id: Optional[str] = None
    jid: Optional[str] = None        # Own WID of the client, canonical form


class EnvelopeMetadata(BaseModel):
    event_id: str
    request_id: Optional[str] = None
    timestamp: str
    source: DeviceSource


class BridgeError(BaseModel):
    code: str = "transport_error"
    message: str = ""
    details: Optional[dict[str, Any]] = None


class EnvelopePayload(BaseModel):
    data: Optional[Any] = None
    error: Optional[BridgeError] = None


class BridgeEnvelope(BaseModel):
    metadata: EnvelopeMetadata
    type: str
    payload: EnvelopePayload
