"""
Envelope construction and parsing.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from wa_actions.models.envelope import BridgeEnvelope, DeviceSource, EnvelopeMetadata, EnvelopePayload


def build_envelope(
    event_type: str,
    data: Any,
    device_id: str,
    jid: Optional[str] = None,
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    """Build a client envelope as a dict ready for Socket.IO emit."""
    envelope = BridgeEnvelope(
        metadata=EnvelopeMetadata(
            event_id=str(uuid.uuid4()),
            request_id=request_id or str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=DeviceSource(role="client", device_id=device_id, jid=jid),
        ),
        type=event_type,
        payload=EnvelopePayload(data=data),
    )
    return envelope.model_dump(exclude_none=True)


def parse_envelope(raw: dict[str, Any]) -> Optional[BridgeEnvelope]:
    """Parse a bridge envelope. Returns None if invalid."""
    try:
        return BridgeEnvelope.model_validate(raw)
    except ValueError:
        return None
