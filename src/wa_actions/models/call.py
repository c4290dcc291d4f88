"""
Call model and the call states reported by the phone.

The action layer never moves a call between states; it only reads them and
emits stanzas that make the remote side do so.
"""

from enum import Enum

from pydantic import BaseModel

from wa_actions.models.wid import Wid


class CallState(str, Enum):
    NONE = "NONE"
    INCOMING_RING = "INCOMING_RING"
    OUTGOING_RING = "OUTGOING_RING"
    OUTGOING_CALLING = "OUTGOING_CALLING"
    CONNECTING = "CONNECTING"
    CONNECTION_LOST = "CONNECTION_LOST"
    ACTIVE = "ACTIVE"
    HANDLED_REMOTELY = "HANDLED_REMOTELY"
    ENDED = "ENDED"
    REJECTED = "REJECTED"
    REMOTE_CALL_IN_PROGRESS = "REMOTE_CALL_IN_PROGRESS"
    FAILED = "FAILED"


# States from which a local terminate is a valid trigger
OUTGOING_STATES = frozenset({CallState.ACTIVE, CallState.OUTGOING_CALLING, CallState.OUTGOING_RING})


class Call(BaseModel):
    id: str
    peer_jid: Wid
    state: CallState = CallState.NONE
    is_group: bool = False
    is_video: bool = False
    offer_time: int = 0

    @property
    def can_end(self) -> bool:
        # Group calls have their own state model and skip the check
        return self.state in OUTGOING_STATES or self.is_group
