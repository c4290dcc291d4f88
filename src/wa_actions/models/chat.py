"""
Chat (conversation) model: read-only to the action layer.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from wa_actions.models.wid import Wid


class Chat(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Wid
    name: Optional[str] = None
    ephemeral_duration: int = 0  # seconds, 0 = disappearing messages off
    ephemeral_setting_timestamp: Optional[int] = None
    disappearing_mode_initiator: str = "chat"

    @property
    def is_group(self) -> bool:
        return self.id.is_group()

    @property
    def is_bot(self) -> bool:
        return self.id.is_bot()

    @property
    def is_ephemeral(self) -> bool:
        return self.ephemeral_duration > 0
