"""
Send options and their defaults.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from wa_actions.errors import InvalidOptionsError


class SendMessageOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    delay: float = 0  # seconds of simulated typing/recording before sending
    message_id: Optional[Any] = None  # MsgKey or its string form
    mentioned_list: Optional[Any] = None  # validated by the composer, not here
    detect_mentioned: bool = True
    quoted_msg: Optional[Any] = None  # Message, MsgKey or its string form
    wait_for_ack: bool = True


DEFAULT_SEND_OPTIONS = SendMessageOptions()


def merge_options(options: Union[SendMessageOptions, dict[str, Any], None] = None) -> SendMessageOptions:
    """Apply *options* over the defaults. Unknown keys are rejected."""
    if options is None:
        return DEFAULT_SEND_OPTIONS.model_copy()
    if isinstance(options, SendMessageOptions):
        return options.model_copy()
    try:
        return SendMessageOptions.model_validate(options)
    except ValidationError as e:
        raise InvalidOptionsError(
            f"Invalid send options: {e.error_count()} error(s)",
            {"errors": [err["loc"] for err in e.errors()]},
        )
