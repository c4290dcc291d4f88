"""
Protocol nodes: the tagged tree a single control action is sent as.

    <call to="{peer}" id="{freshId}">
      <terminate call-id="{callId}" call-creator="{peer}"/>
    </call>
"""

from __future__ import annotations

from html import escape
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ProtocolNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    attrs: dict[str, str] = {}
    content: Optional[list[ProtocolNode]] = None

    def child(self, tag: str) -> Optional[ProtocolNode]:
        for node in self.content or []:
            if node.tag == tag:
                return node
        return None

    def to_xml(self) -> str:
        attrs = "".join(f' {k}="{escape(v, quote=True)}"' for k, v in self.attrs.items())
        if not self.content:
            return f"<{self.tag}{attrs}/>"
        inner = "".join(node.to_xml() for node in self.content)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


def smax(tag: str, attrs: Optional[dict[str, Any]] = None, content: Optional[list[ProtocolNode]] = None) -> ProtocolNode:
    """Build a node. Attribute values go through ``str()``; ``None`` values are dropped."""
    str_attrs = {k: str(v) for k, v in (attrs or {}).items() if v is not None}
    return ProtocolNode(tag=tag, attrs=str_attrs, content=content)
