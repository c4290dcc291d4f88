"""
Bridge-backed lookups: chats, group participants, messages and bot personas.
"""

from typing import Optional
from urllib.parse import quote

from wa_actions.models.call import Call
from wa_actions.models.chat import Chat
from wa_actions.models.message import Message
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.wid import Wid
from wa_actions.transport.http import HttpClient


class HttpDirectory:
    def __init__(self, http: HttpClient):
        self._http = http

    async def get_chat(self, chat_id: Wid) -> Optional[Chat]:
        data = await self._http.get_optional(f"/chats/{quote(chat_id.to_string())}")
        return Chat.model_validate(data) if data else None

    async def get_participants(self, chat_id: Wid) -> list[Wid]:
        data = await self._http.get(f"/groups/{quote(chat_id.to_string())}/participants")
        return [Wid.parse(p["id"] if isinstance(p, dict) else p) for p in data or []]

    async def get_message_by_id(self, key: MsgKey) -> Optional[Message]:
        data = await self._http.get_optional(f"/messages/{quote(key.to_string())}")
        return Message.model_validate(data) if data else None

    async def get_persona_id(self, chat_id: Wid) -> Optional[str]:
        data = await self._http.get_optional(f"/bots/{quote(chat_id.to_string())}")
        if not data:
            return None
        return data.get("persona_id") or data.get("personaId")

    async def list_calls(self) -> list[Call]:
        data = await self._http.get("/calls")
        return [Call.model_validate(c) for c in data or []]
