"""
Integration tests against a running WhatsApp bridge.

Requires environment variables:
  WA_TOKEN       bridge access token
  WA_ME          own WID, e.g. 5511999999999@c.us
  WA_BRIDGE_URL  (optional) defaults to http://localhost:21465
  WA_PEER        (optional) chat to send the test message to; defaults to WA_ME

Run: WA_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from wa_actions import AsyncWAClient, CallNotFoundError, TextMessage
from wa_actions.transport.http import DEFAULT_BASE_URL

SKIP = not os.environ.get("WA_INTEGRATION")
TOKEN = os.environ.get("WA_TOKEN", "")
ME = os.environ.get("WA_ME", "")
BASE_URL = os.environ.get("WA_BRIDGE_URL", DEFAULT_BASE_URL)
PEER = os.environ.get("WA_PEER", ME)

pytestmark = pytest.mark.skipif(SKIP, reason="WA_INTEGRATION not set")


def make_client() -> AsyncWAClient:
    return AsyncWAClient(me=ME, token=TOKEN, base_url=BASE_URL)


class TestConnection:
    @pytest.mark.asyncio
    async def test_connects_and_receives_ready(self):
        client = make_client()
        await client.connect()
        assert client.connected
        await client.close()

    @pytest.mark.asyncio
    async def test_rejects_invalid_token(self):
        client = AsyncWAClient(me=ME, token="invalid", base_url=BASE_URL)
        with pytest.raises(Exception):
            await client.connect()
        await client.close()


class TestSend:
    @pytest.mark.asyncio
    async def test_send_text_with_typing(self):
        client = make_client()
        await client.connect()
        try:
            msg = await client.send_message(PEER, TextMessage(body="wa-actions integration"), {"delay": 1})
        finally:
            await client.close()
        assert msg.id.from_me
        assert msg.body == "wa-actions integration"


class TestCalls:
    @pytest.mark.asyncio
    async def test_end_call_without_active_call(self):
        client = make_client()
        await client.connect()
        try:
            calls = await client.refresh_calls()
            if any(c.can_end for c in calls):
                pytest.skip("an endable call is in progress")
            with pytest.raises(CallNotFoundError):
                await client.end_call()
        finally:
            await client.close()
