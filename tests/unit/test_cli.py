"""Unit tests for the webhook management CLI."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.cli.set_webhook import _build_parser, call_bot_method, default_webhook_url, set_webhook
from src.utils.errors import ConfigurationError, TransportError
from tests.factories import make_settings


def _client(status: int, body: dict) -> MagicMock:
    client = MagicMock(spec=httpx.AsyncClient)
    client.post = AsyncMock(
        return_value=httpx.Response(status, json=body, request=httpx.Request("POST", "https://x.test"))
    )
    return client


class TestSetWebhook:
    @pytest.mark.asyncio
    async def test_registers_url(self) -> None:
        client = _client(200, {"ok": True, "result": True, "description": "Webhook was set"})

        result = await set_webhook(client, make_settings(), "https://lifelog.test/api/webhook/telegram")

        assert result is True
        call = client.post.await_args
        assert call.args[0] == "https://api.telegram.test/bot123:test-token/setWebhook"
        assert call.kwargs["json"] == {
            "url": "https://lifelog.test/api/webhook/telegram",
            "allowed_updates": ["message"],
        }

    @pytest.mark.asyncio
    async def test_missing_bot_key(self) -> None:
        client = _client(200, {"ok": True})
        with pytest.raises(ConfigurationError):
            await set_webhook(client, make_settings(telegram_bot_key=""), "https://x.test")
        client.post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_by_telegram(self) -> None:
        client = _client(400, {"ok": False, "description": "Bad Request: bad webhook: HTTPS url must be provided"})
        with pytest.raises(TransportError, match="HTTPS url must be provided"):
            await set_webhook(client, make_settings(), "http://insecure.test")

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        client = MagicMock(spec=httpx.AsyncClient)
        client.post = AsyncMock(side_effect=httpx.ConnectError("unreachable"))
        with pytest.raises(TransportError):
            await call_bot_method(client, make_settings(), "getWebhookInfo")


class TestParser:
    def test_default_url_from_frontend(self) -> None:
        settings = make_settings(frontend_url="https://lifelog.test/")
        assert default_webhook_url(settings) == "https://lifelog.test/api/webhook/telegram"

    def test_set_webhook_url_optional(self) -> None:
        parser = _build_parser()
        assert parser.parse_args(["set-webhook"]).url is None
        assert parser.parse_args(["set-webhook", "https://h.test/hook"]).url == "https://h.test/hook"

    def test_other_commands(self) -> None:
        parser = _build_parser()
        assert parser.parse_args(["webhook-info"]).command == "webhook-info"
        assert parser.parse_args(["delete-webhook"]).command == "delete-webhook"
