"""Register (or inspect, or remove) the Telegram webhook for this deployment.

Usage::

    python -m src.cli set-webhook https://lifelog.example.com/api/webhook/telegram
    python -m src.cli set-webhook            # uses FRONTEND_URL
    python -m src.cli webhook-info
    python -m src.cli delete-webhook

Reads ``TELEGRAM_BOT_KEY`` and ``TELEGRAM_API_BASE`` from the environment
or ``.env``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx

from src.config.settings import Settings
from src.utils.errors import ConfigurationError, LifelogError, TransportError

_PROVIDER_NAME = "telegram"
_WEBHOOK_PATH = "/api/webhook/telegram"


def default_webhook_url(app_settings: Settings) -> str:
    return f"{app_settings.frontend_url.rstrip('/')}{_WEBHOOK_PATH}"


async def call_bot_method(
    http_client: httpx.AsyncClient,
    app_settings: Settings,
    method: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """Call one Bot API method and return its ``result``.

    Raises
    ------
    ConfigurationError
        No bot key is configured.
    TransportError
        The request failed or Telegram answered ``ok: false``.
    """
    if not app_settings.telegram_bot_key:
        raise ConfigurationError(
            message="TELEGRAM_BOT_KEY is not set",
            provider_name=_PROVIDER_NAME,
        )

    base = app_settings.telegram_api_base.rstrip("/")
    url = f"{base}/bot{app_settings.telegram_bot_key}/{method}"
    try:
        response = await http_client.post(url, json=params or {})
        body = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise TransportError(
            message=f"{method} request failed: {type(exc).__name__}",
            provider_name=_PROVIDER_NAME,
        ) from exc

    # Telegram reports failures as ok=false with a description, usually
    # alongside a 4xx status; prefer the description.
    if not body.get("ok"):
        raise TransportError(
            message=f"{method} rejected: {body.get('description', response.status_code)}",
            provider_name=_PROVIDER_NAME,
        )
    return body.get("result")


async def set_webhook(http_client: httpx.AsyncClient, app_settings: Settings, url: str) -> Any:
    return await call_bot_method(
        http_client, app_settings, "setWebhook", {"url": url, "allowed_updates": ["message"]}
    )


async def _run(command: str, url: str | None, app_settings: Settings) -> int:
    async with httpx.AsyncClient(timeout=app_settings.http_timeout) as http_client:
        try:
            if command == "set-webhook":
                target = url or default_webhook_url(app_settings)
                await set_webhook(http_client, app_settings, target)
                print(f"Webhook set: {target}")
            elif command == "webhook-info":
                info = await call_bot_method(http_client, app_settings, "getWebhookInfo")
                print(json.dumps(info, indent=2))
            elif command == "delete-webhook":
                await call_bot_method(http_client, app_settings, "deleteWebhook")
                print("Webhook deleted")
        except LifelogError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Manage the lifelog Telegram webhook.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Webhook commands")

    set_parser = subparsers.add_parser("set-webhook", help="Point Telegram at this deployment")
    set_parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help=f"Public webhook URL (default: FRONTEND_URL + {_WEBHOOK_PATH})",
    )

    subparsers.add_parser("webhook-info", help="Show the webhook Telegram has on file")
    subparsers.add_parser("delete-webhook", help="Remove the webhook")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    exit_code = asyncio.run(_run(args.command, getattr(args, "url", None), app_settings))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
