"""Telegram Bot API file download provider implementing IChatFileProvider.

Resolving a photo takes two sequential calls:

  1. ``GET {api}/bot{token}/getFile?file_id=...`` → ``result.file_path``
  2. ``GET {api}/file/bot{token}/{file_path}``     → raw bytes

Either call failing (non-2xx, ``ok: false``, network error) raises
:class:`TransportError`.  Nothing is retried.  Error messages never
include the request URL because it embeds the bot token.
"""

from __future__ import annotations

import httpx

from src.config.settings import Settings
from src.interfaces.chat_file_provider import IChatFileProvider
from src.models.telegram import PhotoSize, TelegramFile
from src.utils.errors import TransportError
from src.utils.logging import get_logger

_PROVIDER_NAME = "telegram"


def select_original(photos: list[PhotoSize]) -> PhotoSize:
    """Return the original-resolution variant of a photo.

    Precondition (Telegram Bot API contract): sizes are ordered from
    smallest to largest, so the last entry is the uploaded original.
    """
    if not photos:
        raise ValueError("Photo message carries no size variants")
    return photos[-1]


class TelegramFileProvider(IChatFileProvider):
    """Downloads photo attachments through the Telegram Bot API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    settings:
        Supplies ``telegram_bot_key`` and ``telegram_api_base``.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._bot_key = settings.telegram_bot_key
        self._api_base = settings.telegram_api_base.rstrip("/")
        self._logger = get_logger(__name__)

    async def download_photo(self, photos: list[PhotoSize]) -> bytes:
        original = select_original(photos)
        if original.width and any(
            p.width * p.height > original.width * original.height for p in photos
        ):
            self._logger.warning(
                "telegram_photo_order_unexpected",
                file_id=original.file_id,
                sizes=len(photos),
            )

        file_path = await self._get_file_path(original.file_id)
        contents = await self._download(file_path)
        self._logger.info(
            "telegram_photo_downloaded",
            file_id=original.file_id,
            bytes=len(contents),
        )
        return contents

    async def _get_file_path(self, file_id: str) -> str:
        url = f"{self._api_base}/bot{self._bot_key}/getFile"
        try:
            response = await self._http.get(url, params={"file_id": file_id})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                message=f"getFile returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(
                message=f"getFile request failed: {type(exc).__name__}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not body.get("ok"):
            raise TransportError(
                message=f"getFile rejected: {body.get('description', 'unknown error')}",
                provider_name=_PROVIDER_NAME,
            )

        try:
            telegram_file = TelegramFile.model_validate(body.get("result") or {})
        except ValueError as exc:
            raise TransportError(
                message="getFile returned a malformed result",
                provider_name=_PROVIDER_NAME,
            ) from exc
        if not telegram_file.file_path:
            raise TransportError(
                message=f"getFile returned no file_path for {file_id}",
                provider_name=_PROVIDER_NAME,
            )
        return telegram_file.file_path

    async def _download(self, file_path: str) -> bytes:
        url = f"{self._api_base}/file/bot{self._bot_key}/{file_path}"
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                message=f"File download returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                message=f"File download failed: {type(exc).__name__}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        return response.content

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
