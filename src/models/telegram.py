"""Telegram Bot API payload models.

Only the fields lifelog reads are declared; everything else Telegram sends
is ignored.  ``from`` is a Python keyword, so the sender lives on
``TelegramMessage.from_`` with an alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    is_bot: bool = False
    first_name: str | None = None
    username: str | None = None


class PhotoSize(BaseModel):
    """One resolution of a photo.  Telegram lists sizes smallest first."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    file_id: str
    file_unique_id: str | None = None
    file_size: int | None = None
    width: int = 0
    height: int = 0


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: int | None = None
    from_: TelegramUser | None = Field(default=None, alias="from")
    date: int | None = None
    text: str | None = None
    photo: list[PhotoSize] | None = None


class TelegramUpdate(BaseModel):
    """Body of a webhook call from Telegram.

    ``message`` is optional because Telegram uses the same webhook for
    other update kinds (edited messages, channel posts, callbacks).
    """

    model_config = ConfigDict(extra="ignore")

    update_id: int | None = None
    message: TelegramMessage | None = None


class TelegramFile(BaseModel):
    """``result`` object of the ``getFile`` method."""

    model_config = ConfigDict(extra="ignore")

    file_id: str
    file_unique_id: str | None = None
    file_size: int | None = None
    file_path: str | None = None
