"""Message classifier: decides which ingestion path a message takes.

Rules, in order:

  1. ``TEXT_TAKES_PRECEDENCE``: non-empty text → :class:`TextMessage`,
     even if photos are also attached.
  2. One or more photo sizes → :class:`PhotoMessage`.
  3. Anything else (stickers, locations, empty text) → :class:`Unhandled`.

Pure function of the payload; no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.models.telegram import PhotoSize, TelegramMessage


@dataclass(frozen=True)
class TextMessage:
    text: str


@dataclass(frozen=True)
class PhotoMessage:
    photos: tuple[PhotoSize, ...]


@dataclass(frozen=True)
class Unhandled:
    reason: str = "no text or photo"


Classification = TextMessage | PhotoMessage | Unhandled


def classify(message: TelegramMessage) -> Classification:
    """Classify an inbound message into text, photo, or unhandled."""
    # TEXT_TAKES_PRECEDENCE: a message with both text and photos is a text log.
    if message.text:
        return TextMessage(text=message.text)
    if message.photo:
        return PhotoMessage(photos=tuple(message.photo))
    return Unhandled()
