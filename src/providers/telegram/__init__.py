"""Telegram providers.

TelegramFileProvider resolves a photo message's largest size variant to
raw bytes via the Bot API ``getFile`` + file download endpoints.
"""

from src.providers.telegram.telegram_file_provider import TelegramFileProvider, select_original

__all__ = ["TelegramFileProvider", "select_original"]
