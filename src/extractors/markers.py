"""Wake / sleep marker extractors.

A marker fires only when the whole message is exactly its token.  The
comparison is case-sensitive and does not strip whitespace: ``"gm"``
marks waking up, ``"GM"`` or ``"gm "`` do not.
"""

from __future__ import annotations

from src.extractors.base import BaseExtractor
from src.models.log import EventOutput, EventType

WAKE_TOKEN = "gm"
SLEEP_TOKEN = "gn"


class ExactMatchExtractor(BaseExtractor):
    """Emits one metadata-less event when the text equals *token*."""

    def __init__(self, token: str, event_type: EventType, name: str) -> None:
        self._token = token
        self._event_type = event_type
        self.name = name

    async def extract(self, text: str) -> list[EventOutput]:
        if text == self._token:
            return [EventOutput(type=self._event_type)]
        return []


class WakeExtractor(ExactMatchExtractor):
    def __init__(self, token: str = WAKE_TOKEN) -> None:
        super().__init__(token, EventType.GOOD_MORNING, name="wake")


class SleepExtractor(ExactMatchExtractor):
    def __init__(self, token: str = SLEEP_TOKEN) -> None:
        super().__init__(token, EventType.GOOD_NIGHT, name="sleep")
