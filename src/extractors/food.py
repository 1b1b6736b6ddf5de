"""Food intake extractor backed by a nutrition lookup service.

Triggers when the text contains any keyword as a plain substring (so
"ate" also matches "late" or "water"; the nutrition service then decides
whether any food is actually mentioned).  On trigger the whole text is
sent to the service once, and every returned food record becomes one
``ATE_OR_DRANK`` event carrying that record as metadata.
"""

from __future__ import annotations

from src.extractors.base import BaseExtractor
from src.interfaces.nutrition_provider import INutritionProvider
from src.models.log import EventOutput, EventType
from src.utils.logging import get_logger

FOOD_KEYWORDS: tuple[str, ...] = ("ate", "drank")


class FoodExtractor(BaseExtractor):
    """Maps "I ate ..." / "I drank ..." messages to nutrition records."""

    name = "food"

    def __init__(
        self,
        nutrition_provider: INutritionProvider,
        keywords: tuple[str, ...] = FOOD_KEYWORDS,
    ) -> None:
        self._nutrition = nutrition_provider
        self._keywords = keywords
        self._logger = get_logger(__name__)

    def triggers(self, text: str) -> bool:
        return any(keyword in text for keyword in self._keywords)

    async def extract(self, text: str) -> list[EventOutput]:
        if not self.triggers(text):
            return []

        # EnrichmentError propagates and aborts the whole pipeline run.
        foods = await self._nutrition.lookup(text)
        self._logger.debug("food_extracted", foods=[f.food_name for f in foods])
        return [
            EventOutput(
                type=EventType.ATE_OR_DRANK,
                meta=food.record,
            )
            for food in foods
        ]
