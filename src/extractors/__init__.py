"""Event extractors run by the extraction pipeline.

The set is fixed and explicit; ``default_extractors`` defines the order in
which outputs appear for a message.
"""

from src.extractors.base import BaseExtractor
from src.extractors.food import FOOD_KEYWORDS, FoodExtractor
from src.extractors.markers import (
    SLEEP_TOKEN,
    WAKE_TOKEN,
    ExactMatchExtractor,
    SleepExtractor,
    WakeExtractor,
)
from src.interfaces.nutrition_provider import INutritionProvider


def default_extractors(nutrition_provider: INutritionProvider | None) -> list[BaseExtractor]:
    """Return the standard extractor list: wake, sleep, then food.

    The food extractor is left out when no nutrition provider is
    configured.
    """
    extractors: list[BaseExtractor] = [WakeExtractor(), SleepExtractor()]
    # Deployment choice: without Nutritionix credentials food events are
    # not extracted at all; the order of the remaining extractors is fixed.
    if nutrition_provider is not None:
        extractors.append(FoodExtractor(nutrition_provider))
    return extractors


__all__ = [
    "BaseExtractor",
    "ExactMatchExtractor",
    "FOOD_KEYWORDS",
    "FoodExtractor",
    "SLEEP_TOKEN",
    "SleepExtractor",
    "WAKE_TOKEN",
    "WakeExtractor",
    "default_extractors",
]
