"""Nutrition enrichment providers (used by the food extractor)."""

from src.providers.nutrition.nutritionix_provider import NutritionixProvider

__all__ = ["NutritionixProvider"]
