"""Abstract base class for nutrition lookup (enrichment) providers.

The food extractor turns "I ate an apple" into structured nutrition
records through this interface.  The concrete adapter is
:class:`~src.providers.nutrition.nutritionix_provider.NutritionixProvider`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.log import FoodItem


class INutritionProvider(ABC):
    """Contract for natural-language nutrition lookup services."""

    @abstractmethod
    async def lookup(self, query: str) -> list[FoodItem]:
        """Resolve free text to zero or more food records.

        Parameters
        ----------
        query:
            Natural-language description, e.g. ``"I ate two eggs and toast"``.

        Returns
        -------
        list[FoodItem]
            One record per recognised food, in service order.

        Raises
        ------
        src.utils.errors.EnrichmentError
            If the upstream call does not succeed.  Not retried.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured."""
