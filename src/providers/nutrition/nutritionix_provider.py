"""Nutritionix natural-language nutrition provider implementing INutritionProvider.

Sends the raw message text to ``POST /v2/natural/nutrients`` and maps the
``foods`` array to :class:`FoodItem` records.  Authentication is by the
``x-app-id`` / ``x-app-key`` header pair.

Any non-success response is an :class:`EnrichmentError`, including the
404 Nutritionix returns when it recognises no food in the text.
"""

from __future__ import annotations

import httpx

from src.config.settings import Settings
from src.interfaces.nutrition_provider import INutritionProvider
from src.models.log import FoodItem
from src.utils.errors import EnrichmentError
from src.utils.logging import get_logger

_PROVIDER_NAME = "nutritionix"


class NutritionixProvider(INutritionProvider):
    """Nutrition lookup backed by the Nutritionix natural-language API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    settings:
        Supplies app id/key, endpoint and the timezone sent with queries.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._app_id = settings.nutritionix_app_id
        self._app_key = settings.nutritionix_app_key
        self._endpoint = settings.nutritionix_endpoint
        self._timezone = settings.nutritionix_timezone
        self._logger = get_logger(__name__)

    async def lookup(self, query: str) -> list[FoodItem]:
        headers = {
            "x-app-id": self._app_id,
            "x-app-key": self._app_key,
            "Accept": "application/json",
        }
        payload = {"query": query, "timezone": self._timezone}

        try:
            response = await self._http.post(self._endpoint, json=payload, headers=headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "nutritionix_http_error",
                status=exc.response.status_code,
            )
            raise EnrichmentError(
                message=f"natural/nutrients returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise EnrichmentError(
                message=f"natural/nutrients request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        try:
            foods = [FoodItem.model_validate(item) for item in body.get("foods") or []]
        except (AttributeError, ValueError) as exc:
            raise EnrichmentError(
                message="natural/nutrients returned a malformed body",
                provider_name=_PROVIDER_NAME,
            ) from exc

        self._logger.info("nutritionix_lookup_complete", foods=len(foods))
        return foods

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._app_id and self._app_key)
