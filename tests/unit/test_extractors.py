"""Unit tests for the wake/sleep marker and food extractors."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.extractors import (
    FoodExtractor,
    SleepExtractor,
    WakeExtractor,
    default_extractors,
)
from src.interfaces.nutrition_provider import INutritionProvider
from src.models.log import EventType, FoodItem
from src.utils.errors import EnrichmentError
from tests.factories import APPLE_RECORD, COFFEE_RECORD


def _nutrition(*records: dict) -> MagicMock:
    provider = MagicMock(spec=INutritionProvider)
    provider.lookup = AsyncMock(return_value=[FoodItem.model_validate(r) for r in records])
    return provider


# ======================================================================
# Markers
# ======================================================================


class TestWakeExtractor:
    @pytest.mark.asyncio
    async def test_exact_token(self) -> None:
        outputs = await WakeExtractor().extract("gm")
        assert len(outputs) == 1
        assert outputs[0].type is EventType.GOOD_MORNING
        assert outputs[0].meta is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["GM", "Gm", "gm ", " gm", "gm!", "gmorning", "good morning", "gn", ""])
    async def test_anything_else_is_ignored(self, text: str) -> None:
        assert await WakeExtractor().extract(text) == []


class TestSleepExtractor:
    @pytest.mark.asyncio
    async def test_exact_token(self) -> None:
        outputs = await SleepExtractor().extract("gn")
        assert [o.type for o in outputs] == [EventType.GOOD_NIGHT]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["GN", "gn\n", "gnight", "gm"])
    async def test_anything_else_is_ignored(self, text: str) -> None:
        assert await SleepExtractor().extract(text) == []

    def test_names(self) -> None:
        assert WakeExtractor().name == "wake"
        assert SleepExtractor().name == "sleep"


# ======================================================================
# Food
# ======================================================================


class TestFoodExtractor:
    @pytest.mark.asyncio
    async def test_no_keyword_no_lookup(self) -> None:
        nutrition = _nutrition(APPLE_RECORD)
        outputs = await FoodExtractor(nutrition).extract("went for a run")
        assert outputs == []
        nutrition.lookup.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_one_lookup_with_full_text(self) -> None:
        nutrition = _nutrition(APPLE_RECORD)
        await FoodExtractor(nutrition).extract("I ate an apple")
        nutrition.lookup.assert_awaited_once_with("I ate an apple")

    @pytest.mark.asyncio
    async def test_one_output_per_food_record(self) -> None:
        nutrition = _nutrition(APPLE_RECORD, COFFEE_RECORD)
        outputs = await FoodExtractor(nutrition).extract("ate an apple and drank coffee")
        assert nutrition.lookup.await_count == 1
        assert [o.type for o in outputs] == [EventType.ATE_OR_DRANK, EventType.ATE_OR_DRANK]
        assert outputs[0].meta == APPLE_RECORD
        assert outputs[1].meta == COFFEE_RECORD

    @pytest.mark.asyncio
    async def test_meta_is_upstream_record_verbatim(self) -> None:
        record = {
            "food_name": "banana",
            "brand_name": None,
            "serving_qty": 1,
            "serving_unit": "medium",
            "nf_calories": 105,
            "nf_total_carbohydrate": 0,
            "nf_protein": 1.29,
            "alt_measures": [{"serving_weight": 118, "measure": "medium", "qty": 1}],
        }
        outputs = await FoodExtractor(_nutrition(record)).extract("ate a banana")

        assert json.dumps(outputs[0].meta) == json.dumps(record)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("drank water", True),
            ("it was late", True),
            ("ate", True),
            ("I ATE pizza", False),
            ("had lunch", False),
        ],
    )
    def test_substring_trigger(self, text: str, expected: bool) -> None:
        assert FoodExtractor(_nutrition()).triggers(text) is expected

    @pytest.mark.asyncio
    async def test_no_foods_recognised(self) -> None:
        nutrition = _nutrition()
        outputs = await FoodExtractor(nutrition).extract("running late")
        nutrition.lookup.assert_awaited_once()
        assert outputs == []

    @pytest.mark.asyncio
    async def test_enrichment_error_propagates(self) -> None:
        nutrition = MagicMock(spec=INutritionProvider)
        nutrition.lookup = AsyncMock(side_effect=EnrichmentError("HTTP 500", provider_name="nutritionix"))
        with pytest.raises(EnrichmentError):
            await FoodExtractor(nutrition).extract("I ate a sandwich")


class TestDefaultExtractors:
    def test_order_with_nutrition(self) -> None:
        extractors = default_extractors(_nutrition())
        assert [e.name for e in extractors] == ["wake", "sleep", "food"]

    def test_food_left_out_without_provider(self) -> None:
        assert [e.name for e in default_extractors(None)] == ["wake", "sleep"]
