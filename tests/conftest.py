"""Shared pytest fixtures for the lifelog test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from src.config.settings import Settings
from src.interfaces.chat_file_provider import IChatFileProvider
from src.interfaces.nutrition_provider import INutritionProvider
from src.interfaces.search_index_provider import ISearchIndexProvider
from src.models.log import FoodItem
from src.providers.storage.sqlite_log_store import SQLiteLogStore
from tests.factories import APPLE_RECORD, FAKE_JPEG, make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def log_store(tmp_path: Path) -> SQLiteLogStore:
    """An initialised SQLite store in a temp directory."""
    store = SQLiteLogStore(db_path=tmp_path / "lifelog.db")
    await store.initialize()
    return store


@pytest.fixture
def mock_nutrition_provider() -> MagicMock:
    """Nutrition provider returning a single apple record."""
    provider = MagicMock(spec=INutritionProvider)
    provider.lookup = AsyncMock(return_value=[FoodItem.model_validate(APPLE_RECORD)])
    provider.get_provider_name.return_value = "mock_nutrition"
    provider.is_available.return_value = True
    return provider


@pytest.fixture
def mock_index_provider() -> MagicMock:
    provider = MagicMock(spec=ISearchIndexProvider)
    provider.create_object = AsyncMock(return_value="obj-1")
    provider.search_contents = AsyncMock(return_value=[])
    provider.get_provider_name.return_value = "mock_index"
    return provider


@pytest.fixture
def mock_file_provider() -> MagicMock:
    provider = MagicMock(spec=IChatFileProvider)
    provider.download_photo = AsyncMock(return_value=FAKE_JPEG)
    provider.get_provider_name.return_value = "mock_files"
    return provider
