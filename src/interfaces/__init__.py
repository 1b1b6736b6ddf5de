"""Public interface definitions for all external service providers.

Every external service lifelog talks to is accessed through the abstract
base classes in this package.  Concrete adapters live in
``src/providers/`` and are wired together in ``src/main.py``.  Unit tests
inject mocks built from these interfaces instead of real clients.

CONCRETE PROVIDER MAP:
    Interface              →  Concrete implementation (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IChatFileProvider      →  TelegramFileProvider
    INutritionProvider     →  NutritionixProvider
    ISearchIndexProvider   →  OperandIndexProvider
    ILogStore              →  SQLiteLogStore
"""

from src.interfaces.chat_file_provider import IChatFileProvider
from src.interfaces.log_store import ILogStore
from src.interfaces.nutrition_provider import INutritionProvider
from src.interfaces.search_index_provider import ISearchIndexProvider

__all__ = [
    "IChatFileProvider",
    "ILogStore",
    "INutritionProvider",
    "ISearchIndexProvider",
]
