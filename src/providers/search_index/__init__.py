"""Semantic search index providers.

OperandIndexProvider pushes logs into an Operand collection and searches
them by natural-language query.
"""

from src.providers.search_index.operand_provider import OperandIndexProvider

__all__ = ["OperandIndexProvider"]
