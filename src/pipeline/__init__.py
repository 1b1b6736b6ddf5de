"""Ingestion pipeline components: classifier, extraction, indexing, orchestration."""

from src.pipeline.classifier import PhotoMessage, TextMessage, Unhandled, classify
from src.pipeline.extraction import ExtractionPipeline
from src.pipeline.index_forwarder import IndexForwarder
from src.pipeline.orchestrator import IngestionOrchestrator

__all__ = [
    "ExtractionPipeline",
    "IndexForwarder",
    "IngestionOrchestrator",
    "PhotoMessage",
    "TextMessage",
    "Unhandled",
    "classify",
]
