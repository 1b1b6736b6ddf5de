"""Extraction pipeline: runs the fixed extractor list over one message.

Outputs are concatenated in extractor order, and within one extractor in
the order it produced them.  That order is the same whether the
extractors run one after another (default) or concurrently.

Failure policy: there is no per-extractor isolation.  The first
extractor to raise aborts the whole run and the exception propagates;
outputs already collected from other extractors are dropped.  In
concurrent mode the extractors still running are cancelled first.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from src.extractors.base import BaseExtractor
from src.models.log import EventOutput
from src.utils.concurrency import throttled_gather
from src.utils.logging import get_logger


class ExtractionPipeline:
    """Ordered, fixed collection of extractors.

    Parameters
    ----------
    extractors:
        The extractors to run, in output order.
    concurrent:
        Run extractors concurrently with ``throttled_gather``.  Output
        order is unchanged.
    """

    def __init__(self, extractors: Sequence[BaseExtractor], concurrent: bool = False) -> None:
        self._extractors = tuple(extractors)
        self._concurrent = concurrent
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def extractors(self) -> tuple[BaseExtractor, ...]:
        return self._extractors

    async def run(self, text: str) -> list[EventOutput]:
        """Return every event found in *text*, in extractor order."""
        if self._concurrent:
            per_extractor = await throttled_gather([e.extract(text) for e in self._extractors])
        else:
            per_extractor = []
            for extractor in self._extractors:
                per_extractor.append(await extractor.extract(text))

        outputs: list[EventOutput] = []
        for extractor, produced in zip(self._extractors, per_extractor):
            if produced:
                self._logger.debug(
                    "extractor_matched",
                    extractor=extractor.name,
                    outputs=len(produced),
                )
            outputs.extend(produced)
        return outputs
