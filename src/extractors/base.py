"""Abstract base class for event extractors.

An extractor looks at a text log and returns zero or more
:class:`EventOutput` records.  Extractors are independent of each other:
none sees another's output.  They may call out to the network (the food
extractor does) but never touch storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.log import EventOutput


class BaseExtractor(ABC):
    """Contract for a single named extraction step."""

    name: str = "extractor"

    @abstractmethod
    async def extract(self, text: str) -> list[EventOutput]:
        """Return the events found in *text*, possibly none.

        Raises
        ------
        src.utils.errors.LifelogError
            Subclass-specific failures (e.g. ``EnrichmentError``).  The
            pipeline does not catch them.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
