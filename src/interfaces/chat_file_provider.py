"""Abstract base class for chat-platform file download providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.telegram import PhotoSize


class IChatFileProvider(ABC):
    """Contract for resolving a photo message to its binary content."""

    @abstractmethod
    async def download_photo(self, photos: list[PhotoSize]) -> bytes:
        """Download the original-resolution variant of a photo.

        Parameters
        ----------
        photos:
            All size variants sent with the message, in platform order.

        Returns
        -------
        bytes
            Raw image content.

        Raises
        ------
        ValueError
            If *photos* is empty.
        src.utils.errors.TransportError
            If the metadata lookup or the download does not succeed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
