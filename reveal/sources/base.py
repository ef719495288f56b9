"""
Base class for all share sources.
A source is any store that yields one share document per reconstruction.
"""

from abc import ABC, abstractmethod

from reveal.document import ShareDocument


class ShareSource(ABC):
    """Abstract base class for share document stores."""

    @abstractmethod
    def load(self) -> ShareDocument:
        """
        Read the share document.

        Returns:
            The parsed document.

        Raises:
            SourceError: If the store cannot be read.
            RevealError: If the stored document is malformed.
        """

    @abstractmethod
    def describe(self) -> dict:
        """Get metadata about this source (kind, location)."""

    def __str__(self) -> str:
        return self.describe().get("location", type(self).__name__)
