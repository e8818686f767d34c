# parsers/base.py

from abc import ABC, abstractmethod

from .models import ExtractedDocument


class ExtractionError(RuntimeError):
    """The source document could not be read."""


class DocumentExtractor(ABC):
    @abstractmethod
    def extract(self, source: bytes) -> ExtractedDocument:
        """
        Extract positioned text fragments from a document.

        Requirements:
        - Deterministic output for same input
        - Fragments in content-stream (reading) order per page
        - Raises ExtractionError instead of returning a partial document
        """
        raise NotImplementedError
