from .debounce import Debouncer
from .session import (
    LoadedDocument,
    LoadResult,
    OfferLetterSession,
    RenderState,
    SessionEvent,
)

__all__ = [
    "Debouncer",
    "LoadResult",
    "LoadedDocument",
    "OfferLetterSession",
    "RenderState",
    "SessionEvent",
]
