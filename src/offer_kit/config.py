# src/offer_kit/config.py

from dataclasses import dataclass
from typing import Literal

EraseMode = Literal["fill", "punch"]


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for an offer letter editing session.

    Immutable. Explicit. No magic defaults from environment.
    """

    jurisdiction: str = "CA"
    debounce_ms: float = 400.0
    preview_scale: float = 1.5
    export_scale: float = 3.0
    erase_mode: EraseMode = "fill"
    export_erase_mode: EraseMode = "punch"
    highlight_flagged: bool = True

    def __post_init__(self) -> None:
        if self.debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")
        if self.preview_scale <= 0 or self.export_scale <= 0:
            raise ValueError("render scales must be > 0")


@dataclass(frozen=True)
class RuleSyncConfig:
    base_url: str
    timeout: float = 10.0
    max_retries: int = 3
    backoff: float = 0.5  # seconds; first retry wait, doubles after
