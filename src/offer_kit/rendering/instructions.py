# rendering/instructions.py

from dataclasses import dataclass
from typing import Literal, Protocol

from offer_kit.parsers.models import Transform

from .fonts import WebFamily


def multiply(m1: Transform, m2: Transform) -> Transform:
    """Concatenate two affine transforms, applying ``m2`` first."""
    return (
        m1[0] * m2[0] + m1[2] * m2[1],
        m1[1] * m2[0] + m1[3] * m2[1],
        m1[0] * m2[2] + m1[2] * m2[3],
        m1[1] * m2[2] + m1[3] * m2[3],
        m1[0] * m2[4] + m1[2] * m2[5] + m1[4],
        m1[1] * m2[4] + m1[3] * m2[5] + m1[5],
    )


@dataclass(frozen=True)
class Viewport:
    """Maps PDF user space (points, y up) onto a pixel grid (y down)."""

    width: float
    height: float
    scale: float = 1.0

    @property
    def transform(self) -> Transform:
        s = self.scale
        return (s, 0.0, 0.0, -s, 0.0, self.height * s)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return round(self.width * self.scale), round(self.height * self.scale)


@dataclass(frozen=True)
class FontSpec:
    family: WebFamily
    size: float


@dataclass(frozen=True)
class TextMetrics:
    width: float
    ascent: float | None = None
    descent: float | None = None


class TextMeasurer(Protocol):
    def measure(self, text: str, font: FontSpec) -> TextMetrics: ...


EraseMode = Literal["fill", "punch"]


@dataclass(frozen=True)
class EraseRect:
    x: float
    y: float
    width: float
    height: float
    mode: EraseMode = "fill"


@dataclass(frozen=True)
class DrawText:
    x: float  # baseline start
    y: float
    text: str
    font: FontSpec
    flagged: bool = False


Instruction = EraseRect | DrawText
