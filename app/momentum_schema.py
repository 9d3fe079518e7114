# momentum_schema.py
# FROZEN SCHEMA v1.0.0 - DO NOT MODIFY WITHOUT VERSION BUMP
# Any change to this file = breaking change = major version increment

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional, Tuple
from enum import IntEnum


class SignalKind(IntEnum):
    """
    5-state momentum classification.
    Derived from acceleration only, never from price level.
    """
    WAITING = 0      # Acceleration undefined (warmup)
    TRIM = 1         # acceleration <= -5
    CAUTION = 2      # -5 < acceleration <= 0
    BUY = 3          # 0 < acceleration < 5
    STRONG_BUY = 4   # acceleration >= 5


class ZeroBand(IntEnum):
    """
    Presentational banding for chart bars.
    Sign of the plotted value only. Not a trading signal.
    """
    BELOW = 0
    ABOVE = 1


@dataclass(frozen=True)
class PricePoint:
    """
    One monthly observation after normalization.

    - timestamp is unique within a series and orders it
    - label is derived from timestamp, never authoritative
    - price is an adjusted close, always > 0
    """
    timestamp: date
    label: str          # e.g. "Jan 24"
    price: float


@dataclass(frozen=True)
class MetricPoint:
    """
    PricePoint plus derived momentum values.

    Design principles:
    - None means structurally undefined, never zero
    - acceleration is never set without velocity
    - Immutable (frozen=True), engine builds a new series per run
    """

    SCHEMA_VERSION: ClassVar[str] = "1.0.0"

    timestamp: date
    label: str
    price: float
    velocity: Optional[float]       # 1st order ROC, percent
    acceleration: Optional[float]   # 2nd order ROC, percentage points


@dataclass(frozen=True)
class Signal:
    """Classification of a single acceleration value."""
    kind: SignalKind
    label: str

    @property
    def is_bullish(self) -> bool:
        return self.kind in (SignalKind.BUY, SignalKind.STRONG_BUY)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Output of one analysis request.
    Discarded and recomputed on re-analysis, never patched.
    """
    symbol: str
    series: Tuple[MetricPoint, ...]
    latest: MetricPoint
    signal: Signal


@dataclass(frozen=True)
class PlotPoint:
    """Canvas coordinate, only meaningful for the chart it was built for."""
    x: float
    y: float


@dataclass(frozen=True)
class BarRect:
    """Bar from a value down (or up) to the zero line."""
    x: float
    y: float
    width: float
    height: float
    band: ZeroBand


@dataclass(frozen=True)
class Domain:
    """Value range actually plotted."""
    min: float
    max: float


@dataclass(frozen=True)
class Projection:
    """
    Result of mapping a value series onto a canvas.

    Empty input yields no points and no domain.
    """
    width: float
    height: float
    padding: float
    points: Tuple[PlotPoint, ...]
    zero_y: Optional[float]
    domain: Optional[Domain]
    bars: Tuple[BarRect, ...] = ()
    first_label: Optional[str] = None
    last_label: Optional[str] = None

    @property
    def zero_visible(self) -> bool:
        """Zero line falls inside the plotting area."""
        if self.zero_y is None:
            return False
        return self.padding <= self.zero_y <= self.height - self.padding

    @property
    def last_point(self) -> Optional[PlotPoint]:
        return self.points[-1] if self.points else None

    def polyline(self) -> str:
        """Points as an SVG-style "x,y x,y" string."""
        return " ".join(f"{p.x:g},{p.y:g}" for p in self.points)
