# chart_projection.py
# Maps value series onto canvas coordinates
# No rendering library. Geometry only.

import math
from dataclasses import replace
from typing import List, Optional, Sequence

from momentum_schema import BarRect, Domain, MetricPoint, PlotPoint, Projection, ZeroBand
from series_integrity import finite_or_none

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 150
DEFAULT_PADDING = 20
BAR_WIDTH = 4

PLOTTABLE_FIELDS = ("price", "velocity", "acceleration")


def band_for(value: float) -> ZeroBand:
    """
    Bar colour band, by sign only.

    Independent of the signal classifier: -2 is BELOW here but CAUTION there.
    """
    return ZeroBand.ABOVE if value >= 0 else ZeroBand.BELOW


class ChartProjector:
    """
    Projects a numeric series onto a fixed-size canvas.

    Layout:
    - x evenly spaced over [padding, width - padding], index order
    - y maps [min, max] onto [height - padding, padding] (larger = higher)
    - Flat series: range of 1 centred on the value, line sits mid-canvas
    - Single point: placed on the left edge
    - Empty series: no points, no domain
    - Span too wide for a float: values rescaled by their largest magnitude

    Never raises on series content. The only failure is a canvas whose
    padding is negative or exceeds half its width or height, at construction.
    """

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        padding: float = DEFAULT_PADDING,
    ):
        if padding < 0:
            raise ValueError(f"Invalid padding: {padding} (negative)")
        if width < 2 * padding or height < 2 * padding:
            raise ValueError(
                f"Canvas {width}x{height} leaves no room inside padding {padding}"
            )

        self.width = width
        self.height = height
        self.padding = padding

    def _x(self, i: int, n: int) -> float:
        if n < 2:
            return self.padding
        return self.padding + (i / (n - 1)) * (self.width - 2 * self.padding)

    def _y(self, value: float, low: float, span: float) -> float:
        return self.height - self.padding - ((value - low) / span) * (self.height - 2 * self.padding)

    def project(
        self,
        values: Sequence[Optional[float]],
        zero_line: bool = False,
        bars: bool = False,
    ) -> Projection:
        """
        Main projection function.

        Input: ordered values (None / NaN are dropped)
        Output: Projection with points, optional zero line and bars

        bars=True implies the zero line, since bars are drawn down to it.

        zero_y is returned even when it falls outside the plot area;
        Projection.zero_visible tells the caller whether to draw it.
        """
        clean = [v for v in (finite_or_none(v) for v in values) if v is not None]

        if not clean:
            return Projection(
                width=self.width,
                height=self.height,
                padding=self.padding,
                points=(),
                zero_y=None,
                domain=None,
            )

        max_val = max(clean)
        min_val = min(clean)

        scaled = clean
        if not math.isfinite(max_val - min_val):
            # Span overflows: rescale so the mapping stays finite
            scale = max(abs(min_val), abs(max_val))
            scaled = [v / scale for v in clean]

        low, high = min(scaled), max(scaled)
        if high == low:
            # Flat series: substitute a span of 1 and centre it
            low, span = low - 0.5, 1.0
        else:
            span = high - low

        n = len(scaled)
        points = tuple(
            PlotPoint(x=self._x(i, n), y=self._y(v, low, span))
            for i, v in enumerate(scaled)
        )

        zero_y = self._y(0.0, low, span) if (zero_line or bars) else None

        bar_rects = ()
        if bars:
            bar_rects = self._bars(clean, points, zero_y)

        return Projection(
            width=self.width,
            height=self.height,
            padding=self.padding,
            points=points,
            zero_y=zero_y,
            domain=Domain(min=min_val, max=max_val),
            bars=bar_rects,
        )

    def _bars(
        self,
        values: List[float],
        points: Sequence[PlotPoint],
        zero_y: float,
    ) -> tuple:
        """One bar per point after the first, from value to zero line"""
        bars = []
        for i in range(1, len(values)):
            value, point = values[i], points[i]
            band = band_for(value)
            bars.append(
                BarRect(
                    x=point.x - BAR_WIDTH / 2,
                    y=point.y if band == ZeroBand.ABOVE else zero_y,
                    width=BAR_WIDTH,
                    height=abs(point.y - zero_y),
                    band=band,
                )
            )
        return tuple(bars)

    def project_field(
        self,
        series: Sequence[MetricPoint],
        field: str,
        zero_line: bool = False,
        bars: bool = False,
    ) -> Projection:
        """
        Project one MetricPoint field, skipping points where it is absent.

        Labels of the first and last plotted points are attached.
        """
        if field not in PLOTTABLE_FIELDS:
            raise ValueError(f"Unknown field {field!r}, expected one of {PLOTTABLE_FIELDS}")

        plotted = [
            p for p in series
            if finite_or_none(getattr(p, field)) is not None
        ]
        projection = self.project([getattr(p, field) for p in plotted], zero_line=zero_line, bars=bars)

        if not plotted:
            return projection

        return replace(
            projection,
            first_label=plotted[0].label,
            last_label=plotted[-1].label,
        )


def project(
    values: Sequence[Optional[float]],
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    padding: float = DEFAULT_PADDING,
    zero_line: bool = False,
    bars: bool = False,
) -> Projection:
    """One-shot projection onto a width x height canvas."""
    return ChartProjector(width, height, padding).project(values, zero_line=zero_line, bars=bars)
