"""
Scales mapping data values to pixels and colors.

  BandScale    : discrete values (years, months) → equal pixel bands
  QuantizeScale: continuous temperature → one of N palette colors
  LinearScale  : continuous temperature → legend axis pixels

The quantize scale drives cell fills; the linear scale only positions legend
ticks.  They share a domain but are separate objects.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Sequence

import numpy as np

import config
from models.temperature import Dataset
from services.layout import Layout

logger = logging.getLogger("temperature_heatmap.scales")

# ── ColorBrewer RdYlBu (red → yellow → blue), by class count ─────────────────
SCHEME_RDYLBU: dict[int, tuple[str, ...]] = {
    3: ("#fc8d59", "#ffffbf", "#91bfdb"),
    4: ("#d7191c", "#fdae61", "#abd9e9", "#2c7bb6"),
    5: ("#d7191c", "#fdae61", "#ffffbf", "#abd9e9", "#2c7bb6"),
    6: ("#d73027", "#fc8d59", "#fee090", "#e0f3f8", "#91bfdb", "#4575b4"),
    7: ("#d73027", "#fc8d59", "#fee090", "#ffffbf", "#e0f3f8", "#91bfdb", "#4575b4"),
    8: ("#d73027", "#f46d43", "#fdae61", "#fee090",
        "#e0f3f8", "#abd9e9", "#74add1", "#4575b4"),
    9: ("#d73027", "#f46d43", "#fdae61", "#fee090", "#ffffbf",
        "#e0f3f8", "#abd9e9", "#74add1", "#4575b4"),
    10: ("#a50026", "#d73027", "#f46d43", "#fdae61", "#fee090",
         "#e0f3f8", "#abd9e9", "#74add1", "#4575b4", "#313695"),
    11: ("#a50026", "#d73027", "#f46d43", "#fdae61", "#fee090", "#ffffbf",
         "#e0f3f8", "#abd9e9", "#74add1", "#4575b4", "#313695"),
}

RDYLBU_10 = SCHEME_RDYLBU[10]


def build_palette(num_colors: int = config.NUM_COLORS) -> tuple[str, ...]:
    """RdYlBu with *num_colors* classes, reversed so the last color is hottest."""
    if num_colors not in SCHEME_RDYLBU:
        raise ValueError(
            f"RdYlBu has no {num_colors}-class scheme "
            f"(available: {min(SCHEME_RDYLBU)}-{max(SCHEME_RDYLBU)})"
        )
    return tuple(reversed(SCHEME_RDYLBU[num_colors]))


# ── Band scale ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BandScale:
    """Ordinal scale with equal-width bands and no padding."""

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    _index: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        distinct = tuple(dict.fromkeys(self.domain))
        object.__setattr__(self, "domain", distinct)
        object.__setattr__(self, "_index", {v: i for i, v in enumerate(distinct)})

    @classmethod
    def from_values(cls, values: Iterable[Hashable], range_: Sequence[float]) -> BandScale:
        return cls(tuple(values), (float(range_[0]), float(range_[1])))

    @property
    def step(self) -> float:
        if not self.domain:
            return 0.0
        return (self.range[1] - self.range[0]) / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step

    def __call__(self, value: Hashable) -> float | None:
        i = self._index.get(value)
        if i is None:
            return None
        return self.range[0] + i * self.step


# ── Quantize scale ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class QuantizeScale:
    """
    Continuous domain split into len(range) equal-width buckets.

    Thresholds follow the usual quantize construction, so the domain minimum
    maps to the first output and the maximum to the last.  Inputs outside
    the domain fall into the end buckets.
    """

    domain: tuple[float, float]
    range: tuple[str, ...]

    @property
    def thresholds(self) -> np.ndarray:
        x0, x1 = self.domain
        n = len(self.range) - 1
        i = np.arange(n, dtype=np.float64)
        return ((i + 1) * x1 - (i - n) * x0) / (n + 1)

    def bucket(self, value: float) -> int:
        return int(np.searchsorted(self.thresholds, value, side="right"))

    def __call__(self, value: float) -> str:
        return self.range[self.bucket(value)]


# ── Linear scale ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        t = (value - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)


# ── Builders ──────────────────────────────────────────────────────────────────


def legend_domain(minimum: float, maximum: float, length: int) -> list[float]:
    """
    Legend tick values: the minimum, then *length* + 1 evenly stepped values
    from minimum to maximum.  The leading minimum appears twice, giving
    length + 2 ticks in total.
    """
    step = (maximum - minimum) / length
    values = [minimum]
    for i in range(length + 1):
        values.append(minimum + i * step)
    return values


def build_grid_scales(dataset: Dataset, layout: Layout) -> tuple[BandScale, BandScale]:
    """Year → x band and month → y band over the plot area."""
    x_scale = BandScale.from_values((r.year for r in dataset), (0, layout.inner_width))
    y_scale = BandScale.from_values((r.month for r in dataset), (0, layout.inner_height))
    logger.debug(
        "Grid scales: %d years (band %.2fpx), %d months (band %.2fpx)",
        len(x_scale.domain), x_scale.bandwidth,
        len(y_scale.domain), y_scale.bandwidth,
    )
    return x_scale, y_scale


def build_color_scale(
    dataset: Dataset, num_colors: int = config.NUM_COLORS
) -> QuantizeScale:
    return QuantizeScale(dataset.temperature_extent, build_palette(num_colors))


def build_legend_scale(dataset: Dataset, legend_width: float) -> LinearScale:
    return LinearScale(dataset.temperature_extent, (0.0, float(legend_width)))
