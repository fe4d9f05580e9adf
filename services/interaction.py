"""
Tooltip hover behaviour.

Two states, HIDDEN and VISIBLE, switched by pointer-enter / pointer-leave on
a cell.  Each switch starts an opacity fade; a new event interrupts the fade
in flight and restarts from the current opacity (last event wins).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import config
from models.element import Element
from models.temperature import TemperatureRecord
from services.scales import QuantizeScale
from utils.formatting import format_fixed, format_number, format_px, month_name

logger = logging.getLogger("temperature_heatmap.interaction")


class TooltipState(Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


@dataclass
class Transition:
    start: float
    target: float
    duration_ms: float
    elapsed_ms: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed_ms >= self.duration_ms

    @property
    def value(self) -> float:
        if self.duration_ms <= 0 or self.done:
            return self.target
        t = self.elapsed_ms / self.duration_ms
        return self.start + (self.target - self.start) * t


def tooltip_html(record: TemperatureRecord, color: str) -> str:
    """Inner markup of the tooltip for *record*."""
    return (
        f'<span class="tt-year">{record.year}</span> - '
        f'<span class="tt-month">{month_name(record.month)}</span>'
        f"<br />"
        f'<span class="tt-temperature">{format_fixed(record.temperature)}ºC</span>'
        f"<br />"
        f'<span class="tt-variance">{format_fixed(record.variance)}ºC</span>'
        f'<hr class="tt-color" style="border-color: {color}"/>'
    )


class TooltipController:
    """Drives the tooltip element from per-cell pointer events."""

    def __init__(
        self,
        element: Element,
        color_scale: QuantizeScale,
        opacity: float = config.TOOLTIP_OPACITY,
        duration_ms: float = config.TOOLTIP_DURATION_MS,
        offset: tuple[float, float] = config.TOOLTIP_OFFSET,
    ) -> None:
        self.element = element
        self._color_scale = color_scale
        self._opacity = opacity
        self._duration_ms = duration_ms
        self._offset = offset
        self.state = TooltipState.HIDDEN
        self.transition: Transition | None = None
        self.element.style["opacity"] = 0

    @property
    def opacity(self) -> float:
        return float(self.element.style.get("opacity", 0))

    def _fade_to(self, target: float) -> None:
        self.transition = Transition(self.opacity, target, self._duration_ms)

    def pointer_enter(
        self, record: TemperatureRecord, page_x: float, page_y: float
    ) -> None:
        self._fade_to(self._opacity)
        dx, dy = self._offset
        self.element.style["top"] = format_px(page_y + dy)
        self.element.style["left"] = format_px(page_x + dx)
        self.element.attrs["data-year"] = record.year
        self.element.html = tooltip_html(record, self._color_scale(record.temperature))
        self.state = TooltipState.VISIBLE
        logger.debug(
            "Tooltip shown for %d-%02d at (%s, %s)",
            record.year, record.month, format_number(page_x), format_number(page_y),
        )

    def pointer_leave(self) -> None:
        self._fade_to(0.0)
        self.state = TooltipState.HIDDEN

    def advance(self, ms: float) -> float:
        """Move the current fade forward by *ms*; returns the new opacity."""
        if self.transition is not None:
            self.transition.elapsed_ms += ms
            self.element.style["opacity"] = self.transition.value
            if self.transition.done:
                self.transition = None
        return self.opacity

    def settle(self) -> float:
        """Finish the current fade."""
        if self.transition is not None:
            return self.advance(self.transition.duration_ms - self.transition.elapsed_ms)
        return self.opacity
