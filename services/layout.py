from __future__ import annotations

from dataclasses import dataclass

import config


@dataclass(frozen=True)
class Layout:
    """Fixed chart geometry. Inner dimensions are what the grid is drawn in."""

    width: int = config.CHART_WIDTH
    height: int = config.CHART_HEIGHT
    margin_top: int = config.MARGIN["top"]
    margin_right: int = config.MARGIN["right"]
    margin_bottom: int = config.MARGIN["bottom"]
    margin_left: int = config.MARGIN["left"]
    legend_offset: int = config.LEGEND_OFFSET
    legend_item_size: int = config.LEGEND_ITEM_SIZE

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom

    @property
    def origin_transform(self) -> str:
        """SVG transform placing (0, 0) at the top-left of the plot area."""
        return f"translate({self.margin_left}, {self.margin_top})"

    @property
    def legend_top(self) -> int:
        return self.inner_height + self.legend_offset
