"""
Heat-map renderer.

build_context() derives every scale from the loaded dataset once; the
render_* functions are pure with respect to that context and only append
elements to the tree they are given.

Tree produced by render_chart():

    body
    ├── div.container
    │   └── svg#graph
    │       └── g (translated by the margins)
    │           ├── g#x-axis, g#y-axis
    │           ├── text#title, text#description
    │           ├── g#legend
    │           ├── rect.cell × len(dataset)
    │           └── g#legend-x-axis
    └── div#tooltip
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import config
from models.element import Element
from models.temperature import Dataset, TemperatureRecord
from services.interaction import TooltipController
from services.layout import Layout
from services.scales import (
    BandScale,
    LinearScale,
    QuantizeScale,
    build_color_scale,
    build_grid_scales,
    build_legend_scale,
    legend_domain,
)
from utils.formatting import format_fixed, format_number, month_name

logger = logging.getLogger("temperature_heatmap.renderer")


@dataclass(frozen=True)
class RenderContext:
    """Everything the render functions need, fixed after the data loads."""

    dataset: Dataset
    layout: Layout
    x_scale: BandScale
    y_scale: BandScale
    color_scale: QuantizeScale
    legend_scale: LinearScale
    legend_ticks: tuple[float, ...]

    @property
    def palette(self) -> tuple[str, ...]:
        return self.color_scale.range

    @property
    def legend_width(self) -> float:
        return len(self.palette) * self.layout.legend_item_size

    @property
    def subtitle(self) -> str:
        min_year, max_year = self.dataset.year_extent
        return config.SUBTITLE_TEMPLATE.format(
            base=format_number(self.dataset.base_temperature),
            min_year=min_year,
            max_year=max_year,
        )


@dataclass
class RenderedChart:
    root: Element
    context: RenderContext
    tooltip: TooltipController
    cells: list[tuple[Element, TemperatureRecord]]

    def hover(self, index: int, page_x: float, page_y: float) -> None:
        """Simulate the pointer entering cell *index*."""
        self.cells[index][0].dispatch("pointerenter", page_x, page_y)

    def unhover(self, index: int) -> None:
        self.cells[index][0].dispatch("pointerleave")


def build_context(
    dataset: Dataset,
    layout: Layout | None = None,
    num_colors: int = config.NUM_COLORS,
) -> RenderContext:
    layout = layout or Layout()
    x_scale, y_scale = build_grid_scales(dataset, layout)
    color_scale = build_color_scale(dataset, num_colors)
    legend_scale = build_legend_scale(dataset, num_colors * layout.legend_item_size)
    min_temp, max_temp = dataset.temperature_extent
    return RenderContext(
        dataset=dataset,
        layout=layout,
        x_scale=x_scale,
        y_scale=y_scale,
        color_scale=color_scale,
        legend_scale=legend_scale,
        legend_ticks=tuple(legend_domain(min_temp, max_temp, num_colors)),
    )


# ── Axes ──────────────────────────────────────────────────────────────────────


def _axis_group(parent: Element, element_id: str, anchor: str) -> Element:
    return parent.append(
        "g",
        id=element_id,
        class_=f"axis {element_id}",
        fill="none",
        font_size=10,
        font_family="sans-serif",
        text_anchor=anchor,
    )


def render_bottom_axis(
    axis: Element,
    values: Sequence,
    position: Callable[[object], float],
    extent: tuple[float, float],
    label: Callable[[object], str] = str,
) -> Element:
    """Draw a horizontal axis: domain line plus one tick per value."""
    size = config.TICK_SIZE
    axis.append(
        "path",
        class_="domain",
        stroke="currentColor",
        d=f"M{format_number(extent[0])},{size}V0H{format_number(extent[1])}V{size}",
    )
    for value in values:
        tick = axis.append(
            "g", class_="tick", opacity=1,
            transform=f"translate({format_number(position(value))},0)",
        )
        tick.append("line", stroke="currentColor", y2=size)
        text = tick.append(
            "text", fill="currentColor", y=size + config.TICK_PADDING, dy="0.71em"
        )
        text.text = label(value)
    return axis


def render_left_axis(
    axis: Element,
    values: Sequence,
    position: Callable[[object], float],
    extent: tuple[float, float],
    label: Callable[[object], str] = str,
) -> Element:
    """Draw a vertical axis on the left edge."""
    size = config.TICK_SIZE
    axis.append(
        "path",
        class_="domain",
        stroke="currentColor",
        d=f"M-{size},{format_number(extent[0])}H0V{format_number(extent[1])}H-{size}",
    )
    for value in values:
        tick = axis.append(
            "g", class_="tick", opacity=1,
            transform=f"translate(0,{format_number(position(value))})",
        )
        tick.append("line", stroke="currentColor", x2=-size)
        text = tick.append(
            "text", fill="currentColor", x=-(size + config.TICK_PADDING), dy="0.32em"
        )
        text.text = label(value)
    return axis


def _band_center(scale: BandScale) -> Callable[[object], float]:
    return lambda v: scale(v) + scale.bandwidth / 2


def render_axes(graph: Element, ctx: RenderContext) -> tuple[Element, Element]:
    layout = ctx.layout

    x_axis = _axis_group(graph, "x-axis", "middle")
    x_axis.attrs["transform"] = f"translate(0, {layout.inner_height})"
    decade_years = [y for y in ctx.x_scale.domain if y % config.YEAR_TICK_INTERVAL == 0]
    render_bottom_axis(
        x_axis, decade_years, _band_center(ctx.x_scale), ctx.x_scale.range
    )
    x_label = x_axis.append("text", class_="label", x=layout.inner_width, y=50)
    x_label.text = config.X_LABEL

    y_axis = _axis_group(graph, "y-axis", "end")
    render_left_axis(
        y_axis, ctx.y_scale.domain, _band_center(ctx.y_scale), ctx.y_scale.range,
        label=month_name,
    )
    y_label = y_axis.append(
        "text", class_="label", transform="rotate(-90)", x=0, y=-65
    )
    y_label.text = config.Y_LABEL
    return x_axis, y_axis


# ── Headers ───────────────────────────────────────────────────────────────────


def render_headers(graph: Element, ctx: RenderContext) -> tuple[Element, Element]:
    layout = ctx.layout
    title = graph.append(
        "text", id="title", class_="title",
        x=layout.inner_width / 2, y=-layout.margin_top / 2 - 5,
    )
    title.text = config.TITLE
    subtitle = graph.append(
        "text", id="description", class_="subtitle",
        x=layout.inner_width / 2, y=-layout.margin_top / 2 + 30,
    )
    subtitle.text = ctx.subtitle
    return title, subtitle


# ── Cells ─────────────────────────────────────────────────────────────────────


def render_cell(
    graph: Element, record: TemperatureRecord, ctx: RenderContext
) -> Element:
    cell = graph.append(
        "rect",
        class_="cell",
        data_year=record.year,
        # zero-based on purpose: consumers of data-month index January as 0
        data_month=record.month_index,
        data_temp=record.temperature,
        data_variance=record.variance,
        x=ctx.x_scale(record.year),
        y=ctx.y_scale(record.month),
        width=ctx.x_scale.bandwidth,
        height=ctx.y_scale.bandwidth,
    )
    cell.style["fill"] = ctx.color_scale(record.temperature)
    return cell


def render_cells(
    graph: Element, ctx: RenderContext, tooltip: TooltipController
) -> list[tuple[Element, TemperatureRecord]]:
    cells = []
    for record in ctx.dataset:
        cell = render_cell(graph, record, ctx)
        cell.on("pointerenter", lambda x, y, r=record: tooltip.pointer_enter(r, x, y))
        cell.on("pointerleave", tooltip.pointer_leave)
        cells.append((cell, record))
    return cells


# ── Legend ────────────────────────────────────────────────────────────────────


def render_legend(graph: Element, ctx: RenderContext) -> Element:
    """Palette swatches, one per color, left to right."""
    layout = ctx.layout
    size = layout.legend_item_size

    legend = graph.append(
        "g", id="legend", class_="legend",
        transform=f"translate(0,{layout.legend_top})",
    )
    for i, color in enumerate(ctx.palette):
        item = legend.append(
            "rect", class_="legend-item", x=size * i, y=0, width=size, height=size
        )
        item.style["fill"] = color
    return legend


def render_legend_axis(graph: Element, ctx: RenderContext) -> Element:
    layout = ctx.layout
    size = layout.legend_item_size
    legend_axis = _axis_group(graph, "legend-x-axis", "middle")
    legend_axis.attrs["transform"] = f"translate(0, {layout.legend_top + size})"
    render_bottom_axis(
        legend_axis,
        ctx.legend_ticks,
        ctx.legend_scale,
        ctx.legend_scale.range,
        label=format_fixed,
    )
    return legend_axis


# ── Chart ─────────────────────────────────────────────────────────────────────


def render_chart(ctx: RenderContext) -> RenderedChart:
    layout = ctx.layout
    root = Element("body")
    svg = root.append("div", class_="container").append(
        "svg", id="graph", class_="graph", width=layout.width, height=layout.height
    )
    graph = svg.append("g", transform=layout.origin_transform)

    render_axes(graph, ctx)
    render_headers(graph, ctx)
    render_legend(graph, ctx)

    tooltip_el = root.append("div", id="tooltip", class_="tooltip")
    tooltip = TooltipController(tooltip_el, ctx.color_scale)
    cells = render_cells(graph, ctx, tooltip)
    render_legend_axis(graph, ctx)

    logger.info(
        "Rendered %d cells (%d years x %d months), %d legend ticks",
        len(cells), len(ctx.x_scale.domain), len(ctx.y_scale.domain),
        len(ctx.legend_ticks),
    )
    return RenderedChart(root=root, context=ctx, tooltip=tooltip, cells=cells)


def render(dataset: Dataset, layout: Layout | None = None) -> RenderedChart:
    return render_chart(build_context(dataset, layout))
