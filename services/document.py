"""
Serialize a render tree into a standalone HTML page.

The page carries the chart as inline SVG, a small stylesheet, and a script
that reproduces TooltipController's hover behaviour in the browser (same
offsets, opacity, fade duration and tooltip markup).
"""
from __future__ import annotations

import html
import json
import logging
from pathlib import Path
from typing import Any

import config
from models.element import Element
from utils.formatting import format_number, month_name

logger = logging.getLogger("temperature_heatmap.document")

# SVG leaves written as <tag ... />
_SELF_CLOSING = {"rect", "line", "path", "circle"}

PAGE_CSS = """
body { font-family: sans-serif; background: #f4f4f4; margin: 0; }
.container { display: flex; justify-content: center; padding: 2rem 0; }
.graph { background: #fff; box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15); }
.title { font-size: 24px; font-weight: bold; text-anchor: middle; }
.subtitle { font-size: 16px; text-anchor: middle; }
.axis .label { fill: #333; font-size: 14px; text-anchor: end; }
.cell:hover { stroke: #000; stroke-width: 1px; }
.tooltip {
  position: absolute;
  pointer-events: none;
  padding: 6px 10px;
  border-radius: 4px;
  background: #222;
  color: #fff;
  font-size: 12px;
  text-align: center;
  transition: opacity %(duration)dms;
}
.tooltip .tt-color { border-width: 4px 0 0 0; border-style: solid; margin: 4px 0 0; }
"""

HOVER_SCRIPT = """
(function () {
  var tooltip = document.getElementById("tooltip");
  var months = %(months)s;
  var offset = %(offset)s;
  var opacity = %(opacity)s;
  var cells = document.querySelectorAll(".cell");
  Array.prototype.forEach.call(cells, function (cell) {
    cell.addEventListener("mouseover", function (event) {
      var year = cell.getAttribute("data-year");
      var month = parseInt(cell.getAttribute("data-month"), 10);
      var temp = parseFloat(cell.getAttribute("data-temp"));
      var variance = parseFloat(cell.getAttribute("data-variance"));
      tooltip.style.opacity = opacity;
      tooltip.style.top = (event.pageY + offset[1]) + "px";
      tooltip.style.left = (event.pageX + offset[0]) + "px";
      tooltip.setAttribute("data-year", year);
      tooltip.innerHTML =
        '<span class="tt-year">' + year + '</span> - ' +
        '<span class="tt-month">' + months[month] + '</span>' +
        '<br />' +
        '<span class="tt-temperature">' + temp.toFixed(1) + 'ºC</span>' +
        '<br />' +
        '<span class="tt-variance">' + variance.toFixed(1) + 'ºC</span>' +
        '<hr class="tt-color" style="border-color: ' + cell.style.fill + '"/>';
    });
    cell.addEventListener("mouseout", function () {
      tooltip.style.opacity = 0;
    });
  });
})();
"""


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def _format_attrs(el: Element) -> str:
    parts = [
        f'{name}="{html.escape(_format_value(value))}"'
        for name, value in el.attrs.items()
        if value is not None
    ]
    if el.style:
        style = "; ".join(f"{k}: {_format_value(v)}" for k, v in el.style.items())
        parts.append(f'style="{html.escape(style)}"')
    return (" " + " ".join(parts)) if parts else ""


def serialize(el: Element, indent: int = 0) -> str:
    """Render *el* and its subtree as markup."""
    pad = "  " * indent
    attrs = _format_attrs(el)
    if el.tag in _SELF_CLOSING and not el.children and el.text is None:
        return f"{pad}<{el.tag}{attrs} />"
    if el.html is not None:
        return f"{pad}<{el.tag}{attrs}>{el.html}</{el.tag}>"
    if el.text is not None and not el.children:
        return f"{pad}<{el.tag}{attrs}>{html.escape(el.text)}</{el.tag}>"
    if not el.children:
        return f"{pad}<{el.tag}{attrs}></{el.tag}>"
    inner = "\n".join(serialize(child, indent + 1) for child in el.children)
    text = f"{pad}  {html.escape(el.text)}\n" if el.text is not None else ""
    return f"{pad}<{el.tag}{attrs}>\n{text}{inner}\n{pad}</{el.tag}>"


def render_document(root: Element, title: str = config.TITLE) -> str:
    """Full HTML page for the chart rooted at *root* (a ``body`` element)."""
    css = PAGE_CSS % {"duration": config.TOOLTIP_DURATION_MS}
    script = HOVER_SCRIPT % {
        "months": json.dumps([month_name(m) for m in range(1, 13)]),
        "offset": json.dumps(list(config.TOOLTIP_OFFSET)),
        "opacity": json.dumps(config.TOOLTIP_OPACITY),
    }
    body = serialize(root)
    # script goes last inside <body>
    body = body[: -len("</body>")] + f"<script>{script}</script>\n</body>"
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8" />\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>{css}</style>\n"
        "</head>\n"
        f"{body}\n"
        "</html>\n"
    )


def write_document(path: str | Path, document: str) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(document, encoding="utf-8")
    logger.info("Wrote %s (%d bytes)", out, len(document.encode("utf-8")))
    return out
