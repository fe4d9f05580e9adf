#!/usr/bin/env python3
"""
Temperature heat map: unit test suite.
Tests every component in isolation without hitting the network.

Run with pytest, or directly:  python test_all.py
"""
import json
import sys
import traceback

import config
from models.element import Element
from models.temperature import TemperatureRecord
from services.data_loader import DatasetError, parse_dataset
from services.document import render_document, serialize
from services.interaction import TooltipController, TooltipState, tooltip_html
from services.layout import Layout
from services.scales import (
    RDYLBU_10,
    BandScale,
    LinearScale,
    QuantizeScale,
    build_palette,
    legend_domain,
)
from utils.formatting import format_fixed, format_number, month_name


FIXTURE = {
    "baseTemperature": 8.0,
    "monthlyVariance": [
        {"year": 1900, "month": 1, "variance": -2.0},
        {"year": 1900, "month": 2, "variance": 1.0},
        {"year": 1901, "month": 1, "variance": 0.5},
    ],
}


# ═══════════════════════════════════════════════════════════════════════════════
# 1. Layout
# ═══════════════════════════════════════════════════════════════════════════════


def test_layout_inner_dimensions():
    layout = Layout()
    assert layout.inner_width == 885, f"Expected 885, got {layout.inner_width}"
    assert layout.inner_height == 300, f"Expected 300, got {layout.inner_height}"
    assert layout.origin_transform == "translate(95, 100)"
    assert layout.legend_top == 350


def test_layout_custom_margins():
    layout = Layout(width=400, height=200, margin_left=10, margin_right=10,
                    margin_top=20, margin_bottom=30)
    assert layout.inner_width == 380
    assert layout.inner_height == 150


# ═══════════════════════════════════════════════════════════════════════════════
# 2. Formatting
# ═══════════════════════════════════════════════════════════════════════════════


def test_month_names_all_twelve():
    expected = [
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ]
    got = [month_name(m) for m in range(1, 13)]
    assert got == expected, f"Expected {expected}, got {got}"


def test_format_number_browser_style():
    assert format_number(8.0) == "8"
    assert format_number(8.66) == "8.66"
    assert format_number(-1.366) == "-1.366"
    assert format_number(1753) == "1753"
    assert format_number(442.5) == "442.5"


def test_format_fixed_one_decimal():
    assert format_fixed(7.294) == "7.3"
    assert format_fixed(-2.0) == "-2.0"
    assert format_fixed(12.0) == "12.0"


# ═══════════════════════════════════════════════════════════════════════════════
# 3. Scales
# ═══════════════════════════════════════════════════════════════════════════════


def test_band_scale_distinct_domain():
    scale = BandScale.from_values([1900, 1900, 1901, 1902, 1901], (0, 300))
    assert scale.domain == (1900, 1901, 1902), f"Got {scale.domain}"
    assert scale.bandwidth == 100.0
    assert scale(1900) == 0.0
    assert scale(1902) == 200.0
    assert scale(1999) is None


def test_band_scale_months_fill_height():
    scale = BandScale.from_values(range(1, 13), (0, 300))
    assert scale.bandwidth == 25.0
    assert scale(12) + scale.bandwidth == 300.0


def test_palette_reversed_red_is_hot():
    palette = build_palette(10)
    assert len(palette) == 10
    assert palette == tuple(reversed(RDYLBU_10))
    assert palette[0] == "#313695", f"Coldest should be dark blue, got {palette[0]}"
    assert palette[-1] == "#a50026", f"Hottest should be dark red, got {palette[-1]}"


def test_palette_unknown_size():
    try:
        build_palette(2)
    except ValueError:
        return
    raise AssertionError("Expected ValueError for a 2-class palette")


def test_quantize_boundaries():
    palette = build_palette(10)
    scale = QuantizeScale((0.0, 10.0), palette)
    assert scale(0.0) == palette[0], "Domain minimum must map to first color"
    assert scale(10.0) == palette[-1], "Domain maximum must map to last color"
    mid = scale.bucket(5.0)
    assert 0 < mid < 9, f"5.0 should land in a middle bucket, got {mid}"
    assert scale.bucket(0.99) == 0
    assert scale.bucket(1.0) == 1


def test_quantize_clamps_outside_domain():
    palette = build_palette(10)
    scale = QuantizeScale((0.0, 10.0), palette)
    assert scale(-50.0) == palette[0]
    assert scale(50.0) == palette[-1]


def test_legend_domain_keeps_leading_duplicate():
    ticks = legend_domain(0, 10, 10)
    assert len(ticks) == 12, f"Expected 12 ticks, got {len(ticks)}"
    assert ticks == [0, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10], f"Got {ticks}"


def test_legend_domain_step():
    ticks = legend_domain(2.0, 4.0, 4)
    assert ticks == [2.0, 2.0, 2.5, 3.0, 3.5, 4.0]


def test_linear_scale():
    scale = LinearScale((0.0, 10.0), (0.0, 200.0))
    assert scale(0.0) == 0.0
    assert scale(5.0) == 100.0
    assert scale(10.0) == 200.0
    flat = LinearScale((3.0, 3.0), (0.0, 200.0))
    assert flat(3.0) == 100.0


# ═══════════════════════════════════════════════════════════════════════════════
# 4. Dataset parsing
# ═══════════════════════════════════════════════════════════════════════════════


def test_parse_dataset_temperatures_exact():
    dataset = parse_dataset(FIXTURE)
    assert dataset.base_temperature == 8.0
    assert len(dataset) == 3
    for raw, rec in zip(FIXTURE["monthlyVariance"], dataset):
        assert rec.year == raw["year"]
        assert rec.month == raw["month"]
        assert rec.variance == raw["variance"]
        assert rec.temperature == dataset.base_temperature + rec.variance
    assert [r.temperature for r in dataset] == [6.0, 9.0, 8.5]


def test_parse_dataset_real_values():
    payload = {
        "baseTemperature": 8.66,
        "monthlyVariance": [{"year": 1753, "month": 1, "variance": -1.366}],
    }
    rec = parse_dataset(payload).records[0]
    assert rec.temperature == 8.66 + -1.366


def test_dataset_extents_and_domains():
    dataset = parse_dataset(FIXTURE)
    assert dataset.year_extent == (1900, 1901)
    assert dataset.temperature_extent == (6.0, 9.0)
    assert dataset.years == [1900, 1901]
    assert dataset.months == [1, 2]


def test_month_index_zero_based():
    rec = TemperatureRecord(year=2000, month=1, variance=0.0, temperature=8.0)
    assert rec.month_index == 0
    dec = TemperatureRecord(year=2000, month=12, variance=0.0, temperature=8.0)
    assert dec.month_index == 11


def _expect_dataset_error(payload):
    try:
        parse_dataset(payload)
    except DatasetError:
        return
    raise AssertionError(f"Expected DatasetError for {payload!r}")


def test_parse_dataset_rejects_bad_shapes():
    _expect_dataset_error([])
    _expect_dataset_error({"monthlyVariance": []})
    _expect_dataset_error({"baseTemperature": 8.0})
    _expect_dataset_error({"baseTemperature": 8.0, "monthlyVariance": []})
    _expect_dataset_error({"baseTemperature": 8.0, "monthlyVariance": {}})
    _expect_dataset_error({"baseTemperature": 8.0, "monthlyVariance": [42]})
    _expect_dataset_error({"baseTemperature": 8.0, "monthlyVariance": [{"year": 1900}]})


# ═══════════════════════════════════════════════════════════════════════════════
# 5. Render tree + document
# ═══════════════════════════════════════════════════════════════════════════════


def test_element_append_and_lookup():
    root = Element("body")
    svg = root.append("svg", id="graph", class_="graph chart")
    cell = svg.append("rect", class_="cell", data_year=1900, data_month=0)
    assert cell.attrs == {"class": "cell", "data-year": 1900, "data-month": 0}
    assert root.find("graph") is svg
    assert root.find("missing") is None
    assert root.find_all("cell") == [cell]
    assert svg.classes == ["graph", "chart"]


def test_element_listeners():
    calls = []
    el = Element("rect").on("pointerenter", lambda x, y: calls.append((x, y)))
    el.dispatch("pointerenter", 1, 2)
    el.dispatch("pointerleave")  # no handler registered
    assert calls == [(1, 2)]


def test_serialize_escapes_text_and_attrs():
    root = Element("body")
    text = root.append("text", id="title", data_note='a "b" <c>')
    text.text = "Hot & cold"
    root.append("rect", x=442.5, width=10.0)
    out = serialize(root)
    assert 'data-note="a &quot;b&quot; &lt;c&gt;"' in out
    assert ">Hot &amp; cold</text>" in out
    assert '<rect x="442.5" width="10" />' in out


def test_render_document_wraps_page():
    root = Element("body")
    root.append("div", id="tooltip", class_="tooltip")
    page = render_document(root, title="T")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>T</title>" in page
    assert 'id="tooltip"' in page
    assert page.rstrip().endswith("</html>")
    assert "<script>" in page and page.index("<script>") < page.index("</body>")
    assert f"{config.TOOLTIP_DURATION_MS}ms" in page


def test_render_document_hover_script_settings():
    page = render_document(Element("body"))
    months = json.dumps([month_name(m) for m in range(1, 13)])
    assert f"var months = {months};" in page
    assert months.startswith('["January", "February"')
    assert f"var offset = {json.dumps(list(config.TOOLTIP_OFFSET))};" in page
    assert "var offset = [20, -40];" in page
    assert f"var opacity = {config.TOOLTIP_OPACITY};" in page
    # data-month is zero-based, so the lookup is direct
    assert "months[month]" in page


# ═══════════════════════════════════════════════════════════════════════════════
# 6. Tooltip state machine
# ═══════════════════════════════════════════════════════════════════════════════


def _tooltip():
    palette = build_palette(10)
    el = Element("div", {"id": "tooltip", "class": "tooltip"})
    return TooltipController(el, QuantizeScale((6.0, 9.0), palette)), palette


def test_tooltip_show_sets_content():
    ctrl, palette = _tooltip()
    rec = TemperatureRecord(year=1900, month=2, variance=1.0, temperature=9.0)
    ctrl.pointer_enter(rec, 100, 200)
    assert ctrl.state is TooltipState.VISIBLE
    assert ctrl.element.attrs["data-year"] == 1900
    assert ctrl.element.style["left"] == "120px"
    assert ctrl.element.style["top"] == "160px"
    assert "February" in ctrl.element.html
    assert "9.0ºC" in ctrl.element.html and "1.0ºC" in ctrl.element.html
    assert palette[-1] in ctrl.element.html
    assert ctrl.settle() == config.TOOLTIP_OPACITY


def test_tooltip_fade_is_linear():
    ctrl, _ = _tooltip()
    rec = TemperatureRecord(year=1900, month=1, variance=-2.0, temperature=6.0)
    ctrl.pointer_enter(rec, 0, 0)
    half = ctrl.advance(config.TOOLTIP_DURATION_MS / 2)
    assert abs(half - config.TOOLTIP_OPACITY / 2) < 1e-9, f"Got {half}"


def test_tooltip_hover_then_leave_hides():
    ctrl, _ = _tooltip()
    rec = TemperatureRecord(year=1900, month=1, variance=-2.0, temperature=6.0)
    ctrl.pointer_enter(rec, 10, 10)
    ctrl.settle()
    ctrl.pointer_leave()
    assert ctrl.state is TooltipState.HIDDEN
    assert ctrl.settle() == 0.0
    assert ctrl.transition is None


def test_tooltip_leave_interrupts_fade_in():
    ctrl, _ = _tooltip()
    rec = TemperatureRecord(year=1900, month=1, variance=-2.0, temperature=6.0)
    ctrl.pointer_enter(rec, 10, 10)
    ctrl.advance(config.TOOLTIP_DURATION_MS / 2)
    ctrl.pointer_leave()
    assert abs(ctrl.transition.start - config.TOOLTIP_OPACITY / 2) < 1e-9
    assert ctrl.transition.target == 0.0
    assert ctrl.settle() == 0.0


def test_tooltip_html_markup():
    rec = TemperatureRecord(year=1753, month=12, variance=-1.366, temperature=7.294)
    markup = tooltip_html(rec, "#abd9e9")
    assert '<span class="tt-year">1753</span>' in markup
    assert '<span class="tt-month">December</span>' in markup
    assert "7.3ºC" in markup and "-1.4ºC" in markup
    assert "border-color: #abd9e9" in markup


# ═══════════════════════════════════════════════════════════════════════════════
# Script entry point
# ═══════════════════════════════════════════════════════════════════════════════


def _main() -> int:
    passed = 0
    failed = 0
    tests = [(n, f) for n, f in globals().items() if n.startswith("test_") and callable(f)]
    for name, fn in tests:
        try:
            fn()
            print(f"  PASS: {name}")
            passed += 1
        except Exception:
            print(f"  FAIL: {name}")
            traceback.print_exc()
            failed += 1

    print(f"\n{'='*60}")
    print(f"  RESULTS: {passed} passed, {failed} failed out of {passed + failed} tests")
    print(f"{'='*60}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(_main())
