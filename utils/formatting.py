from __future__ import annotations

from datetime import date


def month_name(month: int) -> str:
    """Full English month name for a 1-based month number (1 → January)."""
    # Fixed year and day 1: no rollover for any month.
    return date(2000, month, 1).strftime("%B")


def format_number(value: float | int) -> str:
    """Format a number the way a browser prints it: 8.0 → '8', 8.66 → '8.66'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_fixed(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}"


def format_px(value: float) -> str:
    return f"{format_number(value)}px"
