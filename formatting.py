"""
Music Industry Simulator: Formatting & Math Helpers
Pure numeric helpers used by the status views. No state access.
"""

import math


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def round_to(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return round(value * factor) / factor


def percentage_change(old_value: float, new_value: float) -> float:
    """Percent change from old to new. A zero baseline reports 100 or 0."""
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    return (new_value - old_value) / old_value * 100


_SUFFIXES = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))


def _abbreviate(amount: float) -> str:
    for threshold, suffix in _SUFFIXES:
        if amount >= threshold:
            return f"{amount / threshold:.2f}{suffix}"
    return f"{amount:.0f}"


def format_number(num: float) -> str:
    """1234 -> '1.23K'. Non-finite values format as '0'."""
    if not math.isfinite(num):
        return "0"
    text = _abbreviate(abs(num))
    return f"-{text}" if num < 0 else text


def format_money(amount: float) -> str:
    """1234 -> '$1.23K'. Non-finite values format as '$0'."""
    if not math.isfinite(amount):
        return "$0"
    text = f"${_abbreviate(abs(amount))}"
    return f"-{text}" if amount < 0 else text


def format_time(seconds: float) -> str:
    """Seconds as M:SS or H:MM:SS."""
    if not math.isfinite(seconds) or seconds < 0:
        return "0:00"
    hours = int(seconds // 3600)
    minutes = int(seconds % 3600 // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(ms: float) -> str:
    """Milliseconds in the largest whole unit: '1.5h', '12.0s', '250ms'."""
    if not math.isfinite(ms) or ms < 0:
        return "0ms"
    seconds = ms / 1000
    for size, unit in ((86400, "d"), (3600, "h"), (60, "m"), (1, "s")):
        if seconds >= size:
            return f"{seconds / size:.1f}{unit}"
    return f"{ms:.0f}ms"


def format_percentage(value: float, is_decimal: bool = True) -> str:
    if not math.isfinite(value):
        return "0.0%"
    pct = value * 100 if is_decimal else value
    return f"{pct:.1f}%"
