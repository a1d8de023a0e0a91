from __future__ import annotations

from typing import Union

from ..models.common import Finite, Unbounded

UNBOUNDED_SYMBOL = "∞"

Displayable = Union[float, int, Finite, Unbounded]


def _unwrap(value: Displayable):
    if isinstance(value, Unbounded):
        return None
    if isinstance(value, Finite):
        return value.value
    return value


def format_currency(value: Displayable, compact: bool = False) -> str:
    number = _unwrap(value)
    if number is None:
        return UNBOUNDED_SYMBOL
    sign = "-" if number < 0 else ""
    magnitude = abs(number)
    if compact and magnitude >= 1_000_000:
        return f"{sign}${magnitude / 1_000_000:.1f}M"
    if compact and magnitude >= 1_000:
        return f"{sign}${magnitude / 1_000:.1f}K"
    return f"{sign}${magnitude:,.0f}"


def format_percent(value: Displayable, decimals: int = 1) -> str:
    number = _unwrap(value)
    if number is None:
        return UNBOUNDED_SYMBOL
    return f"{number * 100:.{decimals}f}%"


def format_number(value: Displayable, decimals: int = 0) -> str:
    number = _unwrap(value)
    if number is None:
        return UNBOUNDED_SYMBOL
    return f"{number:,.{decimals}f}"
