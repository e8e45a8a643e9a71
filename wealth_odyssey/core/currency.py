"""Display-currency conversion and labels.

The engine always works in USD. Everything here is applied after a projection
has run (or, for ``to_base``, before one starts) and never changes the
simulation itself. The exchange rate is always passed in by the caller.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Optional


class Currency(str, Enum):
    USD = "USD"
    IDR = "IDR"


def to_display(amount: float, currency: Currency, rate: float) -> float:
    """Convert a base (USD) amount into ``currency``."""
    if currency == Currency.IDR:
        return amount * rate
    return amount


def to_base(amount: float, currency: Currency, rate: float) -> float:
    """Convert an amount entered in ``currency`` back into base (USD) units."""
    if currency == Currency.IDR:
        return amount / rate
    return amount


# enough digits to quantize any finite double without InvalidOperation
_CONTEXT = Context(prec=400)


def _to_fixed(value: float, places: int) -> str:
    # JS toFixed: exact binary value, ties away from zero
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP, context=_CONTEXT))


def _to_integer(value: float, ties_away_from_zero: bool) -> int:
    # toLocaleString ties away from zero; Math.round ties toward +infinity
    if ties_away_from_zero or value >= 0:
        rounding = ROUND_HALF_UP
    else:
        rounding = ROUND_HALF_DOWN
    return int(Decimal(value).to_integral_value(rounding=rounding, context=_CONTEXT))


def _grouped(value: int, separator: str) -> str:
    return f"{value:,}".replace(",", separator)


def format_currency(amount: float, currency: Currency, rate: float, missing: str = "N/A") -> str:
    """Magnitude-scaled label for a base amount, e.g. ``$1.25M`` or ``Rp 3.2 Jt``."""
    if currency == Currency.IDR:
        idr = to_display(amount, currency, rate)
        if not math.isfinite(idr):
            return missing
        if idr >= 1e12:
            return f"Rp {_to_fixed(idr / 1e12, 2)} T"
        if idr >= 1e9:
            return f"Rp {_to_fixed(idr / 1e9, 2)} M"
        if idr >= 1e6:
            return f"Rp {_to_fixed(idr / 1e6, 1)} Jt"
        if idr >= 1e3:
            return f"Rp {_to_integer(idr / 1e3, ties_away_from_zero=False)} rb"
        return f"Rp {_grouped(_to_integer(idr, ties_away_from_zero=False), '.')}"

    if not math.isfinite(amount):
        return missing
    if amount >= 1e6:
        return f"${_to_fixed(amount / 1e6, 2)}M"
    if amount >= 1e3:
        return f"${_to_fixed(amount / 1e3, 1)}k"
    return f"${_grouped(_to_integer(amount, ties_away_from_zero=True), ',')}"


def format_years(value: Optional[float], missing: str = "N/A") -> str:
    if value is None:
        return missing
    return f"{value:.1f} years"
