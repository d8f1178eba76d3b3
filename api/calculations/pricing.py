"""
Time and price aggregation for a calculation's service lines.

Input values come straight from the dashboard form, so numbers may arrive as
numbers, numeric strings, partially numeric strings ("1.5h") or not at all:
- duration per unit: leading float, anything unusable counts as 0
- quantity: leading integer, anything unusable (or 0) counts as 1
- line rate: used when present and not "", otherwise the calculation rate
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


class PricingError(ValueError):
    """Line values whose hours or price cannot be represented."""


def parse_float(value: Any) -> float | None:
    """
    Leading-number float parse; None when nothing numeric can be read.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(0)) if match else None
    return None


def line_rate(value: Any) -> float | None:
    """
    The line's own hourly rate, or None when the line has no override.
    """
    if value is None or value == "":
        return None
    return parse_float(value)


@dataclass(frozen=True)
class PricedLine:
    beschreibung: Any
    dauer_pro_einheit: float
    anzahl: int
    gesamtdauer: float
    info: Any
    stundensatz: float | None
    preis: float


@dataclass(frozen=True)
class CalculationTotals:
    gesamtzeit: float
    gesamtpreis: float
    lines: tuple[PricedLine, ...]


def _finite_product(left: float, right: float) -> float:
    try:
        product = left * right
    except OverflowError as exc:
        raise PricingError("Zahlenwert zu groß") from exc
    if not math.isfinite(product):
        raise PricingError("Zahlenwert zu groß")
    return product


def price_line(line: Mapping[str, Any], base_rate: float) -> PricedLine:
    dauer = parse_float(line.get("dauer_pro_einheit")) or 0.0
    anzahl = parse_int(line.get("anzahl")) or 1
    hours = _finite_product(dauer, anzahl)
    own_rate = line_rate(line.get("stundensatz"))
    effective_rate = own_rate if own_rate is not None else base_rate
    preis = _finite_product(hours, effective_rate)
    return PricedLine(
        beschreibung=line.get("beschreibung"),
        dauer_pro_einheit=dauer,
        anzahl=anzahl,
        gesamtdauer=hours,
        info=line.get("info") or None,
        stundensatz=own_rate,
        preis=preis,
    )


def summarize(lines: Iterable[Mapping[str, Any]], base_rate: float) -> CalculationTotals:
    priced = tuple(price_line(line, base_rate) for line in lines)
    gesamtzeit = sum(line.gesamtdauer for line in priced)
    gesamtpreis = sum(line.preis for line in priced)
    if not (math.isfinite(gesamtzeit) and math.isfinite(gesamtpreis)):
        raise PricingError("Zahlenwert zu groß")
    return CalculationTotals(gesamtzeit=gesamtzeit, gesamtpreis=gesamtpreis, lines=priced)
