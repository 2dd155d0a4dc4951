# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Value helpers shared by the rating stages.

Subject traversal, permissive numeric coercion, lookup key conversion and
the rounding and clamping rules applied to rates.
"""

import json
import math
import re
from collections.abc import Mapping
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from beartype import beartype

from ...constants import UNKNOWN_LOOKUP_KEY
from ...models.rating import MISSING

# Leading numeric prefix, the way parseFloat reads "12.5kg" as 12.5
_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


@beartype
def is_number(value: Any) -> bool:
    """Check if value is a real number. Booleans and NaN are not."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float | Decimal):
        return not math.isnan(value)
    return False


@beartype
def is_sequence(value: Any) -> bool:
    """Check if value is a list or tuple (strings are not sequences here)."""
    return isinstance(value, list | tuple)


@beartype
def get_nested_value(obj: Any, path: str) -> Any:
    """Get nested value from ``obj`` using dot notation.

    Returns ``MISSING`` when any step is absent or is not a mapping.
    """
    current = obj
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return MISSING
        current = current[part]
    return current


@beartype
def to_number(value: Any) -> float | None:
    """Convert value to a float if possible, else ``None``."""
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.lstrip())
        if match is None:
            return None
        return float(match.group().replace("Infinity", "inf"))
    return None


@beartype
def format_number(value: int | float | Decimal) -> str:
    """Format a number the short way: ``100.0`` -> ``"100"``."""
    if isinstance(value, int):
        return str(value)
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def _json_default(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Decimal):
        return float(value)
    return UNKNOWN_LOOKUP_KEY


@beartype
def to_lookup_key(value: Any) -> str:
    """Convert a subject value to a lookup table key."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float | Decimal):
        return format_number(value)
    if value is None:
        return "null"
    if value is MISSING:
        return "undefined"
    if isinstance(value, Mapping | list | tuple):
        try:
            return json.dumps(
                dict(value) if isinstance(value, Mapping) else list(value),
                separators=(",", ":"),
                ensure_ascii=False,
                default=_json_default,
            )
        except (TypeError, ValueError):
            return UNKNOWN_LOOKUP_KEY
    return UNKNOWN_LOOKUP_KEY


@beartype
def round_to_decimal_places(value: int | float, decimal_places: int) -> float:
    """Round to ``decimal_places`` with halves going toward +infinity.

    ``2.5`` rounds to ``3`` and ``-2.5`` to ``-2``.

    Goes through ``Decimal`` so that values such as ``1.005`` round on
    their written form rather than their binary approximation.
    """
    number = float(value)
    if not math.isfinite(number):
        return number

    amount = Decimal(repr(number))
    exponent = Decimal(1).scaleb(-decimal_places)
    with localcontext() as ctx:
        ctx.prec = max(28, amount.adjusted() + decimal_places + 2)
        rounding = ROUND_HALF_UP if amount >= 0 else ROUND_HALF_DOWN
        return float(amount.quantize(exponent, rounding=rounding))


@beartype
def clamp(
    value: int | float,
    minimum: int | float | None,
    maximum: int | float | None,
) -> float:
    """Clamp a value, applying the minimum first and then the maximum."""
    result = float(value)
    if minimum is not None and result < minimum:
        result = float(minimum)
    if maximum is not None and result > maximum:
        result = float(maximum)
    return result
