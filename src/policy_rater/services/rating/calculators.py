# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rate arithmetic: single-rate operations and multi-rate aggregation."""

import math
from collections.abc import Sequence

from beartype import beartype

from ...models.rating import AggregationMethod, MathematicalOperation
from .helpers import round_to_decimal_places

Number = int | float


def _real_power(base: float, exponent: float) -> float:
    """Real power that never raises.

    ``0 ** 0`` is 1, ``0 ** -x`` is infinity, a negative base with a
    fractional exponent is NaN and overflow saturates to infinity.
    """
    try:
        return math.pow(base, exponent)
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        odd_exponent = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd_exponent else math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            return math.inf
        return math.nan


class RateCalculator:
    """Pure rate arithmetic used by factor, group and engine evaluation."""

    @beartype
    @staticmethod
    def apply_operation(rate: Number, operation: str, operand: Number) -> float:
        """Apply one mathematical operation to a rate.

        Args:
            rate: The current rate
            operation: One of MathematicalOperation; anything else is a no-op
            operand: Operand value (ignored by round, ceil and floor)

        Returns:
            The transformed rate
        """
        r = float(rate)
        x = float(operand)

        if operation == MathematicalOperation.ADD:
            return r + x
        if operation == MathematicalOperation.SUBTRACT:
            return r - x
        if operation == MathematicalOperation.MULTIPLY:
            return r * x
        if operation == MathematicalOperation.DIVIDE:
            # Division by zero leaves the rate unchanged
            return r / x if x != 0 else r
        if operation == MathematicalOperation.PERCENTAGE:
            return r * (1 + x / 100)
        if operation == MathematicalOperation.PERCENTAGE_OF:
            return r * (x / 100)
        if operation == MathematicalOperation.MINIMUM:
            return min(r, x)
        if operation == MathematicalOperation.MAXIMUM:
            return max(r, x)
        if operation == MathematicalOperation.AVERAGE:
            return (r + x) / 2
        if operation == MathematicalOperation.POWER:
            return _real_power(r, x)
        if operation == MathematicalOperation.ROUND:
            return round_to_decimal_places(r, 0)
        if operation == MathematicalOperation.CEIL:
            return float(math.ceil(r)) if math.isfinite(r) else r
        if operation == MathematicalOperation.FLOOR:
            return float(math.floor(r)) if math.isfinite(r) else r
        return r

    @beartype
    @staticmethod
    def aggregate(rates: Sequence[Number], method: str) -> float:
        """Combine rates with an aggregation method.

        Empty input is 0 for every method. An unknown method yields the
        first rate.
        """
        if not rates:
            return 0.0

        values = [float(rate) for rate in rates]
        if method == AggregationMethod.SUM:
            return sum(values)
        if method == AggregationMethod.PRODUCT:
            return math.prod(values)
        if method == AggregationMethod.AVERAGE:
            return sum(values) / len(values)
        if method == AggregationMethod.MINIMUM:
            return min(values)
        if method == AggregationMethod.MAXIMUM:
            return max(values)
        return values[0]
