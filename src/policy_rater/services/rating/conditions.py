# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Condition evaluation against a rating subject.

Evaluation never raises. Unknown operators and unexpected failures are
reported through ``ConditionResult.error`` with ``is_met=False``.
"""

from collections.abc import Callable
from typing import Any

from beartype import beartype

from ...models.rating import ConditionOperator, ConditionResult, RateCondition, Subject
from .helpers import get_nested_value, is_number, is_sequence, to_number


def _strictly_equal(left: Any, right: Any) -> bool:
    """Equality without coercion: ``True != 1`` and ``"1" != 1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) or is_number(right):
        return is_number(left) and is_number(right) and left == right
    return bool(left == right)


def _compare(predicate: Callable[[float, float], bool]) -> Callable[[Any, Any], bool]:
    def evaluate(actual: Any, expected: Any) -> bool:
        actual_number = to_number(actual)
        expected_number = to_number(expected)
        if actual_number is None or expected_number is None:
            return False
        return predicate(actual_number, expected_number)

    return evaluate


def _contains(actual: Any, expected: Any) -> bool:
    return any(_strictly_equal(actual, item) for item in expected)


def _in(actual: Any, expected: Any) -> bool:
    return is_sequence(expected) and _contains(actual, expected)


def _not_in(actual: Any, expected: Any) -> bool:
    if not is_sequence(expected):
        return True
    return not _contains(actual, expected)


def _bounds(actual: Any, expected: Any) -> tuple[float, float, float] | None:
    number = to_number(actual)
    low = to_number(expected[0])
    high = to_number(expected[1])
    if number is None or low is None or high is None:
        return None
    return number, low, high


def _between(actual: Any, expected: Any) -> bool:
    # Bounds are used as given; reversed bounds never match.
    if not is_sequence(expected) or len(expected) != 2:
        return False
    bounds = _bounds(actual, expected)
    if bounds is None:
        return False
    number, low, high = bounds
    return low <= number <= high


def _not_between(actual: Any, expected: Any) -> bool:
    if not is_sequence(expected) or len(expected) != 2:
        return False
    bounds = _bounds(actual, expected)
    if bounds is None:
        return True
    number, low, high = bounds
    return number < low or number > high


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _strictly_equal,
    ConditionOperator.NOT_EQUALS: lambda actual, expected: not _strictly_equal(
        actual, expected
    ),
    ConditionOperator.GREATER_THAN: _compare(lambda a, b: a > b),
    ConditionOperator.LESS_THAN: _compare(lambda a, b: a < b),
    ConditionOperator.GREATER_THAN_OR_EQUAL: _compare(lambda a, b: a >= b),
    ConditionOperator.LESS_THAN_OR_EQUAL: _compare(lambda a, b: a <= b),
    ConditionOperator.IN: _in,
    ConditionOperator.NOT_IN: _not_in,
    ConditionOperator.BETWEEN: _between,
    ConditionOperator.NOT_BETWEEN: _not_between,
}


@beartype
def evaluate_condition(subject: Subject, condition: RateCondition) -> ConditionResult:
    """Evaluate a rate condition against a subject.

    Args:
        subject: Subject to evaluate
        condition: Condition to evaluate

    Returns:
        ConditionResult with the resolved value and whether it was met
    """
    actual_value = get_nested_value(subject, condition.field)
    evaluate = _OPERATORS.get(condition.operator)
    if evaluate is None:
        return ConditionResult(
            condition=condition,
            is_met=False,
            actual_value=actual_value,
            error=f"Unknown operator: {condition.operator}",
        )

    try:
        is_met = evaluate(actual_value, condition.value)
    except Exception as e:
        return ConditionResult(
            condition=condition,
            is_met=False,
            actual_value=actual_value,
            error=f"Condition evaluation failed: {str(e)}",
        )

    return ConditionResult(
        condition=condition, is_met=is_met, actual_value=actual_value
    )
