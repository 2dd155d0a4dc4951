# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rating configuration and result models.

Configuration models (conditions, tables, factors, groups) are written by
callers and consumed read-only by the engine. Result models are produced
fresh on every calculation. Operator, operation and aggregation fields
hold plain strings: the enums below name the supported values, and
anything else reaches the documented fallback behaviour at evaluation
time rather than failing at construction.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Final

from beartype import beartype
from pydantic import Field, field_serializer

from ..constants import (
    DEFAULT_BASE_RATE,
    DEFAULT_CONTINUE_ON_ERROR,
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_GROUP_AGGREGATION_METHOD,
)
from ..core.config import Settings, get_settings
from .base import RatingModel

# Subject being rated, possibly nested. Never mutated by the engine.
Subject = Mapping[str, Any]


class _Missing:
    """Marker for a subject path that does not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class ConditionOperator(str, Enum):
    """Operators a condition can use."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    IN = "in"
    NOT_IN = "notIn"
    BETWEEN = "between"
    NOT_BETWEEN = "notBetween"


class MathematicalOperation(str, Enum):
    """Transforms a factor can apply to its resolved rate."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    PERCENTAGE = "percentage"
    PERCENTAGE_OF = "percentageOf"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    AVERAGE = "average"
    POWER = "power"
    ROUND = "round"
    CEIL = "ceil"
    FLOOR = "floor"


class AggregationMethod(str, Enum):
    """Ways of combining several rates into one."""

    SUM = "sum"
    PRODUCT = "product"
    AVERAGE = "average"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"


# Configuration models


@beartype
class RateCondition(RatingModel):
    """A predicate on one subject field."""

    field: str = Field(..., description="Dot-notation path into the subject")
    operator: str = Field(..., description="One of ConditionOperator")
    value: Any = Field(default=None, description="Value(s) to compare against")


@beartype
class RateLookupTable(RatingModel):
    """Rates keyed by the stringified value of a subject field."""

    field: str = Field(..., description="Field used as the lookup key")
    values: dict[str, float] = Field(default_factory=dict)
    default_value: float | None = Field(
        default=None, description="Rate used when the key is absent"
    )


@beartype
class RateRange(RatingModel):
    """Inclusive numeric range with its rate. Absent bounds are open."""

    minimum: float | None = Field(default=None)
    maximum: float | None = Field(default=None)
    rate: float = Field(...)


@beartype
class RateRangeTable(RatingModel):
    """Ordered ranges over a numeric subject field; first match wins."""

    field: str = Field(..., description="Field evaluated against the ranges")
    ranges: tuple[RateRange, ...] = Field(default_factory=tuple)
    default_rate: float | None = Field(
        default=None, description="Rate used when no range matches"
    )


@beartype
class RateFactor(RatingModel):
    """A single contributor to a group rate.

    The rate source is the first usable one of ``field_path``,
    ``lookup_table``, ``range_table`` and ``base_rate``.
    """

    id: str = Field(..., description="Unique identifier for this factor")
    label: str = Field(..., description="Human-readable label")
    description: str | None = Field(default=None)
    conditions: tuple[RateCondition, ...] | None = Field(
        default=None, description="All must be met for the factor to apply"
    )
    base_rate: float | None = Field(default=None)
    lookup_table: RateLookupTable | None = Field(default=None)
    range_table: RateRangeTable | None = Field(default=None)
    field_path: str | None = Field(
        default=None, description="Subject path holding the rate itself"
    )
    operation: str | None = Field(
        default=None, description="One of MathematicalOperation"
    )
    operand: float | None = Field(default=None)
    required: bool = Field(default=False)
    enabled: bool = Field(default=True)
    priority: float = Field(default=0, description="Lower values evaluate first")
    minimum_rate: float | None = Field(default=None)
    maximum_rate: float | None = Field(default=None)


@beartype
class RateFactorGroup(RatingModel):
    """Factors combined with a single aggregation method."""

    id: str = Field(..., description="Unique identifier")
    label: str = Field(..., description="Human-readable label")
    factors: tuple[RateFactor, ...] = Field(default_factory=tuple)
    aggregation_method: str = Field(..., description="One of AggregationMethod")
    base_rate: float | None = Field(default=None)
    require_all: bool = Field(
        default=False,
        description="Only apply when every required factor applied",
    )


# Result models


@beartype
class ConditionResult(RatingModel):
    """Outcome of evaluating one condition."""

    condition: RateCondition
    is_met: bool
    actual_value: Any = Field(..., description="Resolved subject value or MISSING")
    error: str | None = Field(default=None)

    @field_serializer("actual_value", when_used="json")
    def serialize_actual_value(self, value: Any) -> Any:
        """Write an absent subject value as null."""
        return None if value is MISSING else value


@beartype
class FactorResult(RatingModel):
    """Outcome of rating one factor."""

    factor: RateFactor
    is_applied: bool
    rate: float
    condition_results: tuple[ConditionResult, ...] | None = Field(default=None)
    error: str | None = Field(default=None)


@beartype
class GroupResult(RatingModel):
    """Outcome of rating one group."""

    group: RateFactorGroup
    is_applied: bool
    rate: float
    factor_results: tuple[FactorResult, ...] = Field(default_factory=tuple)


@beartype
class RatingResult(RatingModel):
    """Final outcome of a rating run."""

    final_rate: float
    is_successful: bool
    factors_applied: int = Field(..., ge=0)
    group_results: tuple[GroupResult, ...] = Field(default_factory=tuple)
    all_factor_results: tuple[FactorResult, ...] = Field(default_factory=tuple)
    breakdown: tuple[str, ...] = Field(default_factory=tuple)
    errors: tuple[str, ...] = Field(default_factory=tuple)


# Engine options

RateCallback = Callable[[RatingResult], Any]
ErrorCallback = Callable[[Exception], Any]


@beartype
class RatingEngineOptions(RatingModel):
    """Rating engine configuration."""

    base_rate: float = Field(default=DEFAULT_BASE_RATE)
    group_aggregation_method: str = Field(default=DEFAULT_GROUP_AGGREGATION_METHOD)
    minimum_rate: float | None = Field(default=None)
    maximum_rate: float | None = Field(default=None)
    decimal_places: int = Field(default=DEFAULT_DECIMAL_PLACES, ge=0)
    continue_on_error: bool = Field(default=DEFAULT_CONTINUE_ON_ERROR)
    on_rate: RateCallback | None = Field(default=None)
    on_error: ErrorCallback | None = Field(default=None)

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **overrides: Any
    ) -> "RatingEngineOptions":
        """Build options from settings, with keyword overrides on top."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "base_rate": settings.base_rate,
            "group_aggregation_method": settings.group_aggregation_method,
            "minimum_rate": settings.minimum_rate,
            "maximum_rate": settings.maximum_rate,
            "decimal_places": settings.decimal_places,
            "continue_on_error": settings.continue_on_error,
        }
        values.update(overrides)
        return cls.model_validate(values)
