# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Factor-based rating engine with conditions, lookups, and mathematical operations."""

from .constants import (
    DEFAULT_BASE_RATE,
    DEFAULT_CONTINUE_ON_ERROR,
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_GROUP_AGGREGATION_METHOD,
)
from .core.errors import RaterError, RaterErrorCode, is_rater_error
from .models import (
    MISSING,
    AggregationMethod,
    ConditionOperator,
    ConditionResult,
    FactorResult,
    GroupResult,
    MathematicalOperation,
    RateCondition,
    RateFactor,
    RateFactorGroup,
    RateLookupTable,
    RateRange,
    RateRangeTable,
    RatingEngineOptions,
    RatingResult,
    Subject,
)
from .services.rating import (
    RateCalculator,
    RatingEngine,
    clamp,
    create_rating_engine,
    evaluate_condition,
    format_number,
    get_nested_value,
    load_condition,
    load_factor,
    load_groups,
    round_to_decimal_places,
    to_lookup_key,
    to_number,
    validate_factor,
    validate_group,
)

__version__ = "0.1.0"

__all__ = [
    # Factory and engine
    "create_rating_engine",
    "RatingEngine",
    "RatingEngineOptions",
    # Models
    "Subject",
    "MISSING",
    "AggregationMethod",
    "ConditionOperator",
    "MathematicalOperation",
    "RateCondition",
    "RateLookupTable",
    "RateRange",
    "RateRangeTable",
    "RateFactor",
    "RateFactorGroup",
    "ConditionResult",
    "FactorResult",
    "GroupResult",
    "RatingResult",
    # Errors
    "RaterError",
    "RaterErrorCode",
    "is_rater_error",
    # Stages and helpers
    "RateCalculator",
    "evaluate_condition",
    "validate_factor",
    "validate_group",
    "load_groups",
    "load_factor",
    "load_condition",
    "get_nested_value",
    "to_number",
    "to_lookup_key",
    "format_number",
    "round_to_decimal_places",
    "clamp",
    # Constants
    "DEFAULT_BASE_RATE",
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_CONTINUE_ON_ERROR",
    "DEFAULT_GROUP_AGGREGATION_METHOD",
]
