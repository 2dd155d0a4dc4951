# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Immutable configuration and result models for the rater."""

from .base import BaseModelConfig, RatingModel
from .rating import (
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

__all__ = [
    "BaseModelConfig",
    "RatingModel",
    "MISSING",
    "Subject",
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
    "RatingEngineOptions",
]
