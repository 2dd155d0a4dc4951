# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rating engine services package.

This package provides factor-based rating with:
- Condition evaluation against subject fields
- Rate resolution from field paths, lookup tables, range tables and constants
- Mathematical operations and aggregation
- Structural validation of rating configuration
- Configuration loading from JSON or mappings
"""

from .business_rules import RatingBusinessRules, validate_factor, validate_group
from .calculators import RateCalculator
from .conditions import evaluate_condition
from .helpers import (
    clamp,
    format_number,
    get_nested_value,
    round_to_decimal_places,
    to_lookup_key,
    to_number,
)
from .loader import load_condition, load_factor, load_groups
from .rating_engine import RatingEngine, create_rating_engine
from .resolvers import resolve_factor_rate

__all__ = [
    # Main Engine
    "RatingEngine",
    "create_rating_engine",
    # Stages
    "evaluate_condition",
    "resolve_factor_rate",
    "RateCalculator",
    # Validation
    "RatingBusinessRules",
    "validate_factor",
    "validate_group",
    # Loading
    "load_groups",
    "load_factor",
    "load_condition",
    # Helpers
    "get_nested_value",
    "to_number",
    "to_lookup_key",
    "format_number",
    "round_to_decimal_places",
    "clamp",
]
