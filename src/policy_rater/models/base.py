# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Base Pydantic model configuration for all rater models.

This module provides the foundation for every configuration and result
model, enforcing immutability and strict validation.
"""

from beartype import beartype
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@beartype
class BaseModelConfig(BaseModel):
    """Base model with strict configuration for all domain entities.

    Enforces:
    - Immutability (frozen=True)
    - No extra fields allowed (extra="forbid")
    - Validation on assignment
    - Automatic whitespace stripping
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


@beartype
class RatingModel(BaseModelConfig):
    """Base for rating models, accepting snake_case or camelCase keys.

    ``RateFactor.model_validate({"baseRate": 5, ...})`` and
    ``RateFactor(base_rate=5, ...)`` build the same factor. Strings are kept as
    written, so padded lookup keys and field paths still match.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=False,
        validate_default=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
