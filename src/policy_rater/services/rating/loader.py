# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Loading rating configuration from plain data.

Accepts JSON text or already-decoded mappings, with camelCase or
snake_case keys, and reports problems as ``Err(RaterError)`` instead of
raising. Each stage (decode, parse, validate) is chained with
``and_then`` so the first failure short-circuits the rest.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from beartype import beartype
from pydantic import TypeAdapter, ValidationError

from ...core.errors import RaterError, RaterErrorCode
from ...core.result_types import Result
from ...models.rating import RateCondition, RateFactor, RateFactorGroup
from .business_rules import RatingBusinessRules, validate_factor

_GROUPS_ADAPTER = TypeAdapter(list[RateFactorGroup])


def _describe(error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or '<root>'}: {e['msg']}"
        for e in error.errors()
    )
    return f"{error.error_count()} validation error(s): {details}"


def _decode(data: Any, code: RaterErrorCode) -> Result[Any, RaterError]:
    if not isinstance(data, str | bytes):
        return Result.ok(data)
    try:
        return Result.ok(json.loads(data))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Result.err(RaterError(f"Invalid JSON: {e}", code))


def _parse_groups(raw: Any) -> Result[list[RateFactorGroup], RaterError]:
    try:
        return Result.ok(_GROUPS_ADAPTER.validate_python(raw))
    except ValidationError as e:
        return Result.err(RaterError(_describe(e), RaterErrorCode.INVALID_GROUP))


def _check_groups(groups: list[RateFactorGroup]) -> Result[list[RateFactorGroup], RaterError]:
    errors = RatingBusinessRules().validate_groups(groups)
    if errors:
        return Result.err(RaterError("; ".join(errors), RaterErrorCode.VALIDATION_FAILED))
    return Result.ok(groups)


def _parse_factor(raw: Any) -> Result[RateFactor, RaterError]:
    try:
        return Result.ok(RateFactor.model_validate(raw))
    except ValidationError as e:
        return Result.err(RaterError(_describe(e), RaterErrorCode.INVALID_FACTOR))


def _check_factor(factor: RateFactor) -> Result[RateFactor, RaterError]:
    errors = validate_factor(factor)
    if errors:
        return Result.err(
            RaterError(
                "; ".join(errors),
                RaterErrorCode.VALIDATION_FAILED,
                factor_id=factor.id,
            )
        )
    return Result.ok(factor)


def _parse_condition(raw: Any) -> Result[RateCondition, RaterError]:
    try:
        return Result.ok(RateCondition.model_validate(raw))
    except ValidationError as e:
        field = raw.get("field") if isinstance(raw, Mapping) else None
        return Result.err(
            RaterError(
                _describe(e),
                RaterErrorCode.INVALID_CONDITION,
                field=field if isinstance(field, str) else None,
            )
        )


@beartype
def load_groups(
    data: str | bytes | Sequence[Any], *, validate: bool = True
) -> Result[list[RateFactorGroup], RaterError]:
    """Build factor groups from JSON text or a sequence of mappings.

    Args:
        data: JSON array text, or decoded group mappings
        validate: Also run structural validation on the parsed groups

    Returns:
        Result containing the groups or a RaterError
    """
    result = _decode(data, RaterErrorCode.INVALID_GROUP).and_then(_parse_groups)
    return result.and_then(_check_groups) if validate else result


@beartype
def load_factor(
    data: str | bytes | Mapping[str, Any], *, validate: bool = True
) -> Result[RateFactor, RaterError]:
    """Build a single factor from JSON text or a mapping."""
    result = _decode(data, RaterErrorCode.INVALID_FACTOR).and_then(_parse_factor)
    return result.and_then(_check_factor) if validate else result


@beartype
def load_condition(data: str | bytes | Mapping[str, Any]) -> Result[RateCondition, RaterError]:
    """Build a single condition from JSON text or a mapping."""
    return _decode(data, RaterErrorCode.INVALID_CONDITION).and_then(_parse_condition)
