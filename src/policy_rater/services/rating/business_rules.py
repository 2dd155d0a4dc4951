# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Structural validation of rating configuration.

Validation never raises. Each check returns human-readable diagnostics
naming the offending factor or group; an empty list means the
configuration is structurally sound.
"""

from collections.abc import Sequence

from beartype import beartype

from ...models.rating import RateFactor, RateFactorGroup


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


@beartype
def validate_factor(factor: RateFactor) -> list[str]:
    """Validate a rate factor.

    Args:
        factor: Factor to validate

    Returns:
        List of validation errors
    """
    errors: list[str] = []

    if _is_blank(factor.id):
        errors.append("Factor must have an id")

    if _is_blank(factor.label):
        errors.append(f"Factor {factor.id}: must have a label")

    has_rate_source = (
        factor.base_rate is not None
        or factor.lookup_table is not None
        or factor.range_table is not None
        or factor.field_path is not None
    )
    if not has_rate_source:
        errors.append(
            f"Factor {factor.id}: must have base_rate, lookup_table, range_table, or field_path"
        )

    if factor.lookup_table is not None:
        if _is_blank(factor.lookup_table.field):
            errors.append(f"Factor {factor.id}: lookup_table must have a field")
        if not factor.lookup_table.values:
            errors.append(f"Factor {factor.id}: lookup_table must have values")

    if factor.range_table is not None:
        if _is_blank(factor.range_table.field):
            errors.append(f"Factor {factor.id}: range_table must have a field")
        if not factor.range_table.ranges:
            errors.append(f"Factor {factor.id}: range_table must have ranges")

    if factor.operation and factor.operand is None:
        errors.append(f"Factor {factor.id}: operation requires an operand")

    return errors


@beartype
def validate_group(group: RateFactorGroup) -> list[str]:
    """Validate a rate factor group and every factor in it."""
    errors: list[str] = []

    if _is_blank(group.id):
        errors.append("Group must have an id")

    if _is_blank(group.label):
        errors.append(f"Group {group.id}: must have a label")

    if not group.factors:
        errors.append(f"Group {group.id}: must have at least one factor")

    for factor in group.factors:
        errors.extend(validate_factor(factor))

    return errors


@beartype
class RatingBusinessRules:
    """Validation entry point for whole rating configurations."""

    @beartype
    def validate_groups(self, groups: Sequence[RateFactorGroup]) -> list[str]:
        """Validate several groups, concatenating diagnostics in order."""
        errors: list[str] = []
        for group in groups:
            errors.extend(validate_group(group))
        return errors

