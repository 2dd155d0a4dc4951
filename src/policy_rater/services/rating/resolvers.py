# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Resolution of a factor's numeric value from its rate source.

Sources are tried in a fixed order and the first one that yields a value
wins: ``field_path``, ``lookup_table``, ``range_table``, ``base_rate``.
A source that yields nothing falls through to the next one, and a factor
with no usable source resolves to 0.
"""

from beartype import beartype

from ...models.rating import RateFactor, RateLookupTable, RateRangeTable, Subject
from .helpers import get_nested_value, to_lookup_key, to_number


@beartype
def lookup_rate(subject: Subject, table: RateLookupTable) -> float | None:
    """Rate for the subject's key in a lookup table, or its default."""
    key = to_lookup_key(get_nested_value(subject, table.field))
    rate = table.values.get(key)
    if rate is not None:
        return rate
    return table.default_value


@beartype
def range_rate(subject: Subject, table: RateRangeTable) -> float | None:
    """Rate of the first range containing the subject's value, or the default."""
    value = to_number(get_nested_value(subject, table.field))
    if value is not None:
        for rate_range in table.ranges:
            above_minimum = rate_range.minimum is None or value >= rate_range.minimum
            below_maximum = rate_range.maximum is None or value <= rate_range.maximum
            if above_minimum and below_maximum:
                return rate_range.rate
    return table.default_rate


@beartype
def resolve_factor_rate(subject: Subject, factor: RateFactor) -> float:
    """Resolve the base numeric value of a factor.

    Args:
        subject: Subject being rated
        factor: Factor whose rate source is resolved

    Returns:
        Resolved rate, 0 when no source yields a value
    """
    if factor.field_path:
        value = to_number(get_nested_value(subject, factor.field_path))
        if value is not None:
            return value

    if factor.lookup_table is not None:
        rate = lookup_rate(subject, factor.lookup_table)
        if rate is not None:
            return rate

    if factor.range_table is not None:
        rate = range_rate(subject, factor.range_table)
        if rate is not None:
            return rate

    if factor.base_rate is not None:
        return factor.base_rate
    return 0.0
