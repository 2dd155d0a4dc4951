# PolicyCore - Policy Decision Management System
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.
"""Main rating engine that orchestrates all rating calculations.

The engine evaluates factors (conditions, rate source, operation, clamp),
aggregates them per group, aggregates applied groups into a final rate,
then rounds and clamps it. Calculation failures are captured in the
result instead of raised; only use of a destroyed engine raises.
"""

import threading
from collections.abc import Callable, Sequence
from typing import Any

from beartype import beartype

from ...core.errors import RaterError, RaterErrorCode
from ...core.logging_utils import configure_logging, get_logger
from ...models.rating import (
    ConditionResult,
    ErrorCallback,
    FactorResult,
    GroupResult,
    RateCallback,
    RateCondition,
    RateFactor,
    RateFactorGroup,
    RatingEngineOptions,
    RatingResult,
    Subject,
)
from .business_rules import RatingBusinessRules
from .calculators import Number, RateCalculator
from .conditions import evaluate_condition
from .helpers import clamp, format_number, round_to_decimal_places
from .resolvers import resolve_factor_rate

logger = get_logger(__name__)

Unsubscribe = Callable[[], None]


def _error_message(error: Exception) -> str:
    return str(error) or type(error).__name__


@beartype
class RatingEngine:
    """Factor-based rating engine.

    Construct once, call ``rate`` as often as needed, then ``destroy``.
    Listener registration and the destroyed flag are guarded by a lock;
    calculations themselves share no mutable state.
    """

    def __init__(self, options: RatingEngineOptions | None = None) -> None:
        """Initialize the engine from options (defaults come from settings)."""
        options = options or RatingEngineOptions.from_settings()
        configure_logging()

        self._base_rate = options.base_rate
        self._group_aggregation_method = options.group_aggregation_method
        self._minimum_rate = options.minimum_rate
        self._maximum_rate = options.maximum_rate
        self._decimal_places = options.decimal_places
        self._continue_on_error = options.continue_on_error

        self._business_rules = RatingBusinessRules()
        self._lock = threading.RLock()
        # dicts keep registration order and ignore duplicate registrations
        self._rate_listeners: dict[RateCallback, None] = {}
        self._error_listeners: dict[ErrorCallback, None] = {}
        self._is_destroyed = False

        if options.on_rate is not None:
            self._rate_listeners[options.on_rate] = None
        if options.on_error is not None:
            self._error_listeners[options.on_error] = None

        logger.debug(
            "Rating engine created (base_rate=%s, method=%s, decimal_places=%d)",
            self._base_rate,
            self._group_aggregation_method,
            self._decimal_places,
        )

    # ---- Property accessors ----

    def get_base_rate(self) -> float:
        """Get the base rate."""
        self._assert_not_destroyed()
        return self._base_rate

    def get_group_aggregation_method(self) -> str:
        """Get the method used to combine group rates."""
        self._assert_not_destroyed()
        return self._group_aggregation_method

    def get_minimum_rate(self) -> float | None:
        """Get the minimum allowed final rate."""
        self._assert_not_destroyed()
        return self._minimum_rate

    def get_maximum_rate(self) -> float | None:
        """Get the maximum allowed final rate."""
        self._assert_not_destroyed()
        return self._maximum_rate

    def get_decimal_places(self) -> int:
        """Get the decimal places for rounding."""
        self._assert_not_destroyed()
        return self._decimal_places

    def is_continue_on_error(self) -> bool:
        """Check if the engine continues past failing groups."""
        self._assert_not_destroyed()
        return self._continue_on_error

    # ---- Subscriptions ----

    def on_rate(self, callback: RateCallback) -> Unsubscribe:
        """Subscribe to completed ratings. Returns an idempotent unsubscribe."""
        self._assert_not_destroyed()
        with self._lock:
            self._rate_listeners[callback] = None

        def unsubscribe() -> None:
            with self._lock:
                self._rate_listeners.pop(callback, None)

        return unsubscribe

    def on_error(self, callback: ErrorCallback) -> Unsubscribe:
        """Subscribe to rating errors. Returns an idempotent unsubscribe."""
        self._assert_not_destroyed()
        with self._lock:
            self._error_listeners[callback] = None

        def unsubscribe() -> None:
            with self._lock:
                self._error_listeners.pop(callback, None)

        return unsubscribe

    # ---- Calculation ----

    def rate(self, subject: Subject, groups: Sequence[RateFactorGroup]) -> RatingResult:
        """Calculate the final rate for a subject.

        Args:
            subject: Subject to rate
            groups: Rate factor groups, evaluated in order

        Returns:
            RatingResult with per-group and per-factor detail
        """
        self._assert_not_destroyed()

        group_results: list[GroupResult] = []
        all_factor_results: list[FactorResult] = []
        breakdown = [f"Starting with base rate: {format_number(self._base_rate)}"]
        errors: list[str] = []

        for group in groups:
            try:
                group_result = self.rate_group(subject, group)
            except Exception as e:
                message = _error_message(e)
                errors.append(f'Group "{group.id}": {message}')
                logger.warning("Group %s failed: %s", group.id, message)

                error = RaterError(
                    message, RaterErrorCode.CALCULATION_FAILED, group_id=group.id
                )
                error.__cause__ = e
                self._emit_error(error)

                if not self._continue_on_error:
                    break
                continue

            group_results.append(group_result)
            all_factor_results.extend(group_result.factor_results)

            if group_result.is_applied:
                breakdown.append(
                    f'Group "{group.label}": {format_number(group_result.rate)}'
                )

            for factor_result in group_result.factor_results:
                if factor_result.error:
                    errors.append(factor_result.error)
                    self._emit_error(
                        RaterError(
                            factor_result.error,
                            RaterErrorCode.EVALUATION_FAILED,
                            factor_id=factor_result.factor.id,
                            group_id=group.id,
                        )
                    )

        applied_group_rates = [r.rate for r in group_results if r.is_applied]
        if applied_group_rates:
            final_rate = RateCalculator.aggregate(
                applied_group_rates, self._group_aggregation_method
            )
        else:
            final_rate = self._base_rate

        final_rate = round_to_decimal_places(final_rate, self._decimal_places)
        final_rate = clamp(final_rate, self._minimum_rate, self._maximum_rate)

        breakdown.append(f"Final rate: {format_number(final_rate)}")

        result = RatingResult(
            final_rate=final_rate,
            is_successful=not errors,
            factors_applied=sum(1 for r in all_factor_results if r.is_applied),
            group_results=group_results,
            all_factor_results=all_factor_results,
            breakdown=breakdown,
            errors=errors,
        )

        logger.debug(
            "Rated subject across %d groups: %d factors applied, final rate %s",
            len(group_results),
            result.factors_applied,
            final_rate,
        )

        self._emit_rate(result)
        return result

    def rate_factor(self, subject: Subject, factor: RateFactor) -> FactorResult:
        """Calculate the rate of a single factor."""
        self._assert_not_destroyed()

        if factor.enabled is False:
            return FactorResult(factor=factor, is_applied=False, rate=0.0)

        condition_results: list[ConditionResult] | None = None
        if factor.conditions:
            # Every condition is recorded, even after one fails
            condition_results = [
                evaluate_condition(subject, condition) for condition in factor.conditions
            ]
            if not all(r.is_met for r in condition_results):
                return FactorResult(
                    factor=factor,
                    is_applied=False,
                    rate=0.0,
                    condition_results=condition_results,
                )

        rate = resolve_factor_rate(subject, factor)

        if factor.operation and factor.operand is not None:
            rate = RateCalculator.apply_operation(rate, factor.operation, factor.operand)

        # Minimum then maximum, even when the bounds are inverted
        rate = clamp(rate, factor.minimum_rate, factor.maximum_rate)

        return FactorResult(
            factor=factor,
            is_applied=True,
            rate=rate,
            condition_results=condition_results,
        )

    def rate_group(self, subject: Subject, group: RateFactorGroup) -> GroupResult:
        """Calculate the aggregated rate of a group.

        Factors are evaluated in ascending priority, ties keeping their
        declared order. With ``continue_on_error`` disabled, the first
        factor failure is re-raised.
        """
        self._assert_not_destroyed()

        factor_results: list[FactorResult] = []
        for factor in sorted(group.factors, key=lambda f: f.priority):
            try:
                factor_results.append(self.rate_factor(subject, factor))
            except Exception as e:
                factor_results.append(self._failed_factor(factor, e))
                if not self._continue_on_error:
                    raise

        if group.require_all:
            constraint_met = all(
                r.is_applied or not r.factor.required for r in factor_results
            )
            if not constraint_met:
                return GroupResult(
                    group=group,
                    is_applied=False,
                    rate=0.0,
                    factor_results=factor_results,
                )

        applied_rates = [r.rate for r in factor_results if r.is_applied]
        if not applied_rates:
            rate = group.base_rate if group.base_rate is not None else 0.0
        else:
            rate = RateCalculator.aggregate(applied_rates, group.aggregation_method)
            if group.base_rate is not None:
                # The group base rate joins as a peer of the aggregated factors
                rate = RateCalculator.aggregate(
                    [group.base_rate, rate], group.aggregation_method
                )

        return GroupResult(
            group=group,
            is_applied=bool(applied_rates),
            rate=rate,
            factor_results=factor_results,
        )

    # ---- Evaluation and math passthroughs ----

    def evaluate_condition(
        self, subject: Subject, condition: RateCondition
    ) -> ConditionResult:
        """Evaluate a rate condition against a subject."""
        self._assert_not_destroyed()
        return evaluate_condition(subject, condition)

    def apply_operation(self, rate: Number, operation: str, operand: Number) -> float:
        """Apply a mathematical operation to a rate."""
        self._assert_not_destroyed()
        return RateCalculator.apply_operation(rate, operation, operand)

    def aggregate(self, rates: Sequence[Number], method: str) -> float:
        """Aggregate rates with the given method."""
        self._assert_not_destroyed()
        return RateCalculator.aggregate(rates, method)

    # ---- Validation ----

    def validate_groups(self, groups: Sequence[RateFactorGroup]) -> list[str]:
        """Validate groups, returning diagnostics for all of them in order."""
        self._assert_not_destroyed()
        return self._business_rules.validate_groups(groups)

    # ---- Lifecycle ----

    def destroy(self) -> None:
        """Destroy the engine and drop all listeners. Safe to call repeatedly."""
        with self._lock:
            if self._is_destroyed:
                return
            self._is_destroyed = True
            self._rate_listeners.clear()
            self._error_listeners.clear()
        logger.info("Rating engine destroyed")

    # ---- Private ----

    def _assert_not_destroyed(self) -> None:
        with self._lock:
            if self._is_destroyed:
                raise RaterError(
                    "Rating engine has been destroyed", RaterErrorCode.UNKNOWN
                )

    def _failed_factor(self, factor: RateFactor, error: Exception) -> FactorResult:
        message = _error_message(error)
        logger.warning("Factor %s failed: %s", factor.id, message)
        return FactorResult(
            factor=factor,
            is_applied=False,
            rate=0.0,
            error=f'Factor "{factor.id}": {message}',
        )

    def _emit_rate(self, result: RatingResult) -> None:
        with self._lock:
            listeners = list(self._rate_listeners)
        for listener in listeners:
            try:
                listener(result)
            except Exception:
                logger.warning("Rate listener %r raised; skipped", listener, exc_info=True)

    def _emit_error(self, error: Exception) -> None:
        with self._lock:
            listeners = list(self._error_listeners)
        for listener in listeners:
            try:
                listener(error)
            except Exception:
                logger.warning("Error listener %r raised; skipped", listener, exc_info=True)


@beartype
def create_rating_engine(
    options: RatingEngineOptions | None = None, **overrides: Any
) -> RatingEngine:
    """Create a rating engine.

    Args:
        options: Engine options; defaults come from ``Settings`` when omitted
        **overrides: Option values applied on top, e.g. ``base_rate=100``

    Returns:
        Rating engine instance

    Example:
        >>> engine = create_rating_engine(base_rate=100, maximum_rate=500)
        >>> groups = [RateFactorGroup(
        ...     id="base", label="Base Factors", aggregation_method="product",
        ...     factors=[RateFactor(id="age", label="Age Factor", range_table={
        ...         "field": "age",
        ...         "ranges": [{"minimum": 18, "maximum": 25, "rate": 1.5},
        ...                    {"minimum": 26, "rate": 1.0}]})])]
        >>> engine.rate({"age": 30}, groups).final_rate
        1.0
        >>> engine.destroy()
    """
    if options is None:
        options = RatingEngineOptions.from_settings(**overrides)
    elif overrides:
        options = RatingEngineOptions.model_validate(
            {**options.model_dump(), **overrides}
        )
    return RatingEngine(options)
