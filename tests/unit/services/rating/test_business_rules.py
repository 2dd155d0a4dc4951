"""Unit tests for structural validation of rating configuration."""

from policy_rater import RateFactor, RateFactorGroup
from policy_rater.services.rating.business_rules import (
    RatingBusinessRules,
    validate_factor,
    validate_group,
)


class TestValidateFactor:
    """Factor-level diagnostics."""

    def test_valid_factor(self):
        """A factor with id, label and a rate source has no errors."""
        assert validate_factor(RateFactor(id="f1", label="Factor 1", base_rate=100)) == []

    def test_blank_id_and_label(self):
        """Whitespace-only id and label count as blank."""
        errors = validate_factor(RateFactor(id="   ", label="", base_rate=1))

        assert "Factor must have an id" in errors
        assert any("must have a label" in e for e in errors)

    def test_requires_rate_source(self):
        """At least one of the four rate sources is needed."""
        errors = validate_factor(RateFactor(id="f1", label="Factor 1"))
        assert errors == [
            "Factor f1: must have base_rate, lookup_table, range_table, or field_path"
        ]

    def test_lookup_table_structure(self):
        """Lookup tables need a field and values."""
        errors = validate_factor(
            RateFactor(id="f1", label="Factor 1", lookup_table={"field": " ", "values": {}})
        )
        assert errors == [
            "Factor f1: lookup_table must have a field",
            "Factor f1: lookup_table must have values",
        ]

    def test_range_table_structure(self):
        """Range tables need a field and ranges."""
        errors = validate_factor(
            RateFactor(id="f1", label="Factor 1", range_table={"field": "", "ranges": []})
        )
        assert errors == [
            "Factor f1: range_table must have a field",
            "Factor f1: range_table must have ranges",
        ]

    def test_operation_requires_operand(self):
        """An operation without operand is reported."""
        errors = validate_factor(
            RateFactor(id="f1", label="Factor 1", base_rate=1, operation="multiply")
        )
        assert errors == ["Factor f1: operation requires an operand"]


class TestValidateGroup:
    """Group-level diagnostics."""

    def test_invalid_group(self):
        """Blank id, blank label and no factors are each reported."""
        errors = validate_group(
            RateFactorGroup(id="", label="", aggregation_method="sum", factors=[])
        )
        assert errors == [
            "Group must have an id",
            "Group : must have a label",
            "Group : must have at least one factor",
        ]

    def test_factor_errors_are_appended_in_order(self):
        """Factor diagnostics follow group diagnostics, in factor order."""
        group = RateFactorGroup(
            id="g1",
            label="Group 1",
            aggregation_method="sum",
            factors=[
                RateFactor(id="a", label="A"),
                RateFactor(id="b", label="", base_rate=1),
            ],
        )
        errors = validate_group(group)

        assert errors[0].startswith("Factor a:")
        assert errors[1] == "Factor b: must have a label"

    def test_validate_groups_concatenates(self):
        """Business rules validate several groups at once."""
        groups = [
            RateFactorGroup(id="", label="One", aggregation_method="sum",
                            factors=[RateFactor(id="x", label="X", base_rate=1)]),
            RateFactorGroup(id="two", label="Two", aggregation_method="sum", factors=[]),
        ]
        errors = RatingBusinessRules().validate_groups(groups)

        assert errors == ["Group must have an id", "Group two: must have at least one factor"]
