"""Unit tests for factor rate resolution."""

from policy_rater import RateFactor
from policy_rater.services.rating.resolvers import resolve_factor_rate


def _factor(**kwargs):
    return RateFactor(id="factor", label="Factor", **kwargs)


class TestRateSources:
    """Each rate source on its own."""

    def test_base_rate(self):
        """A constant base rate."""
        assert resolve_factor_rate({}, _factor(base_rate=50)) == 50

    def test_field_path(self):
        """The rate is read from the subject, nested paths included."""
        factor = _factor(field_path="pricing.multiplier")
        assert resolve_factor_rate({"pricing": {"multiplier": "1.25"}}, factor) == 1.25

    def test_lookup_table(self):
        """Lookup by key with a default for unknown keys."""
        factor = _factor(
            lookup_table={
                "field": "tier",
                "values": {"gold": 100, "silver": 75, "bronze": 50},
                "default_value": 25,
            }
        )
        assert resolve_factor_rate({"tier": "gold"}, factor) == 100
        assert resolve_factor_rate({"tier": "silver"}, factor) == 75
        assert resolve_factor_rate({"tier": "unknown"}, factor) == 25

    def test_lookup_keys_are_stringified(self):
        """Non-string subject values are converted to keys."""
        factor = _factor(
            lookup_table={
                "field": "value",
                "values": {"3": 3, "true": 1, "null": 0.5, "undefined": 0.25, "2.5": 2.5},
            }
        )
        assert resolve_factor_rate({"value": 3}, factor) == 3
        assert resolve_factor_rate({"value": 3.0}, factor) == 3
        assert resolve_factor_rate({"value": 2.5}, factor) == 2.5
        assert resolve_factor_rate({"value": True}, factor) == 1
        assert resolve_factor_rate({"value": None}, factor) == 0.5
        assert resolve_factor_rate({}, factor) == 0.25

    def test_lookup_keys_keep_surrounding_whitespace(self):
        """Padded keys are stored and matched exactly as written."""
        factor = _factor(lookup_table={"field": "code", "values": {"A ": 7, "A": 3}})

        assert list(factor.lookup_table.values) == ["A ", "A"]
        assert resolve_factor_rate({"code": "A "}, factor) == 7
        assert resolve_factor_rate({"code": "A"}, factor) == 3
        assert resolve_factor_rate({"code": " A"}, factor) == 0

    def test_range_table(self):
        """First matching range wins, default when nothing matches."""
        factor = _factor(
            range_table={
                "field": "age",
                "ranges": [
                    {"minimum": 18, "maximum": 25, "rate": 150},
                    {"minimum": 26, "maximum": 65, "rate": 100},
                    {"minimum": 66, "rate": 130},
                ],
                "default_rate": 200,
            }
        )
        assert resolve_factor_rate({"age": 20}, factor) == 150
        assert resolve_factor_rate({"age": 40}, factor) == 100
        assert resolve_factor_rate({"age": 70}, factor) == 130
        assert resolve_factor_rate({"age": 10}, factor) == 200

    def test_range_boundaries_are_inclusive(self):
        """Both range bounds include their endpoint."""
        factor = _factor(
            range_table={
                "field": "score",
                "ranges": [
                    {"minimum": 0, "maximum": 49, "rate": 50},
                    {"minimum": 50, "maximum": 99, "rate": 100},
                    {"minimum": 100, "rate": 150},
                ],
            }
        )
        rates = [resolve_factor_rate({"score": s}, factor) for s in (49, 50, 99, 100)]
        assert rates == [50, 100, 100, 150]

    def test_overlapping_ranges_use_declared_order(self):
        """Order decides between overlapping ranges."""
        factor = _factor(
            range_table={
                "field": "score",
                "ranges": [{"maximum": 100, "rate": 1}, {"minimum": 0, "rate": 2}],
            }
        )
        assert resolve_factor_rate({"score": 50}, factor) == 1


class TestSourcePriority:
    """field_path, then lookup, then range, then base rate."""

    def test_field_path_wins(self):
        """A numeric field path beats every other source."""
        factor = _factor(
            field_path="rate",
            lookup_table={"field": "tier", "values": {"gold": 100}},
            base_rate=5,
        )
        assert resolve_factor_rate({"rate": 7, "tier": "gold"}, factor) == 7

    def test_non_numeric_field_path_falls_through(self):
        """A field path that does not coerce gives way to the next source."""
        factor = _factor(
            field_path="rate",
            lookup_table={"field": "tier", "values": {"gold": 100}},
        )
        assert resolve_factor_rate({"rate": "n/a", "tier": "gold"}, factor) == 100

    def test_lookup_miss_falls_through_to_range_then_base(self):
        """A lookup miss without default continues down the chain."""
        factor = _factor(
            lookup_table={"field": "tier", "values": {"gold": 100}},
            range_table={"field": "age", "ranges": [{"minimum": 18, "rate": 2}]},
            base_rate=9,
        )
        assert resolve_factor_rate({"tier": "bronze", "age": 30}, factor) == 2
        assert resolve_factor_rate({"tier": "bronze", "age": 10}, factor) == 9

    def test_miss_without_default_is_zero(self):
        """No usable source resolves to 0."""
        lookup = _factor(lookup_table={"field": "tier", "values": {"gold": 100}})
        ranges = _factor(range_table={"field": "age", "ranges": [{"minimum": 18, "rate": 2}]})

        assert resolve_factor_rate({"tier": "bronze"}, lookup) == 0
        assert resolve_factor_rate({"age": 5}, ranges) == 0
        assert resolve_factor_rate({}, _factor()) == 0
