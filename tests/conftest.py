"""Test configuration and shared fixtures for the rater."""

import os
from collections.abc import Generator

import pytest

from policy_rater import RateFactor, RateFactorGroup, RatingEngine, create_rating_engine
from policy_rater.core.config import clear_settings_cache


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep RATER_* environment variables from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("RATER_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def engine() -> Generator[RatingEngine, None, None]:
    """Engine with a base rate of 100, destroyed after the test."""
    rating_engine = create_rating_engine(base_rate=100)
    yield rating_engine
    rating_engine.destroy()


@pytest.fixture
def score_groups() -> list[RateFactorGroup]:
    """Single group rating a score through inclusive ranges."""
    return [
        RateFactorGroup(
            id="score",
            label="Score Group",
            aggregation_method="sum",
            factors=[
                RateFactor(
                    id="scoreFactor",
                    label="Score Factor",
                    range_table={
                        "field": "score",
                        "ranges": [
                            {"minimum": 0, "maximum": 49, "rate": 50},
                            {"minimum": 50, "maximum": 99, "rate": 100},
                            {"minimum": 100, "rate": 150},
                        ],
                    },
                )
            ],
        )
    ]
