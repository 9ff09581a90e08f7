from __future__ import annotations

import pytest

from team_bot.models import RatingTable

TEN_PLAYERS = ("A", "B", "C", "D", "E", "F", "G", "H", "I", "J")


@pytest.fixture
def ten_players() -> tuple[str, ...]:
    return TEN_PLAYERS


@pytest.fixture
def mixed_ratings() -> RatingTable:
    return RatingTable(
        {
            "A": 71.9,
            "B": 51.9,
            "C": 58.1,
            "D": 73.8,
            "E": 66.9,
            "F": 50.1,
            "G": 67.3,
            "H": 69.3,
            "I": 56.4,
            "J": 80.0,
        }
    )


@pytest.fixture
def skewed_ratings() -> RatingTable:
    """Five players rated 10 and five rated 0."""
    return RatingTable({name: (10.0 if name < "F" else 0.0) for name in TEN_PLAYERS})
