"""Configuration helpers for the futebol bot runtime."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from team_bot.models import DEFAULT_RATING, RatingTable, Roster

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Poll order matters: the attendance panel walks this list top to bottom.
DEFAULT_PLAYERS: tuple[tuple[str, float], ...] = (
    ("Caria", 71.9),
    ("Tiago", 51.9),
    ("Filipe", 58.1),
    ("Francisco", 73.8),
    ("Gui", 66.9),
    ("João", 50.1),
    ("Miguel", 67.3),
    ("Pedro", 69.3),
    ("Rodrigo", 56.4),
    ("Salvador", 80.0),
    ("Pipa", 49.3),
    ("André", 55.1),
    ("Fontes", 41.6),
    ("Vasco", 73.9),
)


def env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def env_int(name: str, *, default: int | None = None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, *, default: float | None = None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class RosterConfig:
    roster: Roster
    ratings: RatingTable


def build_roster_config(
    players: list[dict[str, object]] | tuple[tuple[str, float], ...],
    *,
    default_rating: float = DEFAULT_RATING,
) -> RosterConfig:
    names: list[str] = []
    ratings: dict[str, float] = {}
    for entry in players:
        if isinstance(entry, dict):
            name = str(entry.get("name", "")).strip()
            rating = entry.get("rating")
        else:
            name, rating = entry
        if not name:
            raise ValueError("Roster entries need a non-empty name")
        if name in names:
            raise ValueError(f"Duplicate roster entry: {name}")
        names.append(name)
        if rating is not None:
            try:
                ratings[name] = float(rating)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid rating for {name}: {rating!r}") from exc
    if not names:
        raise ValueError("Roster must contain at least one player")
    return RosterConfig(
        roster=tuple(names),
        ratings=RatingTable(ratings, default=default_rating),
    )


def load_roster_file(
    path: str | Path, *, default_rating: float = DEFAULT_RATING
) -> RosterConfig:
    """Load ``{"players": [{"name": ..., "rating": ...}, ...]}`` from disk."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    players = data.get("players") if isinstance(data, dict) else None
    if not isinstance(players, list):
        raise ValueError(f"{path}: expected a 'players' list")
    return build_roster_config(players, default_rating=default_rating)


def read_roster_config() -> RosterConfig:
    default_rating = env_float("FUTEBOL_DEFAULT_RATING", default=DEFAULT_RATING)
    path = os.getenv("FUTEBOL_ROSTER_FILE")
    if path:
        return load_roster_file(path, default_rating=default_rating)
    return build_roster_config(DEFAULT_PLAYERS, default_rating=default_rating)
