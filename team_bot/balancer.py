"""Team selection and 5v5 splitting.

Every split is described by the players placed on Team A; the rest form
Team B. A group of players is identified by its bitmask (bit ``i`` set when
player ``i`` is in the group) and candidates are tried in increasing mask
order. Every search keeps the first strictly better candidate, so results
are deterministic for a given player order and rating table.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterator, Sequence
from operator import itemgetter

from .errors import InsufficientPlayersError, InvalidCountError, RankOutOfRangeError
from .models import (
    PLAYERS_PER_GAME,
    TEAM_SIZE,
    RatingTable,
    SelectionMode,
    SelectionResult,
    TeamSplit,
)

log = logging.getLogger(__name__)

EXHAUSTIVE_LIMIT = 20
RANDOM_SEARCH_SAMPLES = 8000
RANDOM_SEARCH_THRESHOLD = 0.01


def mask_order_combinations(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Yield the ``k``-sized subsets of ``range(n)`` in increasing mask order."""
    if k == 0:
        yield ()
        return
    for top in range(k - 1, n):
        for rest in mask_order_combinations(top, k - 1):
            yield rest + (top,)


# Of each mirror pair only the lower mask can be the first strictly better
# candidate, and that is always the side without the last player.
CANONICAL_ASSIGNMENTS: tuple[tuple[int, ...], ...] = tuple(
    combo
    for combo in mask_order_combinations(PLAYERS_PER_GAME, TEAM_SIZE)
    if PLAYERS_PER_GAME - 1 not in combo
)
_TEAM_A_GETTERS = tuple(itemgetter(*combo) for combo in CANONICAL_ASSIGNMENTS)


def rating_of(name: str, ratings: RatingTable) -> float:
    return ratings.rating_of(name)


def _require_ten(players: Sequence[str]) -> tuple[str, ...]:
    players = tuple(players)
    if len(players) != PLAYERS_PER_GAME:
        raise InvalidCountError(
            f"Expected exactly {PLAYERS_PER_GAME} players, got {len(players)}"
        )
    return players


def _require_minimum(players: Sequence[str]) -> tuple[str, ...]:
    players = tuple(players)
    if len(players) < PLAYERS_PER_GAME:
        raise InsufficientPlayersError(len(players), PLAYERS_PER_GAME)
    return players


def _assignment_sums(values: Sequence[float]) -> tuple[float, list[float]]:
    total = sum(values)
    return total, [sum(getter(values)) for getter in _TEAM_A_GETTERS]


def _best_assignment(values: Sequence[float]) -> tuple[int, float, float, float]:
    """Return (assignment index, team A sum, score, total) for ten ratings."""
    total = sum(values)
    best_index = 0
    best_sum = 0.0
    best_diff = math.inf
    for index, getter in enumerate(_TEAM_A_GETTERS):
        sum_a = sum(getter(values))
        diff = abs(sum_a - (total - sum_a))
        if diff < best_diff:
            best_index, best_sum, best_diff = index, sum_a, diff
            if diff == 0.0:
                break
    return best_index, best_sum, best_diff, total


def _build_split(
    players: tuple[str, ...], assignment: tuple[int, ...], sum_a: float, total: float
) -> TeamSplit:
    chosen = set(assignment)
    team_a = tuple(players[i] for i in assignment)
    team_b = tuple(name for i, name in enumerate(players) if i not in chosen)
    return TeamSplit(team_a=team_a, team_b=team_b, sum_a=sum_a, sum_b=total - sum_a)


def split_optimal(players: Sequence[str], ratings: RatingTable) -> TeamSplit:
    """Return the fairest 5v5 split of exactly ten players."""
    ten = _require_ten(players)
    values = [ratings.rating_of(name) for name in ten]
    index, sum_a, _, total = _best_assignment(values)
    return _build_split(ten, CANONICAL_ASSIGNMENTS[index], sum_a, total)


def ranked_partitions(players: Sequence[str], ratings: RatingTable) -> list[TeamSplit]:
    """Return every distinct 5v5 partition, fairest first.

    Mirror pairs appear once. Equal scores keep increasing mask order.
    """
    ten = _require_ten(players)
    values = [ratings.rating_of(name) for name in ten]
    total, sums = _assignment_sums(values)
    order = sorted(
        range(len(CANONICAL_ASSIGNMENTS)),
        key=lambda idx: abs(sums[idx] - (total - sums[idx])),
    )
    return [
        _build_split(ten, CANONICAL_ASSIGNMENTS[idx], sums[idx], total)
        for idx in order
    ]


def ranked_splits(players: Sequence[str], rank: int, ratings: RatingTable) -> TeamSplit:
    """Return the partition at ``rank`` (0 = fairest)."""
    partitions = ranked_partitions(players, ratings)
    if rank < 0 or rank >= len(partitions):
        raise RankOutOfRangeError(rank, len(partitions))
    return partitions[rank]


def _finish_selection(
    players: tuple[str, ...],
    indices: Sequence[int],
    ratings: RatingTable,
    mode: SelectionMode,
) -> SelectionResult:
    chosen = set(indices)
    ten = tuple(players[i] for i in sorted(chosen))
    substitutes = tuple(name for i, name in enumerate(players) if i not in chosen)
    split = split_optimal(ten, ratings)
    return SelectionResult(
        chosen=ten,
        split=split,
        substitutes=substitutes,
        score=split.score,
        mode=mode,
    )


def _exhaustive_search(values: Sequence[float]) -> tuple[tuple[int, ...], float]:
    best_indices: tuple[int, ...] = tuple(range(PLAYERS_PER_GAME))
    best_diff = math.inf
    evaluated = 0
    for indices in mask_order_combinations(len(values), PLAYERS_PER_GAME):
        evaluated += 1
        _, _, diff, _ = _best_assignment([values[i] for i in indices])
        if diff < best_diff:
            best_indices, best_diff = indices, diff
            if diff == 0.0:
                break
    log.debug(
        "Exhaustive search evaluated %d subsets (best %.2f)", evaluated, best_diff
    )
    return best_indices, best_diff


def _random_search(
    values: Sequence[float], samples: int, rng: random.Random
) -> tuple[tuple[int, ...], float]:
    best_indices: tuple[int, ...] = tuple(range(PLAYERS_PER_GAME))
    best_diff = math.inf
    population = range(len(values))
    for attempt in range(samples):
        indices = tuple(sorted(rng.sample(population, PLAYERS_PER_GAME)))
        _, _, diff, _ = _best_assignment([values[i] for i in indices])
        if diff < best_diff:
            best_indices, best_diff = indices, diff
            if best_diff < RANDOM_SEARCH_THRESHOLD:
                log.debug("Random search hit threshold after %d samples", attempt + 1)
                break
    return best_indices, best_diff


def select_and_split_optimal(
    confirmed: Sequence[str],
    ratings: RatingTable,
    *,
    samples: int = RANDOM_SEARCH_SAMPLES,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Pick the ten confirmed players that allow the fairest split.

    Up to twenty players every ten-player subset is checked. Larger groups
    fall back to random sampling and the result is marked approximate.
    """
    players = _require_minimum(confirmed)
    if len(players) == PLAYERS_PER_GAME:
        return _finish_selection(
            players, range(PLAYERS_PER_GAME), ratings, SelectionMode.EXACT
        )

    values = [ratings.rating_of(name) for name in players]
    if len(players) <= EXHAUSTIVE_LIMIT:
        indices, _ = _exhaustive_search(values)
        mode = SelectionMode.EXACT
    else:
        indices, _ = _random_search(values, samples, rng or random.Random())
        mode = SelectionMode.APPROXIMATE
    return _finish_selection(players, indices, ratings, mode)


def select_random(
    confirmed: Sequence[str],
    ratings: RatingTable,
    *,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Pick ten players at random and split them at random."""
    players = _require_minimum(confirmed)
    rng = rng or random.Random()

    pool = list(range(len(players)))
    rng.shuffle(pool)
    chosen = set(pool[:PLAYERS_PER_GAME])
    substitutes = tuple(name for i, name in enumerate(players) if i not in chosen)

    ten = [players[i] for i in pool[:PLAYERS_PER_GAME]]
    rng.shuffle(ten)
    team_a = tuple(ten[:TEAM_SIZE])
    team_b = tuple(ten[TEAM_SIZE:])
    split = TeamSplit(
        team_a=team_a,
        team_b=team_b,
        sum_a=ratings.total(team_a),
        sum_b=ratings.total(team_b),
    )
    return SelectionResult(
        chosen=tuple(name for i, name in enumerate(players) if i in chosen),
        split=split,
        substitutes=substitutes,
        score=split.score,
        mode=SelectionMode.RANDOM,
    )


__all__ = [
    "CANONICAL_ASSIGNMENTS",
    "mask_order_combinations",
    "EXHAUSTIVE_LIMIT",
    "RANDOM_SEARCH_SAMPLES",
    "RANDOM_SEARCH_THRESHOLD",
    "rating_of",
    "split_optimal",
    "ranked_partitions",
    "ranked_splits",
    "select_and_split_optimal",
    "select_random",
]
