from __future__ import annotations

import logging
import random
from collections.abc import Hashable
from dataclasses import replace

from . import balancer
from .errors import NoConfirmedRosterError
from .models import RatingTable, SelectionResult, TeamPolicy
from .storage import ConfirmedRosterStore

log = logging.getLogger(__name__)


def generate_teams(
    store: ConfirmedRosterStore,
    channel_id: Hashable,
    policy: TeamPolicy | str,
    *,
    ratings: RatingTable,
    rank: int = 0,
    samples: int = balancer.RANDOM_SEARCH_SAMPLES,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Build teams from the channel's latest confirmed list.

    ``ranked`` picks the ten players the same way ``optimal`` does and then
    returns the partition at ``rank`` (0 = fairest) for those ten.
    """
    policy = TeamPolicy(policy)
    confirmed = store.get(channel_id)
    if not confirmed:
        raise NoConfirmedRosterError(f"No confirmed list for channel {channel_id}")

    if policy is TeamPolicy.RANDOM:
        result = balancer.select_random(confirmed, ratings, rng=rng)
    else:
        result = balancer.select_and_split_optimal(
            confirmed, ratings, samples=samples, rng=rng
        )
        if policy is TeamPolicy.RANKED:
            split = balancer.ranked_splits(result.chosen, rank, ratings)
            result = replace(result, split=split, score=split.score, rank=rank)

    log.info(
        "Generated %s teams for %s: diff %.2f, %d substitutes (%s)",
        policy.value,
        channel_id,
        result.score,
        len(result.substitutes),
        result.mode.value,
    )
    return result


__all__ = ["generate_teams"]
