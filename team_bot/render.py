"""Discord message text for attendance panels and team announcements."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InsufficientPlayersError
from .models import (
    PLAYERS_PER_GAME,
    AdvanceOutcome,
    RatingTable,
    SelectionMode,
    SelectionResult,
    TeamPolicy,
)

TITLES = {
    TeamPolicy.OPTIMAL: "🎯 **Optimal Fair Teams (Fixed 5v5)**",
    TeamPolicy.RANKED: "🔀 **Alternative Fair Teams (Fixed 5v5)**",
    TeamPolicy.RANDOM: "🔁 **Remake Teams (Random 5v5)**",
}


def attendance_prompt(player: str | None) -> str:
    return (
        "⚽ **Futebol Attendance**\n\n"
        f"**{player}** - are you in?\n"
        "_(Click a button. This panel will move to the next player.)_"
    )


def _bullets(names: Iterable[str]) -> list[str]:
    return [f"- {name}" for name in names]


def attendance_summary(outcome: AdvanceOutcome) -> str:
    lines = ["✅ **Attendance Finished**", ""]
    lines.append(f"**Confirmed ({len(outcome.confirmed)}):**")
    lines.extend(_bullets(outcome.confirmed))
    lines.append("")
    lines.append(f"**Not going ({len(outcome.declined)}):**")
    lines.extend(_bullets(outcome.declined))
    lines.append("")
    lines.append(
        "Run **/teams** for optimal fair teams, **/nextbest** for an alternative "
        "split, or **/remake** to reshuffle randomly."
    )
    return "\n".join(lines)


def insufficient_players(exc: InsufficientPlayersError) -> str:
    return (
        f"⚠️ You have **{exc.count}** confirmed players. "
        f"You need **{exc.required}** for fixed 5v5 ({exc.shortfall} missing)."
    )


def _rated(names: Iterable[str], ratings: RatingTable) -> list[str]:
    return [f"- {name} ({ratings.rating_of(name):.1f})" for name in names]


def _footnote(result: SelectionResult) -> str | None:
    if result.mode is SelectionMode.RANDOM:
        if result.substitutes:
            return "_(Remake mode: random pick & random split, may be less fair.)_"
        return "_(Remake mode: random split, may be less fair.)_"
    if result.rank:
        return f"_(Showing split #{result.rank + 1} by fairness.)_"
    if result.mode is SelectionMode.APPROXIMATE:
        return (
            f"_(More than 20 confirmed: I sampled random groups of {PLAYERS_PER_GAME}, "
            f"so this may not be the best possible balance. "
            f"Best diff found: {result.score:.2f})_"
        )
    if result.substitutes:
        return (
            f"_(From more than {PLAYERS_PER_GAME} confirmed, I picked the "
            f"{PLAYERS_PER_GAME} that produced the best balance. "
            f"Best diff found: {result.score:.2f})_"
        )
    return None


def teams_message(
    result: SelectionResult, ratings: RatingTable, *, title: str | None = None
) -> str:
    split = result.split
    if title is None:
        if result.mode is SelectionMode.RANDOM:
            title = TITLES[TeamPolicy.RANDOM]
        elif result.rank is not None:
            title = TITLES[TeamPolicy.RANKED]
        else:
            title = TITLES[TeamPolicy.OPTIMAL]

    lines = [title, ""]
    lines.append(f"**Team A ({split.sum_a:.1f}):**")
    lines.extend(_rated(split.team_a, ratings))
    lines.append("")
    lines.append(f"**Team B ({split.sum_b:.1f}):**")
    lines.extend(_rated(split.team_b, ratings))
    lines.append("")
    lines.append(f"**Difference (A vs B):** {split.score:.2f}")

    if result.substitutes:
        lines.append("")
        lines.append(f"**Substitutes ({len(result.substitutes)}):**")
        lines.extend(_rated(result.substitutes, ratings))

    footnote = _footnote(result)
    if footnote:
        lines.append("")
        lines.append(footnote)
    return "\n".join(lines)


__all__ = [
    "TITLES",
    "attendance_prompt",
    "attendance_summary",
    "insufficient_players",
    "teams_message",
]
