"""Futebol attendance panel and 5v5 team commands.

/futebol   walks the roster with a single Yes/No panel that is edited in place.
/teams     fairest split of the last confirmed list for the channel.
/nextbest  an alternative split ranked by fairness.
/remake    random pick and random split.
"""

import asyncio
import logging
import uuid
from typing import Final

import discord
from discord import app_commands

from bots.config import DEFAULT_PLAYERS, RosterConfig, build_roster_config
from team_bot import render
from team_bot.attendance import AttendanceSequencer
from team_bot.balancer import CANONICAL_ASSIGNMENTS, RANDOM_SEARCH_SAMPLES
from team_bot.errors import (
    AlreadyActiveError,
    AlreadyFinishedError,
    InsufficientPlayersError,
    NoConfirmedRosterError,
    RankOutOfRangeError,
    StalePanelError,
    UnauthorizedError,
)
from team_bot.models import AttendanceSession, RatingTable, TeamPolicy
from team_bot.teams import generate_teams

BTN_YES: Final[str] = "att:yes"
BTN_NO: Final[str] = "att:no"
MAX_RANK: Final[int] = len(CANONICAL_ASSIGNMENTS)

# ---------- Discord client ----------
intents = discord.Intents.default()
intents.guilds = True

bot = discord.Client(intents=intents)
tree = app_commands.CommandTree(bot)

# ---------- Roster / state ----------
_roster_config: RosterConfig = build_roster_config(DEFAULT_PLAYERS)
ratings: RatingTable = _roster_config.ratings
sequencer = AttendanceSequencer(_roster_config.roster)
search_samples: int = RANDOM_SEARCH_SAMPLES

log = logging.getLogger("futebol-bot")


class AttendanceView(discord.ui.View):
    """Yes/No buttons bound to one attendance session."""

    def __init__(self, session: AttendanceSession) -> None:
        super().__init__(timeout=None)
        self.session = session
        self.panel_id = uuid.uuid4().hex

        if hasattr(self, "answer_yes"):
            self.answer_yes.custom_id = f"{BTN_YES}:{self.panel_id}"
        if hasattr(self, "answer_no"):
            self.answer_no.custom_id = f"{BTN_NO}:{self.panel_id}"

    @discord.ui.button(label="Yes", style=discord.ButtonStyle.success)
    async def answer_yes(
        self, interaction: discord.Interaction, _: discord.ui.Button
    ) -> None:
        await self.record(interaction, True)

    @discord.ui.button(label="No", style=discord.ButtonStyle.danger)
    async def answer_no(
        self, interaction: discord.Interaction, _: discord.ui.Button
    ) -> None:
        await self.record(interaction, False)

    async def record(self, interaction: discord.Interaction, yes: bool) -> None:
        message_id = interaction.message.id if interaction.message else None
        try:
            outcome = sequencer.answer(
                self.session, interaction.user.id, message_id, yes
            )
        except UnauthorizedError:
            await interaction.response.send_message(
                "Only the person who started the attendance check can answer here.",
                ephemeral=True,
            )
            return
        except StalePanelError:
            await interaction.response.send_message(
                "This panel is not the active one. Run **/futebol** again if needed.",
                ephemeral=True,
            )
            return
        except AlreadyFinishedError:
            await interaction.response.send_message(
                "This attendance check is already finished.", ephemeral=True
            )
            return

        try:
            if outcome.finished:
                self.stop()
                await interaction.response.edit_message(
                    content=render.attendance_summary(outcome), view=None
                )
            else:
                await interaction.response.edit_message(
                    content=render.attendance_prompt(outcome.next_player), view=self
                )
        except discord.HTTPException as exc:
            log.exception("Failed to update attendance panel: %s", exc)


# ---------- /futebol command ----------
@tree.command(
    name="futebol",
    description="Start attendance check (fixed panel with buttons)",
)
async def futebol(interaction: discord.Interaction) -> None:
    try:
        session, first_player = sequencer.start(
            interaction.user.id, interaction.channel_id
        )
    except AlreadyActiveError:
        await interaction.response.send_message(
            "There is already an attendance check running in this channel for you.",
            ephemeral=True,
        )
        return

    view = AttendanceView(session)
    try:
        await interaction.response.send_message(
            render.attendance_prompt(first_player), view=view
        )
        message = await interaction.original_response()
    except discord.HTTPException as exc:
        sequencer.sessions.remove(session)
        log.exception("Failed to post attendance panel: %s", exc)
        return

    sequencer.bind_message(session, message.id)


# ---------- Team commands ----------
async def announce_teams(
    interaction: discord.Interaction, policy: TeamPolicy, *, rank: int = 0
) -> None:
    if not sequencer.confirmed_for(interaction.channel_id):
        await interaction.response.send_message(
            "No confirmed list found for this channel yet. Run **/futebol** first.",
            ephemeral=True,
        )
        return

    await interaction.response.defer(thinking=True)
    try:
        result = await asyncio.to_thread(
            generate_teams,
            sequencer.confirmed,
            interaction.channel_id,
            policy,
            ratings=ratings,
            rank=rank,
            samples=search_samples,
        )
    except InsufficientPlayersError as exc:
        await interaction.followup.send(render.insufficient_players(exc))
        return
    except RankOutOfRangeError as exc:
        await interaction.followup.send(
            f"Only {exc.available} distinct splits exist. "
            f"Pick a rank between 1 and {exc.available}."
        )
        return
    except NoConfirmedRosterError:
        await interaction.followup.send(
            "No confirmed list found for this channel yet. Run **/futebol** first."
        )
        return

    await interaction.followup.send(render.teams_message(result, ratings))


@tree.command(name="teams", description="Generate optimal fair 5v5 teams using ranks")
async def teams(interaction: discord.Interaction) -> None:
    await announce_teams(interaction, TeamPolicy.OPTIMAL)


@tree.command(
    name="nextbest",
    description="Show the next fairest 5v5 split (2 = second best, 3 = third...)",
)
@app_commands.describe(rank="Position in the fairness ranking (1 = fairest)")
async def nextbest(
    interaction: discord.Interaction,
    rank: app_commands.Range[int, 1, MAX_RANK] = 2,
) -> None:
    await announce_teams(interaction, TeamPolicy.RANKED, rank=rank - 1)


@tree.command(name="remake", description="Remake teams (random, may be less fair)")
async def remake(interaction: discord.Interaction) -> None:
    await announce_teams(interaction, TeamPolicy.RANDOM)


def configure_runtime(
    *,
    client: discord.Client | None = None,
    command_tree: app_commands.CommandTree | None = None,
    roster_config: RosterConfig | None = None,
    samples: int | None = None,
) -> None:
    """Reconfigure module globals for the bot runtime."""

    global bot, tree, ratings, sequencer, search_samples, _roster_config

    if client is not None:
        bot = client

    prev_tree = tree
    if command_tree is not None:
        tree = command_tree

    if prev_tree is not tree:
        for command in prev_tree.get_commands():
            if tree.get_command(command.name) is None:
                tree.add_command(command.copy())

    if roster_config is not None:
        _roster_config = roster_config
        ratings = roster_config.ratings
        sequencer = AttendanceSequencer(roster_config.roster)

    if samples is not None:
        search_samples = samples
