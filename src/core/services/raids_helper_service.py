"""Raids helper command.

Usage: ``raids.helper [guild] [doable|full|best]``

Scores the requester's roster (or their whole guild with ``guild``) against
every raid of the catalog and replies with one set of reports per raid, in
catalog order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.contracts.raids import HelperMethod, Raid
from src.contracts.reports import Report
from src.contracts.roster import PlayerRoster
from src.core.raids import (
    build_member_index,
    calculate_team_achievements,
    load_catalog,
    parse_method,
    render_raid_report,
    select_results,
)
from src.core.services.command_context import BotDeps, CommandContext, Handler, choose_ally_code

logger = logging.getLogger(__name__)

TITLE = "Raids Helper"


class RaidsHelperService:
    def __init__(self, deps: BotDeps) -> None:
        self.deps = deps

    def routes(self) -> dict[str, Handler]:
        return {"raids.helper": self.handle}

    def build_reports(
        self,
        raid: Raid,
        players: Sequence[PlayerRoster],
        method: HelperMethod,
        requester: str,
    ) -> list[Report]:
        """Score, select and render one raid."""
        logger.info(f'Processing raid "{raid.name}"')
        member_index = build_member_index(raid, self.deps.units)
        result = calculate_team_achievements(raid, member_index, players)
        return render_raid_report(raid, select_results(result, method), method, requester)

    async def _status(self, ctx: CommandContext, text: str):
        return await ctx.transport.send_text(f"{ctx.author} {text}")

    async def _dismiss(self, ctx: CommandContext, message) -> None:
        await ctx.transport.delete(message, self.deps.settings.message_delete_delay_seconds)

    async def _fetch_players(self, ctx: CommandContext, ally_code: str) -> list[PlayerRoster] | None:
        if "guild" not in (arg.lower() for arg in ctx.args):
            return await self.deps.roster.get_players([ally_code])

        status = await self._status(ctx, "Retrieving guild player list from swgoh.help...")
        try:
            guild = await self.deps.roster.get_guild(ally_code)
        finally:
            await self._dismiss(ctx, status)

        if guild is None:
            await ctx.reply(TITLE, f"Cannot fetch guild data for ally code {ally_code}!")
            return None

        status = await self._status(ctx, "Retrieving guild roster from swgoh.help...")
        try:
            return await self.deps.roster.get_players([str(m.ally_code) for m in guild.roster])
        finally:
            await self._dismiss(ctx, status)

    async def handle(self, ctx: CommandContext) -> None:
        ally_code = await choose_ally_code(ctx, TITLE)
        if ally_code is None:
            return

        logger.info("Retrieving player data from swgoh.help")
        players = await self._fetch_players(ctx, ally_code)
        if players is None:
            return

        method = parse_method(ctx.args)
        logger.info(f'Using "{method.value}" reporting method')

        status = await self._status(ctx, f'Generating command output for method "{method.value}"...')
        try:
            for raid in load_catalog(self.deps.settings.raids_catalog_path):
                for report in self.build_reports(raid, players, method, ctx.author):
                    await ctx.transport.send_report(report)
        finally:
            await self._dismiss(ctx, status)
