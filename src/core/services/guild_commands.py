"""Guild commands: guild registration and TW VIP units.

Changing guild-level settings (unregistering, editing the TW list) is
restricted to the guild leader and officers.
"""

from __future__ import annotations

import logging

from src.contracts.roster import GuildInfo
from src.core.services.command_context import (
    BotDeps,
    CommandContext,
    Handler,
    choose_ally_code,
    unit_list,
)
from src.core.services.static_config import load_vip_units
from src.core.services.user_commands import unknown_unit
from src.core.utils.clamp import add_fields
from src.core.views.report_builder import reply_report

logger = logging.getLogger(__name__)

OFFICERS_ONLY = "Sorry, you need to be the guild leader or an officer to use this feature!"
GUILD_NOT_REGISTERED = "Your guild is not registered. Please register it first!"


class GuildCommands:
    def __init__(self, deps: BotDeps) -> None:
        self.deps = deps

    def routes(self) -> dict[str, Handler]:
        return {
            "registerguild": self.register_guild,
            "unregisterguild": self.unregister_guild,
            "tw.add": self.tw_add,
            "territorywar.add": self.tw_add,
            "tw.remove": self.tw_remove,
            "territorywar.remove": self.tw_remove,
            "tw.list": self.tw_list,
            "territorywar.list": self.tw_list,
        }

    async def _requester_guild(
        self, ctx: CommandContext, title: str, officers_only: bool = False
    ) -> GuildInfo | None:
        """Guild of the requester's (chosen) ally code, replying on failure."""
        ally_code = await choose_ally_code(ctx, title)
        if ally_code is None:
            return None

        guild = await self.deps.roster.get_guild(ally_code)
        if guild is None:
            await ctx.reply(title, f"Cannot fetch guild data for ally code {ally_code}!")
            return None

        if officers_only:
            member = guild.find_member(ally_code)
            if member is None or not member.is_officer:
                logger.info(f"Guild setting change denied for {ctx.author_id} in {guild.id}")
                await ctx.reply(title, OFFICERS_ONLY)
                return None

        return guild

    async def register_guild(self, ctx: CommandContext) -> None:
        guild = await self._requester_guild(ctx, "Register Guild")
        if guild is None:
            return

        if self.deps.registry.register_guild(guild.id):
            await ctx.reply("Register Guild", "Your guild is now registered!")
        else:
            await ctx.reply(
                "Register Guild", "Your guild is already registered. There is no need to register it twice!"
            )

    async def unregister_guild(self, ctx: CommandContext) -> None:
        guild = await self._requester_guild(ctx, "Unregister Guild", officers_only=True)
        if guild is None:
            return

        if self.deps.registry.unregister_guild(guild.id):
            await ctx.reply("Unregister Guild", "Your guild was unregistered.")
        else:
            await ctx.reply("Unregister Guild", "Your guild does not seem to be registered!")

    async def tw_add(self, ctx: CommandContext) -> None:
        unit_name = " ".join(ctx.args)
        if not unit_name:
            await ctx.reply("Territory War", "Tell me the name of the unit to add!")
            return

        unit = self.deps.units.find_unit(unit_name)
        if unit is None:
            await ctx.reply("Territory War", unknown_unit(unit_name))
            return

        guild = await self._requester_guild(ctx, "Territory War", officers_only=True)
        if guild is None:
            return

        registered = self.deps.registry.get_guild(guild.id)
        if registered is None:
            await ctx.reply("Territory War", GUILD_NOT_REGISTERED)
            return

        if unit.name_key in registered.vip_units_tw:
            await ctx.reply(
                "Territory War", f'You have already added "{unit_name}" to your custom TW unit list!'
            )
            return

        registered.vip_units_tw.append(unit.name_key)
        self.deps.registry.save_guilds()
        await ctx.reply("Territory War", f'Added "{unit_name}" to your custom TW unit list!')

    async def tw_remove(self, ctx: CommandContext) -> None:
        unit_name = " ".join(ctx.args)
        if not unit_name:
            await ctx.reply("Territory War", "Tell me the name of the unit to remove!")
            return

        unit = self.deps.units.find_unit(unit_name)
        if unit is None:
            await ctx.reply("Territory War", unknown_unit(unit_name))
            return

        guild = await self._requester_guild(ctx, "Territory War", officers_only=True)
        if guild is None:
            return

        registered = self.deps.registry.get_guild(guild.id)
        if registered is None:
            await ctx.reply("Territory War", GUILD_NOT_REGISTERED)
            return

        if unit.name_key not in registered.vip_units_tw:
            await ctx.reply(
                "Territory War", f'It seems "{unit_name}" is not part of your custom TW unit list!'
            )
            return

        registered.vip_units_tw.remove(unit.name_key)
        self.deps.registry.save_guilds()
        await ctx.reply("Territory War", f'Removed "{unit_name}" from your custom TW unit list!')

    async def tw_list(self, ctx: CommandContext) -> None:
        defaults = load_vip_units(self.deps.settings.vip_units_path).tw
        report = reply_report(
            "Territory War", f"{ctx.author} Here is the list of units for TW guild comparison:"
        )
        add_fields(report, "Default", unit_list(self.deps.units, defaults))

        ally_code = await choose_ally_code(ctx, "Territory War")
        if ally_code is None:
            return

        player = await self.deps.roster.get_player(ally_code)
        registered = (
            self.deps.registry.get_guild(player.guild_ref_id)
            if player is not None and player.guild_ref_id
            else None
        )
        if registered is not None:
            add_fields(report, "Custom", unit_list(self.deps.units, registered.vip_units_tw))

        await ctx.transport.send_report(report)
