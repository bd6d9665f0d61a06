"""User commands: ally code registration, guild roster check and GAC VIP units."""

from __future__ import annotations

import logging

from src.core.services.command_context import (
    NOT_REGISTERED,
    BotDeps,
    CommandContext,
    Handler,
    choose_ally_code,
    player_names,
    unit_list,
)
from src.core.services.static_config import load_vip_units
from src.core.utils.ally_code import is_ally_code, normalize_ally_code
from src.core.utils.clamp import add_fields
from src.core.views.report_builder import SOURCE_SWGOH_HELP, mention, reply_report

logger = logging.getLogger(__name__)

REGISTER_PATTERN = r"^([\d-]+)\.register$"
UNREGISTER_PATTERN = r"^([\d-]+)\.unregister$"


def invalid_ally_code(value: str) -> str:
    return f'Ummm... "{value}" does not look like a valid 9 digit ally code...'


def unknown_unit(name: str) -> str:
    return f'I know Echo, I know Fives... Who is "{name}"???'


class UserCommands:
    def __init__(self, deps: BotDeps) -> None:
        self.deps = deps

    def routes(self) -> dict[str, Handler]:
        return {
            "allycode": self.ally_code,
            "guildlist": self.guild_list,
            "gl": self.guild_list,
            "gac.add": self.gac_add,
            "grandarena.add": self.gac_add,
            "gac.remove": self.gac_remove,
            "grandarena.remove": self.gac_remove,
            "gac.list": self.gac_list,
            "grandarena.list": self.gac_list,
        }

    def patterns(self) -> dict[str, Handler]:
        return {
            REGISTER_PATTERN: self.register,
            UNREGISTER_PATTERN: self.unregister,
        }

    async def register(self, ctx: CommandContext) -> None:
        raw = ctx.command.split(".")[0]
        if not is_ally_code(raw):
            await ctx.reply("Register", invalid_ally_code(raw))
            return

        ally_code = normalize_ally_code(raw)
        user_id = ctx.target_id

        if self.deps.registry.register_user(user_id, ally_code):
            text = "You're now a soldier of our squadron!"
        else:
            text = "You're already a member of our squadron! Why are you trying to enlist twice???"
        await ctx.transport.send_report(reply_report("Register", f"{mention(user_id)} {text}"))

    async def unregister(self, ctx: CommandContext) -> None:
        raw = ctx.command.split(".")[0]
        if not is_ally_code(raw):
            await ctx.reply("Unregister", invalid_ally_code(raw))
            return

        ally_code = normalize_ally_code(raw)
        user_id = ctx.mentions[0] if ctx.mentions else self.deps.registry.get_discord_id(ally_code)

        if user_id is None:
            await ctx.reply("Unregister", f'"{ally_code}" does not seem to be a member of our squadron...')
            return

        if self.deps.registry.unregister_user(user_id, ally_code):
            text = "You're officially out of our squadron. Don't bother to come back!"
        else:
            text = "You don't seem to be a member of our squadron. Try enlisting first!"
        await ctx.transport.send_report(reply_report("Unregister", f"{mention(user_id)} {text}"))

    async def ally_code(self, ctx: CommandContext) -> None:
        user_id = ctx.target_id
        ally_codes = self.deps.registry.get_ally_codes(user_id)

        if not ally_codes:
            await ctx.reply("Ally code", f"{mention(user_id)} does not seem to be a member of our squadron!")
        elif len(ally_codes) == 1:
            await ctx.reply("Ally code", f"The ally code for {mention(user_id)} is {ally_codes[0]}!")
        else:
            names = await player_names(ctx, ally_codes)
            report = reply_report(
                "Ally code", f"{ctx.author} These are the ally codes registered to {mention(user_id)}:"
            )
            listing = "\n".join(f"`{code}` **{names[code]}**" for code in ally_codes)
            await ctx.transport.send_report(add_fields(report, "Ally codes", listing))

    async def guild_list(self, ctx: CommandContext) -> None:
        """List guild members split into registered and unregistered soldiers."""
        if len(ctx.args) == 1:
            if not is_ally_code(ctx.args[0]):
                await ctx.reply("Guild List", invalid_ally_code(ctx.args[0]))
                return
            ally_code = normalize_ally_code(ctx.args[0])
        else:
            ally_code = await choose_ally_code(ctx, "Guild List")
            if ally_code is None:
                return

        guild = await self.deps.roster.get_guild(ally_code)
        if guild is None:
            await ctx.reply("Guild List", f'Cannot fetch guild data for ally code "{ally_code}" from swgoh.help!')
            return

        registered: list[str] = []
        unregistered: list[str] = []
        for member in guild.roster:
            discord_id = self.deps.registry.get_discord_id(str(member.ally_code))
            if discord_id is None:
                unregistered.append(f"`{member.ally_code}` **{member.name}**")
            else:
                registered.append(f"`{member.ally_code}` **{member.name}** {mention(discord_id)}")

        report = reply_report(
            "Guild List",
            f"{ctx.author} Here's the full list of registered soldiers for squadron "
            f'"{guild.name}" ({len(registered)}/{len(guild.roster)} members).',
            SOURCE_SWGOH_HELP,
        )
        add_fields(report, "Registered", "\n".join(registered))
        add_fields(report, "Unregistered", "\n".join(unregistered))
        await ctx.transport.send_report(report)

    async def gac_add(self, ctx: CommandContext) -> None:
        unit_name = " ".join(ctx.args)
        if not unit_name:
            await ctx.reply("Grand Arena", "Tell me the name of the unit to add!")
            return

        user = self.deps.registry.get_user(ctx.author_id)
        if user is None:
            await ctx.reply("Grand Arena", NOT_REGISTERED)
            return

        unit = self.deps.units.find_unit(unit_name)
        if unit is None:
            await ctx.reply("Grand Arena", unknown_unit(unit_name))
            return

        if unit.name_key in user.vip_units_gac:
            await ctx.reply("Grand Arena", f'You have already added "{unit_name}" to your custom GAC unit list!')
            return

        user.vip_units_gac.append(unit.name_key)
        self.deps.registry.save_users()
        await ctx.reply("Grand Arena", f'Added "{unit_name}" to your custom GAC unit list!')

    async def gac_remove(self, ctx: CommandContext) -> None:
        unit_name = " ".join(ctx.args)
        if not unit_name:
            await ctx.reply("Grand Arena", "Tell me the name of the unit to remove!")
            return

        user = self.deps.registry.get_user(ctx.author_id)
        if user is None:
            await ctx.reply("Grand Arena", NOT_REGISTERED)
            return

        unit = self.deps.units.find_unit(unit_name)
        if unit is None:
            await ctx.reply("Grand Arena", unknown_unit(unit_name))
            return

        if unit.name_key not in user.vip_units_gac:
            await ctx.reply("Grand Arena", f'You have not added "{unit_name}" to your custom GAC unit list!')
            return

        user.vip_units_gac.remove(unit.name_key)
        self.deps.registry.save_users()
        await ctx.reply("Grand Arena", f'Removed "{unit_name}" from your custom GAC unit list!')

    async def gac_list(self, ctx: CommandContext) -> None:
        user = self.deps.registry.get_user(ctx.author_id)
        if user is None:
            await ctx.reply("Grand Arena", NOT_REGISTERED)
            return

        defaults = load_vip_units(self.deps.settings.vip_units_path).gac
        report = reply_report(
            "Grand Arena", f"{ctx.author} Here is the list of units for GAC comparison:"
        )
        add_fields(report, "Default", unit_list(self.deps.units, defaults))
        add_fields(report, "Custom", unit_list(self.deps.units, user.vip_units_gac))
        await ctx.transport.send_report(report)
