"""General commands: help and info."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from src.core.errors import ProviderError
from src.core.services.command_context import BotDeps, CommandContext, Handler
from src.core.services.static_config import load_help
from src.core.utils.clamp import code_block
from src.core.views.report_builder import reply_report

logger = logging.getLogger(__name__)


class GeneralCommands:
    def __init__(self, deps: BotDeps) -> None:
        self.deps = deps

    def routes(self) -> dict[str, Handler]:
        return {
            "help": self.help,
            "info": self.info,
        }

    async def help(self, ctx: CommandContext) -> None:
        areas = load_help(self.deps.settings.help_path)

        if not ctx.args:
            report = reply_report("Help", f"{ctx.author} So, you need help... Available options are:")
            for area in areas:
                syntaxes = "\n".join(command.syntax for command in area.commands)
                report.add_field(area.area, code_block(syntaxes))
            await ctx.transport.send_report(report)
            return

        if len(ctx.args) > 1:
            await ctx.reply(
                "Help", "Stop fooling around soldier! Will you tell me the command you need help for?"
            )
            return

        name = ctx.args[0].lower()
        logger.debug(f'Requesting help for command "{name}"')
        command = next(
            (command for area in areas for command in area.commands if command.name == name),
            None,
        )
        if command is None:
            await ctx.reply("Help", f'Stop wasting my time! There is no such command as "{name}"!')
            return

        await ctx.reply(
            f'Help on "{name}"',
            "Here's the help you have requested:\n\n"
            f"**Syntax**: {command.syntax}\n"
            f"**Description**: {command.description}\n"
            f"**Example**: `{command.example}`",
        )

    async def info(self, ctx: CommandContext) -> None:
        settings = self.deps.settings
        lines = [
            "We are part of the most pivotal moment in the history of the Republic.",
            "",
            "**General:**",
            f"- version: **{settings.app_version}**",
            f"- prefix: **{settings.bot_prefix}**",
        ]
        if settings.bot_invite_url:
            lines.append(f"- [Invite me to your server]({settings.bot_invite_url})")
        lines += [
            "",
            "**Statistics:**",
            f"- requests processed: **{ctx.request_count:,}**",
            f"- registered users: **{len(self.deps.registry.get_users()):,}**",
        ]

        ally_codes = self.deps.registry.get_ally_codes(ctx.author_id)
        if ally_codes:
            lines += ["", "**Updates:**", f"- swgoh.help: {await self._last_update(ally_codes[0])}"]

        lines += ["", "Better hurry sir, you're missing out all the fun!"]
        await ctx.reply("Info", "\n".join(lines))

    async def _last_update(self, ally_code: str) -> str:
        try:
            player = await self.deps.roster.get_player(ally_code)
        except ProviderError as e:
            logger.warning(f"Could not fetch last update for {ally_code}: {e}")
            return "unavailable"

        if player is None or player.updated is None:
            return "unknown"
        return datetime.fromtimestamp(player.updated / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M UTC")
