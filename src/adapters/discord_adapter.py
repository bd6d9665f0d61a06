"""
Discord adapter for handling bot messages and replies.
This is the only module talking to discord.py: incoming messages are turned
into ``IncomingMessage`` for the command router, and ``Report`` payloads are
rendered as embeds.
"""

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

import discord
from discord.ext import commands

from src.config.settings import Settings, get_settings
from src.contracts.commands import IncomingMessage
from src.contracts.reports import Report
from src.core.ports import TransportPort
from src.core.ports.transport_port import CHOICE_EMOJIS
from src.core.services.command_router import CommandRouter

logger = logging.getLogger(__name__)


def build_embed(report: Report, settings: Settings) -> discord.Embed:
    """Convert a report into a Discord embed with the bot branding."""
    embed = discord.Embed(
        title=report.title,
        description=report.description,
        color=report.color,
        timestamp=datetime.now(UTC),
    )
    if report.thumbnail and settings.bot_thumbnail_url:
        embed.set_thumbnail(url=settings.bot_thumbnail_url)

    footer = f"{settings.app_name} {settings.app_version}"
    if report.footer:
        footer = f"{footer} - {report.footer}"
    embed.set_footer(text=footer, icon_url=settings.bot_thumbnail_url or None)

    for field in report.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    return embed


class DiscordTransport(TransportPort):
    """Replies in the channel of one incoming Discord message."""

    def __init__(self, bot: commands.Bot, message: discord.Message, settings: Settings) -> None:
        self.bot = bot
        self.message = message
        self.settings = settings

    async def send_report(self, report: Report) -> discord.Message:
        return await self.message.channel.send(embed=build_embed(report, self.settings))

    async def send_text(self, text: str) -> discord.Message:
        return await self.message.channel.send(text)

    async def delete(self, message: Any, delay: float = 0) -> None:
        try:
            await message.delete(delay=delay or None)
        except discord.NotFound:
            logger.debug("Status message already deleted")

    async def react(self, emoji: str) -> None:
        await self.message.add_reaction(emoji)

    async def ask_choice(self, report: Report, options: int, timeout: float) -> int | None:
        reactions = CHOICE_EMOJIS[:options]
        prompt = await self.send_report(report)
        for emoji in reactions:
            await prompt.add_reaction(emoji)

        def check(reaction: discord.Reaction, user: discord.abc.User) -> bool:
            return (
                reaction.message.id == prompt.id
                and user.id == self.message.author.id
                and str(reaction.emoji) in reactions
            )

        try:
            reaction, _ = await self.bot.wait_for("reaction_add", check=check, timeout=timeout)
        except asyncio.TimeoutError:
            return None
        return reactions.index(str(reaction.emoji))


class CaptainRexBot(commands.Bot):
    """Discord client for Captain Rex."""

    def __init__(self, settings: Settings, **kwargs: Any) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        intents.reactions = True

        super().__init__(
            command_prefix=settings.bot_prefix, intents=intents, help_command=None, **kwargs
        )

        self.settings = settings
        self.startup_time: datetime | None = None

    async def on_ready(self) -> None:
        """Event triggered when bot is ready."""
        self.startup_time = datetime.now(UTC)
        logger.info(f"Bot {self.user} is ready!")
        logger.info(f"Connected to {len(self.guilds)} guilds")

        await self.change_presence(
            activity=discord.Game(name=self.settings.bot_activity),
            status=discord.Status.online,
        )


class DiscordAdapter:
    """Adapter for Discord messages following hexagonal architecture."""

    def __init__(self, router: CommandRouter, settings: Settings | None = None) -> None:
        self.router = router
        self.settings = settings or get_settings()
        self.bot = CaptainRexBot(self.settings)
        self._setup_event_handlers()

    @staticmethod
    def to_incoming(message: discord.Message) -> IncomingMessage:
        return IncomingMessage(
            author_id=str(message.author.id),
            author_name=message.author.name,
            content=message.content,
            mentions=tuple(str(user.id) for user in message.mentions),
            guild_id=str(message.guild.id) if message.guild else None,
        )

    def _setup_event_handlers(self) -> None:
        """Set up event handlers for the bot."""

        @self.bot.event
        async def on_guild_join(guild: discord.Guild) -> None:
            logger.info(f"Joined guild: {guild.name} (ID: {guild.id})")

        @self.bot.event
        async def on_guild_remove(guild: discord.Guild) -> None:
            logger.info(f"Removed from guild: {guild.name} (ID: {guild.id})")

        @self.bot.event
        async def on_message(message: discord.Message) -> None:
            if message.author.bot:
                return
            transport = DiscordTransport(self.bot, message, self.settings)
            await self.router.dispatch(self.to_incoming(message), transport)

    async def start(self) -> None:
        """Start the Discord bot."""
        if not self.settings.discord_bot_token:
            raise RuntimeError("DISCORD_BOT_TOKEN is not configured")
        logger.info("Starting Discord bot...")
        await self.bot.start(self.settings.discord_bot_token)

    async def stop(self) -> None:
        """Stop the Discord bot."""
        logger.info("Stopping Discord bot...")
        await self.bot.close()
