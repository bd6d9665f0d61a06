"""Per-request command context and helpers shared by command handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.core.errors import ProviderError
from src.core.ports import RegistryPort, RosterProviderPort, TransportPort, UnitResolverPort
from src.core.ports.transport_port import CHOICE_EMOJIS
from src.core.views.report_builder import mention, reply_report

logger = logging.getLogger(__name__)

NOT_REGISTERED = "You do not seem to be a member of our squadron!"


@dataclass(frozen=True)
class BotDeps:
    """Adapters and settings shared by every handler."""

    settings: Settings
    registry: RegistryPort
    roster: RosterProviderPort
    units: UnitResolverPort


@dataclass
class CommandContext:
    """Everything a handler needs to answer one command."""

    author_id: str
    command: str
    args: list[str]
    transport: TransportPort
    deps: BotDeps
    mentions: list[str] = field(default_factory=list)
    guild_id: str | None = None
    request_count: int = 0

    @property
    def author(self) -> str:
        """Mention of the requester."""
        return mention(self.author_id)

    @property
    def target_id(self) -> str:
        """First mentioned user, or the requester."""
        return self.mentions[0] if self.mentions else self.author_id

    async def reply(self, title: str, text: str, footer: str | None = None) -> object:
        return await self.transport.send_report(reply_report(title, f"{self.author} {text}", footer))


Handler = Callable[[CommandContext], Awaitable[None]]


async def player_names(ctx: CommandContext, ally_codes: list[str]) -> dict[str, str]:
    """Map ally codes to player names ("???" when unavailable)."""
    names = {code: "???" for code in ally_codes}
    try:
        players = await ctx.deps.roster.get_players(ally_codes)
    except ProviderError as e:
        logger.warning(f"Could not fetch player names: {e}")
        return names

    for player in players:
        names[str(player.ally_code)] = player.name
    return names


async def choose_ally_code(ctx: CommandContext, title: str) -> str | None:
    """Pick the requester's ally code, asking when several are registered.

    Replies to the requester and returns None when they are not registered
    or do not answer the prompt in time.
    """
    ally_codes = ctx.deps.registry.get_ally_codes(ctx.author_id)

    if not ally_codes:
        await ctx.reply(title, NOT_REGISTERED)
        return None
    if len(ally_codes) == 1:
        return ally_codes[0]

    ally_codes = ally_codes[: len(CHOICE_EMOJIS)]
    names = await player_names(ctx, ally_codes)
    options = "\n".join(
        f"{CHOICE_EMOJIS[i]} `{code}` **{names[code]}**" for i, code in enumerate(ally_codes)
    )
    prompt = reply_report(
        title,
        f"{ctx.author} You have multiple ally codes registered. Which one do you want?\n\n{options}",
    )

    timeout = ctx.deps.settings.reaction_timeout_seconds
    choice = await ctx.transport.ask_choice(prompt, len(ally_codes), timeout)
    if choice is None:
        logger.info(f"Ally code choice timed out for {ctx.author_id}")
        await ctx.transport.send_text(
            f"{ctx.author} No reaction after {timeout} seconds, operation canceled"
        )
        return None

    return ally_codes[choice]


def unit_list(units: UnitResolverPort, names: Iterable[str]) -> str:
    """Display names of the resolvable units, one per line."""
    resolved = (units.find_unit(name) for name in names)
    return "\n".join(unit.name_key for unit in resolved if unit is not None)
