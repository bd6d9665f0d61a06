"""
Data contracts for chat commands and the static documents they read.

``IncomingMessage`` is the transport-neutral view of a chat message; help
topics and default VIP unit lists are loaded from ``config/*.json``.
"""

from pydantic import Field

from src.contracts.common import FrozenContract


class IncomingMessage(FrozenContract):
    """A chat message that may contain a bot command."""

    author_id: str
    author_name: str = ""
    content: str
    mentions: tuple[str, ...] = Field(
        default_factory=tuple, description="Ids of mentioned users, in message order"
    )
    guild_id: str | None = Field(None, description="Discord server id (None for DMs)")


class HelpCommand(FrozenContract):
    name: str
    syntax: str
    description: str = ""
    example: str = ""


class HelpArea(FrozenContract):
    """Group of commands listed together by ``help``."""

    area: str
    commands: tuple[HelpCommand, ...] = Field(default_factory=tuple)


class VipUnits(FrozenContract):
    """Default VIP unit names for TW and GAC comparisons."""

    tw: tuple[str, ...] = Field(default_factory=tuple)
    gac: tuple[str, ...] = Field(default_factory=tuple)
