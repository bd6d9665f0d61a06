"""Contract models for data validation."""

from .commands import HelpArea, HelpCommand, IncomingMessage, VipUnits
from .common import BaseContract, CombatType, EmbedColor, FrozenContract, GuildMemberLevel
from .raids import (
    HelperMethod,
    PlayerRaidResult,
    Raid,
    RaidResult,
    Team,
    TeamMember,
    TeamVariant,
    TeamVariantResult,
)
from .registry import RegisteredGuild, RegisteredUser
from .reports import Report, ReportField
from .roster import GuildInfo, GuildMember, PlayerRoster, UnitEntry, UnitInfo

__all__ = [
    "BaseContract",
    "FrozenContract",
    "CombatType",
    "EmbedColor",
    "GuildMemberLevel",
    "HelperMethod",
    "Raid",
    "Team",
    "TeamVariant",
    "TeamMember",
    "RaidResult",
    "PlayerRaidResult",
    "TeamVariantResult",
    "RegisteredUser",
    "RegisteredGuild",
    "Report",
    "ReportField",
    "IncomingMessage",
    "HelpArea",
    "HelpCommand",
    "VipUnits",
    "PlayerRoster",
    "UnitEntry",
    "UnitInfo",
    "GuildInfo",
    "GuildMember",
]
