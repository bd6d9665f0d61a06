"""
Data contracts for player/guild data served by swgoh.help.

Only the fields the bot consumes are modeled; unknown upstream keys are
ignored so API additions do not break parsing.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.contracts.common import CombatType, GuildMemberLevel

MAX_GEAR_TIER = 13
"""Gear tier at which relic tiers unlock."""


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Skill(_UpstreamModel):
    """Unit ability state."""

    id: str
    tier: int = 0
    tiers: int = Field(0, description="Maximum tier for this skill")
    is_zeta: bool = Field(False, alias="isZeta")

    @property
    def zeta_learned(self) -> bool:
        return self.is_zeta and self.tiers > 0 and self.tier >= self.tiers


class Relic(_UpstreamModel):
    current_tier: int = Field(0, alias="currentTier")


class UnitEntry(_UpstreamModel):
    """One owned unit in a player roster."""

    def_id: str = Field(..., alias="defId")
    name_key: str | None = Field(None, alias="nameKey")
    rarity: int = 0
    level: int = 0
    gear: int = 0
    relic: Relic | None = None
    skills: list[Skill] = Field(default_factory=list)
    combat_type: CombatType = Field(CombatType.CHARACTER, alias="combatType")

    @property
    def zeta_count(self) -> int:
        """Number of zeta abilities learned."""
        return sum(1 for skill in self.skills if skill.zeta_learned)

    @property
    def relic_tier(self) -> int:
        """Relic tier as displayed in game (0 unless at max gear)."""
        if self.gear != MAX_GEAR_TIER or self.relic is None:
            return 0
        # upstream stores locked tiers below 2; clamped instead of going negative
        return max(0, self.relic.current_tier - 2)


class PlayerRoster(_UpstreamModel):
    """Player profile with owned units."""

    name: str
    ally_code: int | str = Field(..., alias="allyCode")
    guild_ref_id: str | None = Field(None, alias="guildRefId")
    guild_name: str | None = Field(None, alias="guildName")
    updated: int | None = Field(None, description="Last update (epoch milliseconds)")
    roster: list[UnitEntry] = Field(default_factory=list)

    def find_unit(self, base_id: str) -> UnitEntry | None:
        return next((unit for unit in self.roster if unit.def_id == base_id), None)


class GuildMember(_UpstreamModel):
    name: str
    ally_code: int | str = Field(..., alias="allyCode")
    guild_member_level: int = Field(GuildMemberLevel.MEMBER, alias="guildMemberLevel")

    @property
    def is_officer(self) -> bool:
        """Leader or officer rank."""
        return self.guild_member_level in (GuildMemberLevel.LEADER, GuildMemberLevel.OFFICER)


class GuildInfo(_UpstreamModel):
    id: str
    name: str
    roster: list[GuildMember] = Field(default_factory=list)

    def find_member(self, ally_code: str) -> GuildMember | None:
        return next((m for m in self.roster if str(m.ally_code) == str(ally_code)), None)


class UnitInfo(_UpstreamModel):
    """Static unit definition resolved from a name or acronym."""

    base_id: str = Field(..., alias="baseId")
    name_key: str = Field(..., alias="nameKey")
    desc_key: str | None = Field(None, alias="descKey")
    combat_type: CombatType = Field(CombatType.CHARACTER, alias="combatType")
