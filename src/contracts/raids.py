"""
Data contracts for the Raids Helper.

Catalog models (``Raid`` → ``Team`` → ``TeamVariant`` → ``TeamMember``) are
read-only templates parsed from ``config/raids_helper.json``. Scoring output
lives in ``RaidResult`` and never gets attached to the catalog.
"""

from enum import Enum

from pydantic import Field

from src.contracts.common import FrozenContract


class HelperMethod(str, Enum):
    """Raids helper reporting method."""

    BEST = "best"  # best team only (total achievement % * expected damage %)
    CLOSER = "closer"  # best team only (total achievement %)
    DOABLE = "doable"  # only teams with total achievement % = 100 %
    FULL = "full"  # full list of team alternatives


class TeamMember(FrozenContract):
    """Minimum requirements for one team member."""

    name: str = Field(..., min_length=1, description="Unit name or acronym")
    gear: int = Field(0, ge=0, description="Minimum gear tier")
    relic: int = Field(0, ge=0, description="Minimum relic tier")
    zetas: int = Field(0, ge=0, description="Minimum number of zetas")

    @property
    def required(self) -> int:
        """Requirement expressed in progress units."""
        return self.gear + self.relic + self.zetas


class TeamVariant(FrozenContract):
    """One alternative composition for a team."""

    name: str
    members: tuple[TeamMember, ...] = Field(default_factory=tuple)
    percent_damage: float = Field(
        ...,
        ge=0,
        le=100,
        alias="percentDamage",
        description="Expected damage when fully equipped (0%-100%)",
    )

    @property
    def units(self) -> str:
        """Comma separated member names."""
        return ", ".join(member.name for member in self.members)


class Team(FrozenContract):
    """Group of variants addressing the same raid objective."""

    name: str
    variants: tuple[TeamVariant, ...] = Field(default_factory=tuple)


class Raid(FrozenContract):
    """Raid template with its candidate teams."""

    name: str
    teams: tuple[Team, ...] = Field(default_factory=tuple)


class TeamVariantResult(FrozenContract):
    """Achievement of one player for one team variant."""

    team: str
    variant: str
    member_dones: tuple[int, ...] = Field(
        ..., description="Individual achievement level for each member (0-100)"
    )
    total: int = Field(..., ge=0, le=100)
    percent_damage: float = Field(..., ge=0, le=100)

    @property
    def weighted_score(self) -> float:
        """Total achievement weighted by expected damage."""
        return self.total * self.percent_damage / 100


class PlayerRaidResult(FrozenContract):
    """All team variant results for one player."""

    name: str
    variant_results: tuple[TeamVariantResult, ...] = Field(default_factory=tuple)

    def results_for(self, team: str, variant: str) -> list[TeamVariantResult]:
        return [r for r in self.variant_results if r.team == team and r.variant == variant]


class RaidResult(FrozenContract):
    """Scoring output for one raid, keyed by raid name."""

    raid: str
    players: tuple[PlayerRaidResult, ...] = Field(default_factory=tuple)


MemberKey = tuple[str, str, int]
"""(team name, variant name, member position) key into a member index."""
