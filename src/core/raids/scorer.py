"""Raid team achievement scoring.

Pure domain logic (zero I/O operations): a player's roster is compared with
every team variant of a raid and each member requirement gets a completion
percentage.

Progress units:
    owned   = gear tier + relic tier (at max gear only) + zetas learned
    needed  = required gear + required relic + required zetas
    done    = min(100, floor(owned / needed * 100))
    total   = floor(sum(done) / TEAM_SIZE)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from src.contracts.raids import (
    PlayerRaidResult,
    Raid,
    RaidResult,
    TeamMember,
    TeamVariant,
    TeamVariantResult,
)
from src.contracts.roster import PlayerRoster, UnitEntry
from src.core.errors import CatalogError
from src.core.observability import trace_performance
from src.core.raids.catalog import TEAM_SIZE, MemberIndex

logger = logging.getLogger(__name__)


def unit_progress(unit: UnitEntry) -> int:
    """Progress units owned for a roster unit."""
    return unit.gear + unit.relic_tier + unit.zeta_count


def member_completion(unit: UnitEntry | None, member: TeamMember) -> int:
    """Completion percentage (0-100) of one member requirement."""
    if unit is None:
        return 0

    required = member.required
    if required <= 0:
        raise CatalogError(f'Member "{member.name}" has no requirements')

    done = math.floor(unit_progress(unit) / required * 100)
    return min(100, done)


def team_total(member_dones: Iterable[int]) -> int:
    """Aggregate achievement over a fixed five slot team."""
    return math.floor(sum(member_dones) / TEAM_SIZE)


def score_variant(
    player: PlayerRoster,
    team: str,
    variant: TeamVariant,
    member_index: MemberIndex,
) -> TeamVariantResult:
    member_dones = tuple(
        member_completion(
            player.find_unit(member_index[(team, variant.name, position)]),
            member,
        )
        for position, member in enumerate(variant.members)
    )
    total = team_total(member_dones)

    logger.debug(
        f'Team "{team}" ({variant.name}) for {player.name}: {list(member_dones)} = {total}%'
    )

    return TeamVariantResult(
        team=team,
        variant=variant.name,
        member_dones=member_dones,
        total=total,
        percent_damage=variant.percent_damage,
    )


@trace_performance
def calculate_team_achievements(
    raid: Raid,
    member_index: MemberIndex,
    players: Iterable[PlayerRoster],
) -> RaidResult:
    """Score every player against every team variant of a raid.

    Args:
        raid: Raid template
        member_index: Unit ids resolved for the raid members
        players: Player roster snapshots

    Returns:
        One ``PlayerRaidResult`` per player, variant results in catalog order
    """
    logger.info(f'Calculating team achievements for raid "{raid.name}"')

    results = [
        PlayerRaidResult(
            name=player.name,
            variant_results=tuple(
                score_variant(player, team.name, variant, member_index)
                for team in raid.teams
                for variant in team.variants
            ),
        )
        for player in players
    ]

    return RaidResult(raid=raid.name, players=tuple(results))
