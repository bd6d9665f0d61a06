"""Raid catalog loading, validation and unit resolution.

The catalog is a JSON array of raids. It is read fresh on every raids helper
invocation so edits take effect immediately, and it is never mutated: unit ids
resolved for the members live in a separate ``MemberIndex``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.contracts.raids import MemberKey, Raid, TeamMember, TeamVariant
from src.core.errors import CatalogError, UnresolvableUnitError
from src.core.ports import UnitResolverPort

logger = logging.getLogger(__name__)

TEAM_SIZE = 5
"""Slots per team; the report layout and the total formula assume it."""

MemberIndex = dict[MemberKey, str]

_RAIDS_ADAPTER = TypeAdapter(list[Raid])


def iter_variants(raid: Raid) -> Iterator[tuple[str, TeamVariant]]:
    """Yield (team name, variant) pairs in catalog order."""
    for team in raid.teams:
        for variant in team.variants:
            yield team.name, variant


def parse_catalog(data: Any) -> list[Raid]:
    """Build and validate raids from decoded JSON."""
    try:
        raids = _RAIDS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid raids catalog: {e}") from e

    validate_catalog(raids)
    return raids


def load_catalog(path: str | Path) -> list[Raid]:
    """Read, parse and validate the raids catalog file."""
    logger.info(f"Loading raids catalog from {path}")
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read raids catalog {path}: {e}") from e

    return parse_catalog(data)


def _check_member(raid: Raid, team: str, variant: TeamVariant, member: TeamMember) -> None:
    if member.required <= 0:
        raise CatalogError(
            f'Member "{member.name}" in raid "{raid.name}", team "{team}", '
            f'variant "{variant.name}" has no requirements (gear + relic + zetas must be > 0)'
        )


def validate_catalog(raids: list[Raid]) -> None:
    """Reject catalogs the scorer cannot handle.

    Raises:
        CatalogError: zero requirement, empty or oversized variant, or a
            duplicated team/variant pair inside a raid
    """
    for raid in raids:
        seen: set[tuple[str, str]] = set()

        for team, variant in iter_variants(raid):
            key = (team, variant.name)
            if key in seen:
                raise CatalogError(
                    f'Duplicated variant "{variant.name}" for team "{team}" in raid "{raid.name}"'
                )
            seen.add(key)

            if not variant.members:
                raise CatalogError(
                    f'Variant "{variant.name}" of team "{team}" in raid "{raid.name}" has no members'
                )
            if len(variant.members) > TEAM_SIZE:
                raise CatalogError(
                    f'Variant "{variant.name}" of team "{team}" in raid "{raid.name}" has '
                    f"{len(variant.members)} members (max {TEAM_SIZE})"
                )

            for member in variant.members:
                _check_member(raid, team, variant, member)


def build_member_index(raid: Raid, resolver: UnitResolverPort) -> MemberIndex:
    """Resolve every member of a raid to a unit base id.

    Each distinct name is looked up once per raid.

    Raises:
        UnresolvableUnitError: a member name is unknown to the resolver
    """
    index: MemberIndex = {}
    resolved: dict[str, str] = {}

    for team, variant in iter_variants(raid):
        for position, member in enumerate(variant.members):
            if member.name not in resolved:
                unit = resolver.find_unit(member.name)
                if unit is None:
                    raise UnresolvableUnitError(raid.name, team, variant.name, member.name)
                resolved[member.name] = unit.base_id

            index[(team, variant.name, position)] = resolved[member.name]

    logger.debug(f'Resolved {len(resolved)} units for raid "{raid.name}"')
    return index
