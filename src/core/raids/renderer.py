"""Raids helper report rendering.

DOABLE results are summarized as one table per raid (qualifying player count
per variant); every other method gets a detailed requirements + status table
per team variant. Rendering only reads results; it never changes them.
"""

from __future__ import annotations

import logging

from src.contracts.raids import HelperMethod, Raid, RaidResult, TeamVariant
from src.contracts.reports import Report
from src.core.raids.catalog import TEAM_SIZE, iter_variants
from src.core.utils.clamp import code_block
from src.core.utils.tables import MarkdownTable
from src.core.views.report_builder import SOURCE_SWGOH_HELP, append_paged_field, reply_report

logger = logging.getLogger(__name__)

UNITS_COLUMN_WIDTH = 34


def _title(raid: Raid) -> str:
    return f'Raids Helper "{raid.name}"'


def _intro(requester: str, method: HelperMethod) -> str:
    return f"{requester}, here are the {method.value} teams for this raid:"


def _count_players(result: RaidResult, team: str, variant: str) -> int:
    return sum(len(player.results_for(team, variant)) for player in result.players)


def build_summary_table(raid: Raid, result: RaidResult) -> MarkdownTable:
    """Qualifying player count per team variant (variants without players omitted)."""
    table = MarkdownTable("Team Units", "% Dmg", "Players", title="Teams")
    table.set_wrapped(1, UNITS_COLUMN_WIDTH)

    for team, variant in iter_variants(raid):
        count = _count_players(result, team, variant.name)
        if count > 0:
            table.add_row(variant.units, variant.percent_damage, count)

    return table.sort_column_desc(3)


def build_requirements_table(team: str, variant: TeamVariant) -> MarkdownTable:
    table = MarkdownTable(
        "#", "Unit", "Gear", "+", "Z", title=f"{team} ({variant.name}) - {variant.percent_damage:g}%"
    )
    for i, member in enumerate(variant.members, start=1):
        table.add_row(f"({i})", member.name, member.gear, member.relic, member.zetas)
    return table


def build_status_table(result: RaidResult, team: str, variant: str) -> MarkdownTable:
    """One row per player still holding a result for this variant, best first."""
    slots = [f"({i})" for i in range(1, TEAM_SIZE + 1)]
    table = MarkdownTable("Name", *slots, "%")

    for player in result.players:
        for variant_result in player.results_for(team, variant):
            dones: list[int | None] = list(variant_result.member_dones)
            dones.extend([None] * (TEAM_SIZE - len(dones)))
            table.add_row(player.name, *dones, variant_result.total)

    return table.sort_column_desc(TEAM_SIZE + 2)


def render_summary(
    raid: Raid, result: RaidResult, method: HelperMethod, requester: str
) -> list[Report]:
    table = build_summary_table(raid, result)
    if not table.rows:
        logger.info(f'No {method.value} teams for raid "{raid.name}"')
        return []

    reports = [reply_report(_title(raid), _intro(requester, method), SOURCE_SWGOH_HELP)]
    continuation = reply_report(_title(raid), "(continued)", SOURCE_SWGOH_HELP)
    append_paged_field(reports, "Teams", code_block(table.render()), continuation)
    return reports


def render_detailed(
    raid: Raid, result: RaidResult, method: HelperMethod, requester: str
) -> list[Report]:
    reports: list[Report] = []
    continuation = reply_report(_title(raid), "(continued)", SOURCE_SWGOH_HELP)

    for team, variant in iter_variants(raid):
        status = build_status_table(result, team, variant.name)
        if not status.rows:
            continue

        text = _intro(requester, method) if not reports else "(continued)"
        reports.append(reply_report(_title(raid), text, SOURCE_SWGOH_HELP))

        requirements = build_requirements_table(team, variant)
        append_paged_field(reports, "Requirements", code_block(requirements.render()), continuation)
        append_paged_field(reports, "Status", code_block(status.render()), continuation)

    return reports


def render_raid_report(
    raid: Raid, result: RaidResult, method: HelperMethod, requester: str
) -> list[Report]:
    """Render selected raid results as an ordered list of reports.

    Args:
        raid: Raid template (ordering and requirements)
        result: Selected results for that raid
        method: Reporting method used for the selection
        requester: Mention of the user who asked for the report

    Returns:
        Reports in delivery order (possibly empty)
    """
    logger.info(f'Reporting results for raid "{raid.name}"')

    if method is HelperMethod.DOABLE:
        return render_summary(raid, result, method, requester)
    return render_detailed(raid, result, method, requester)
