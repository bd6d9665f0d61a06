"""Raids Helper engine: catalog, scoring, selection and rendering."""

from .catalog import TEAM_SIZE, MemberIndex, build_member_index, load_catalog, parse_catalog
from .renderer import render_raid_report
from .scorer import calculate_team_achievements
from .selector import parse_method, select_results

__all__ = [
    "TEAM_SIZE",
    "MemberIndex",
    "build_member_index",
    "load_catalog",
    "parse_catalog",
    "calculate_team_achievements",
    "select_results",
    "parse_method",
    "render_raid_report",
]
