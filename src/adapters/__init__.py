"""Adapter implementations for external services."""

from .discord_adapter import DiscordAdapter
from .json_registry import JsonRegistryAdapter
from .swgoh_help import SwgohHelpAdapter

__all__ = ["DiscordAdapter", "JsonRegistryAdapter", "SwgohHelpAdapter"]
