"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
All external dependencies must implement these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.contracts.registry import RegisteredGuild, RegisteredUser
from src.contracts.roster import GuildInfo, PlayerRoster, UnitInfo
from src.core.ports.transport_port import TransportPort

__all__ = [
    "RosterProviderPort",
    "UnitResolverPort",
    "RegistryPort",
    "TransportPort",
]


class RosterProviderPort(ABC):
    """Port for player and guild data lookups (swgoh.help)."""

    @abstractmethod
    async def get_players(self, ally_codes: Sequence[str]) -> list[PlayerRoster]:
        """Get player profiles with rosters for several ally codes."""
        pass

    @abstractmethod
    async def get_player(self, ally_code: str) -> PlayerRoster | None:
        """Get one player profile, or None when unknown."""
        pass

    @abstractmethod
    async def get_guild(self, ally_code: str) -> GuildInfo | None:
        """Get the guild (with member list) a player belongs to."""
        pass


class UnitResolverPort(ABC):
    """Port for unit name/acronym resolution."""

    @abstractmethod
    def find_unit(self, name: str) -> UnitInfo | None:
        """Resolve a human entered unit name or acronym."""
        pass


class RegistryPort(ABC):
    """Port for the persisted user/guild registry."""

    @abstractmethod
    def register_user(self, discord_id: str, ally_code: str) -> bool:
        """Add an ally code to a user; False when the code is already taken."""
        pass

    @abstractmethod
    def unregister_user(self, discord_id: str, ally_code: str | None = None) -> bool:
        """Remove an ally code (or the user, when it is their only one)."""
        pass

    @abstractmethod
    def get_user(self, discord_id: str) -> RegisteredUser | None:
        pass

    @abstractmethod
    def get_users(self) -> list[RegisteredUser]:
        pass

    @abstractmethod
    def get_ally_codes(self, discord_id: str) -> list[str]:
        pass

    @abstractmethod
    def get_discord_id(self, ally_code: str) -> str | None:
        pass

    @abstractmethod
    def save_users(self) -> None:
        pass

    @abstractmethod
    def register_guild(self, guild_id: str) -> bool:
        pass

    @abstractmethod
    def unregister_guild(self, guild_id: str) -> bool:
        pass

    @abstractmethod
    def get_guild(self, guild_id: str) -> RegisteredGuild | None:
        pass

    @abstractmethod
    def get_guilds(self) -> list[RegisteredGuild]:
        pass

    @abstractmethod
    def save_guilds(self) -> None:
        pass
