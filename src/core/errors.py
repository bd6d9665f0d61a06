"""Exception hierarchy for Captain Rex.

Every error raised by the core or an adapter derives from ``BotError`` so the
command router can report it back to the requester with its message text.
"""

from __future__ import annotations


class BotError(Exception):
    """Base class for all bot errors."""


class CatalogError(BotError):
    """Raid catalog could not be loaded or failed validation."""


class UnresolvableUnitError(CatalogError):
    """A catalog member name does not resolve to a known unit."""

    def __init__(self, raid: str, team: str, variant: str, member: str) -> None:
        super().__init__(
            f'Unknown unit "{member}" in raid "{raid}", team "{team}", variant "{variant}"'
        )
        self.raid = raid
        self.team = team
        self.variant = variant
        self.member = member


class ProviderError(BotError):
    """The player/guild data provider failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegistryError(BotError):
    """The user/guild registry could not be persisted."""


class ConfigError(BotError):
    """A static configuration document (help, VIP units, acronyms) is unreadable."""
