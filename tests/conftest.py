"""Pytest configuration and shared fixtures for Captain Rex tests.

Import resolution relies on ``pythonpath`` in pyproject.toml (project root),
so ``src`` is importable without installing the package.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from src.config.settings import Settings
from src.contracts.roster import PlayerRoster, Relic, Skill, UnitEntry, UnitInfo
from src.core.ports import RegistryPort, RosterProviderPort, TransportPort, UnitResolverPort
from src.core.services.command_context import BotDeps, CommandContext


class FakeResolver(UnitResolverPort):
    """Resolves names listed at construction time (base id = upper-cased name)."""

    def __init__(self, *names: str) -> None:
        self.units = {
            name.lower(): UnitInfo(base_id=name.upper().replace(" ", ""), name_key=name)
            for name in names
        }
        self.calls: list[str] = []

    def find_unit(self, name: str) -> UnitInfo | None:
        self.calls.append(name)
        return self.units.get(name.lower())


def make_unit(
    def_id: str, gear: int = 1, relic_tier: int | None = None, zetas: int = 0
) -> UnitEntry:
    """Roster unit; ``relic_tier`` is the displayed tier (stored + 2 upstream)."""
    skills = [Skill(id=f"zeta{i}", tier=8, tiers=8, is_zeta=True) for i in range(zetas)]
    relic = Relic(current_tier=relic_tier + 2) if relic_tier is not None else None
    return UnitEntry(def_id=def_id, gear=gear, relic=relic, skills=skills)


def make_player(name: str, *units: UnitEntry, ally_code: str = "123456789") -> PlayerRoster:
    return PlayerRoster(name=name, ally_code=ally_code, roster=list(units))


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Static config documents in a temporary directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "vip_units.json").write_text(
        json.dumps({"tw": ["Darth Revan"], "gac": ["Jedi Knight Revan"]}), encoding="utf-8"
    )
    (directory / "help.json").write_text(
        json.dumps(
            [
                {
                    "area": "General",
                    "commands": [
                        {
                            "name": "info",
                            "syntax": "cr.info",
                            "description": "Bot info",
                            "example": "cr.info",
                        }
                    ],
                }
            ]
        ),
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def settings(tmp_path: Path, config_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        discord_bot_token="test-token",
        bot_prefix="cr.",
        message_delete_delay_seconds=0,
        reaction_timeout_seconds=30,
        user_registry_path=str(tmp_path / "data" / "users.json"),
        guild_registry_path=str(tmp_path / "data" / "guilds.json"),
        raids_catalog_path=str(config_dir / "raids_helper.json"),
        help_path=str(config_dir / "help.json"),
        vip_units_path=str(config_dir / "vip_units.json"),
        acronyms_path=str(config_dir / "acronyms.json"),
        app_version="1.2.3",
    )


@pytest.fixture
def mock_transport() -> Mock:
    """TransportPort double recording every call."""
    transport = Mock(spec=TransportPort)
    transport.send_report = AsyncMock(return_value=Mock(name="sent"))
    transport.send_text = AsyncMock(return_value=Mock(name="status"))
    transport.delete = AsyncMock()
    transport.react = AsyncMock()
    transport.ask_choice = AsyncMock(return_value=0)
    return transport


@pytest.fixture
def mock_registry() -> Mock:
    registry = Mock(spec=RegistryPort)
    registry.get_ally_codes.return_value = ["123456789"]
    registry.get_users.return_value = []
    return registry


@pytest.fixture
def mock_roster() -> Mock:
    roster = Mock(spec=RosterProviderPort)
    roster.get_players = AsyncMock(return_value=[])
    roster.get_player = AsyncMock(return_value=None)
    roster.get_guild = AsyncMock(return_value=None)
    return roster


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver("UnitA", "UnitB", "Jedi Knight Revan", "Darth Revan")


@pytest.fixture
def deps(settings: Settings, mock_registry: Mock, mock_roster: Mock, resolver: FakeResolver) -> BotDeps:
    return BotDeps(settings=settings, registry=mock_registry, roster=mock_roster, units=resolver)


@pytest.fixture
def make_ctx(deps: BotDeps, mock_transport: Mock):
    """Factory for command contexts sent by user "42"."""

    def _make(command: str, *args: str, mentions: list[str] | None = None) -> CommandContext:
        return CommandContext(
            author_id="42",
            command=command,
            args=list(args),
            transport=mock_transport,
            deps=deps,
            mentions=mentions or [],
        )

    return _make


@pytest.fixture
def unit_factory():
    return make_unit


@pytest.fixture
def player_factory():
    return make_player


@pytest.fixture
def resolver_factory():
    return FakeResolver
