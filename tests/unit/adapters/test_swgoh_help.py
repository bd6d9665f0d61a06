"""Unit tests for the swgoh.help adapter (no network)."""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.adapters.swgoh_help import SwgohHelpAdapter, load_acronyms
from src.contracts.roster import UnitInfo
from src.core.errors import ProviderError


@pytest.fixture
def adapter(settings) -> SwgohHelpAdapter:
    adapter = SwgohHelpAdapter(settings=settings, acronyms={"JKR": "Jedi Knight Revan", "GK": "GENERALKENOBI"})
    adapter.set_units(
        [
            UnitInfo(baseId="JEDIKNIGHTREVAN", nameKey="Jedi Knight Revan"),
            UnitInfo(baseId="GENERALKENOBI", nameKey="General Kenobi"),
            UnitInfo(baseId="DARTHREVAN", nameKey="Darth Revan"),
        ]
    )
    return adapter


class TestFindUnit:
    def test_by_name_case_insensitive(self, adapter: SwgohHelpAdapter) -> None:
        unit = adapter.find_unit("jedi knight REVAN")

        assert unit is not None
        assert unit.base_id == "JEDIKNIGHTREVAN"

    def test_by_acronym(self, adapter: SwgohHelpAdapter) -> None:
        assert adapter.find_unit("jkr").base_id == "JEDIKNIGHTREVAN"

    def test_acronym_may_point_to_base_id(self, adapter: SwgohHelpAdapter) -> None:
        assert adapter.find_unit("GK").name_key == "General Kenobi"

    def test_by_base_id(self, adapter: SwgohHelpAdapter) -> None:
        assert adapter.find_unit("darthrevan").name_key == "Darth Revan"

    def test_unknown_and_blank(self, adapter: SwgohHelpAdapter) -> None:
        assert adapter.find_unit("Jar Jar") is None
        assert adapter.find_unit("   ") is None

    def test_acronyms_property_is_a_copy(self, adapter: SwgohHelpAdapter) -> None:
        adapter.acronyms["X"] = "Y"

        assert "X" not in adapter.acronyms


class TestLoadAcronyms:
    def test_keys_upper_cased(self, tmp_path: Path) -> None:
        path = tmp_path / "acronyms.json"
        path.write_text(json.dumps({"jkr": "Jedi Knight Revan"}), encoding="utf-8")

        assert load_acronyms(path) == {"JKR": "Jedi Knight Revan"}

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_acronyms(tmp_path / "missing.json") == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "acronyms.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(ProviderError):
            load_acronyms(path)


class TestRequests:
    @pytest.mark.asyncio
    async def test_get_players_sends_numeric_codes(self, adapter: SwgohHelpAdapter) -> None:
        # Arrange
        adapter._post = AsyncMock(
            return_value=[{"name": "Han", "allyCode": 123456789, "roster": [{"defId": "DARTHREVAN", "gear": 13}]}]
        )

        # Act
        players = await adapter.get_players(["123456789"])

        # Assert
        adapter._post.assert_awaited_once_with("/swgoh/players", {"allycodes": [123456789]})
        assert players[0].name == "Han"
        assert players[0].find_unit("DARTHREVAN").gear == 13

    @pytest.mark.asyncio
    async def test_get_players_empty_skips_request(self, adapter: SwgohHelpAdapter) -> None:
        adapter._post = AsyncMock()

        assert await adapter.get_players([]) == []
        adapter._post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_player_none_when_unknown(self, adapter: SwgohHelpAdapter) -> None:
        adapter._post = AsyncMock(return_value=[])

        assert await adapter.get_player("123456789") is None

    @pytest.mark.asyncio
    async def test_get_guild_requests_roster(self, adapter: SwgohHelpAdapter) -> None:
        adapter._post = AsyncMock(
            return_value=[
                {
                    "id": "G1",
                    "name": "Rebels",
                    "roster": [{"name": "Leia", "allyCode": 111111111, "guildMemberLevel": 4}],
                }
            ]
        )

        guild = await adapter.get_guild("111111111")

        adapter._post.assert_awaited_once_with("/swgoh/guilds", {"allycodes": [111111111], "roster": True})
        assert guild.id == "G1"
        assert guild.find_member("111111111").is_officer

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises(self, adapter: SwgohHelpAdapter) -> None:
        adapter._post = AsyncMock(return_value=[{"unexpected": True}])

        with pytest.raises(ProviderError):
            await adapter.get_players(["123456789"])

    @pytest.mark.asyncio
    async def test_load_units(self, adapter: SwgohHelpAdapter) -> None:
        adapter._post = AsyncMock(return_value=[{"baseId": "HANSOLO", "nameKey": "Han Solo"}])

        count = await adapter.load_units()

        assert count == 1
        assert adapter.find_unit("han solo").base_id == "HANSOLO"
        assert adapter.find_unit("Darth Revan") is None

    @pytest.mark.asyncio
    async def test_sign_in_requires_credentials(self, settings) -> None:
        adapter = SwgohHelpAdapter(settings=settings.model_copy(update={"swgoh_help_username": None}))

        with pytest.raises(ProviderError):
            await adapter._sign_in()
