"""Unit tests for the raids helper command flow."""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from src.contracts.raids import HelperMethod, Raid, Team, TeamMember, TeamVariant
from src.contracts.roster import GuildInfo, GuildMember
from src.core.errors import CatalogError
from src.core.raids import load_catalog
from src.core.services.raids_helper_service import RaidsHelperService

CATALOG = [
    {
        "name": "First Raid",
        "teams": [
            {
                "name": "Alpha",
                "variants": [
                    {
                        "name": "V1",
                        "percentDamage": 50,
                        "members": [{"name": "UnitA", "gear": 5}, {"name": "UnitB", "gear": 5}],
                    }
                ],
            }
        ],
    },
    {
        "name": "Second Raid",
        "teams": [
            {
                "name": "Beta",
                "variants": [
                    {"name": "V1", "percentDamage": 30, "members": [{"name": "UnitA", "gear": 5}]}
                ],
            }
        ],
    },
]


@pytest.fixture
def catalog(config_dir: Path) -> Path:
    path = config_dir / "raids_helper.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def service(deps) -> RaidsHelperService:
    return RaidsHelperService(deps)


@pytest.fixture
def han(unit_factory, player_factory):
    return player_factory("Han", unit_factory("UNITA", gear=5), unit_factory("UNITB", gear=5))


def _texts(mock_transport) -> list[str]:
    return [c.args[0] for c in mock_transport.send_text.await_args_list]


class TestSinglePlayer:
    @pytest.mark.asyncio
    async def test_reports_sent_in_catalog_order(
        self, service, make_ctx, catalog, han, mock_roster, mock_transport
    ) -> None:
        # Arrange
        mock_roster.get_players.return_value = [han]

        # Act
        await service.handle(make_ctx("raids.helper", "full"))

        # Assert
        mock_roster.get_players.assert_awaited_once_with(["123456789"])
        mock_roster.get_guild.assert_not_awaited()
        titles = [c.args[0].title for c in mock_transport.send_report.await_args_list]
        assert titles == ['Raids Helper "First Raid"', 'Raids Helper "Second Raid"']
        assert _texts(mock_transport) == ['<@42> Generating command output for method "full"...']

    @pytest.mark.asyncio
    async def test_status_message_deleted(
        self, service, make_ctx, catalog, han, mock_roster, mock_transport
    ) -> None:
        status = Mock(name="status")
        mock_transport.send_text.return_value = status
        mock_roster.get_players.return_value = [han]

        await service.handle(make_ctx("raids.helper"))

        mock_transport.delete.assert_awaited_once_with(status, 0)

    @pytest.mark.asyncio
    async def test_status_deleted_on_catalog_error(
        self, service, make_ctx, config_dir, han, mock_roster, mock_transport
    ) -> None:
        (config_dir / "raids_helper.json").write_text("[{", encoding="utf-8")
        mock_roster.get_players.return_value = [han]

        with pytest.raises(CatalogError):
            await service.handle(make_ctx("raids.helper"))

        mock_transport.delete.assert_awaited_once()
        mock_transport.send_report.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unregistered_requester(self, service, make_ctx, mock_registry, mock_roster) -> None:
        mock_registry.get_ally_codes.return_value = []

        await service.handle(make_ctx("raids.helper"))

        mock_roster.get_players.assert_not_awaited()


class TestGuild:
    @pytest.mark.asyncio
    async def test_guild_roster_fetched(
        self, service, make_ctx, catalog, han, mock_roster, mock_transport
    ) -> None:
        mock_roster.get_guild.return_value = GuildInfo(
            id="G1",
            name="Rebels",
            roster=[
                GuildMember(name="Han", ally_code=123456789),
                GuildMember(name="Leia", ally_code=222222222),
            ],
        )
        mock_roster.get_players.return_value = [han]

        await service.handle(make_ctx("raids.helper", "guild", "best"))

        mock_roster.get_guild.assert_awaited_once_with("123456789")
        mock_roster.get_players.assert_awaited_once_with(["123456789", "222222222"])
        assert _texts(mock_transport) == [
            "<@42> Retrieving guild player list from swgoh.help...",
            "<@42> Retrieving guild roster from swgoh.help...",
            '<@42> Generating command output for method "best"...',
        ]
        assert mock_transport.delete.await_count == 3

    @pytest.mark.asyncio
    async def test_unknown_guild(self, service, make_ctx, catalog, mock_roster, mock_transport) -> None:
        mock_roster.get_guild.return_value = None

        await service.handle(make_ctx("raids.helper", "GUILD"))

        mock_roster.get_players.assert_not_awaited()
        report = mock_transport.send_report.await_args.args[0]
        assert "Cannot fetch guild data for ally code 123456789!" in report.description


class TestBuildReports:
    def test_doable_short_variant_never_complete(self, service, han, catalog) -> None:
        # totals are scaled on five slots: two maxed members give 40
        first, _ = load_catalog(catalog)

        assert service.build_reports(first, [han], HelperMethod.DOABLE, "<@42>") == []

    def test_doable_keeps_complete_five_slot_team(self, service, unit_factory, player_factory) -> None:
        names = ("UnitA", "UnitB", "Jedi Knight Revan", "Darth Revan", "UnitA")
        raid = Raid(
            name="Full Team Raid",
            teams=(
                Team(
                    name="Alpha",
                    variants=(
                        TeamVariant(
                            name="V1",
                            percent_damage=50,
                            members=tuple(TeamMember(name=n, gear=5) for n in names),
                        ),
                    ),
                ),
            ),
        )
        rex = player_factory(
            "Rex",
            *(unit_factory(base_id, gear=5) for base_id in ("UNITA", "UNITB", "JEDIKNIGHTREVAN", "DARTHREVAN")),
        )
        leia = player_factory("Leia", unit_factory("UNITA", gear=1))

        reports = service.build_reports(raid, [rex, leia], HelperMethod.DOABLE, "<@42>")

        assert len(reports) == 1
        (field,) = reports[0].fields
        assert field.name == "Teams"
        assert "UnitA, UnitB" in field.value

    def test_resolves_units_once_per_member(self, service, han, resolver, catalog) -> None:
        first, _ = load_catalog(catalog)
        resolver.calls.clear()

        service.build_reports(first, [han, han], HelperMethod.FULL, "<@42>")

        assert resolver.calls == ["UnitA", "UnitB"]
