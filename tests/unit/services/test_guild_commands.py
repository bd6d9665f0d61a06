"""Unit tests for guild commands."""

import pytest

from src.contracts.common import GuildMemberLevel
from src.contracts.registry import RegisteredGuild
from src.contracts.roster import GuildInfo, GuildMember, PlayerRoster
from src.core.services.guild_commands import GUILD_NOT_REGISTERED, OFFICERS_ONLY, GuildCommands


def _guild(level: GuildMemberLevel) -> GuildInfo:
    return GuildInfo(
        id="G1",
        name="Rebels",
        roster=[GuildMember(name="Rex", ally_code=123456789, guild_member_level=level)],
    )


def _sent(mock_transport):
    return mock_transport.send_report.await_args.args[0]


@pytest.fixture
def commands(deps) -> GuildCommands:
    return GuildCommands(deps)


class TestRegistration:
    @pytest.mark.asyncio
    async def test_any_member_can_register(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_roster.get_guild.return_value = _guild(GuildMemberLevel.MEMBER)
        mock_registry.register_guild.return_value = True

        await commands.register_guild(make_ctx("registerguild"))

        mock_registry.register_guild.assert_called_once_with("G1")
        assert "Your guild is now registered!" in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_unregister_needs_officer(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_roster.get_guild.return_value = _guild(GuildMemberLevel.MEMBER)

        await commands.unregister_guild(make_ctx("unregisterguild"))

        mock_registry.unregister_guild.assert_not_called()
        assert OFFICERS_ONLY in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_leader_can_unregister(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_roster.get_guild.return_value = _guild(GuildMemberLevel.LEADER)
        mock_registry.unregister_guild.return_value = True

        await commands.unregister_guild(make_ctx("unregisterguild"))

        mock_registry.unregister_guild.assert_called_once_with("G1")
        assert "Your guild was unregistered." in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_unregistered_requester(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_registry.get_ally_codes.return_value = []

        await commands.register_guild(make_ctx("registerguild"))

        mock_roster.get_guild.assert_not_awaited()
        assert "do not seem to be a member" in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_choice_timeout_cancels(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_registry.get_ally_codes.return_value = ["111111111", "222222222"]
        mock_transport.ask_choice.return_value = None

        await commands.register_guild(make_ctx("registerguild"))

        mock_roster.get_guild.assert_not_awaited()
        mock_transport.send_text.assert_awaited_once_with(
            "<@42> No reaction after 30 seconds, operation canceled"
        )

    @pytest.mark.asyncio
    async def test_choice_selects_code(
        self, commands, make_ctx, mock_registry, mock_roster, mock_transport
    ) -> None:
        mock_registry.get_ally_codes.return_value = ["111111111", "222222222"]
        mock_transport.ask_choice.return_value = 1

        await commands.register_guild(make_ctx("registerguild"))

        prompt, options, timeout = mock_transport.ask_choice.await_args.args
        assert options == 2
        assert timeout == 30
        assert "2️⃣ `222222222`" in prompt.description
        mock_roster.get_guild.assert_awaited_once_with("222222222")


class TestTerritoryWar:
    @pytest.fixture
    def registered(self, mock_registry, mock_roster) -> RegisteredGuild:
        guild = RegisteredGuild(id="G1")
        mock_registry.get_guild.return_value = guild
        mock_roster.get_guild.return_value = _guild(GuildMemberLevel.OFFICER)
        return guild

    @pytest.mark.asyncio
    async def test_add_unit(self, commands, make_ctx, registered, mock_registry, mock_transport) -> None:
        await commands.tw_add(make_ctx("tw.add", "UnitA"))

        assert registered.vip_units_tw == ["UnitA"]
        mock_registry.save_guilds.assert_called_once()
        assert 'Added "UnitA"' in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_add_needs_registered_guild(
        self, commands, make_ctx, registered, mock_registry, mock_transport
    ) -> None:
        mock_registry.get_guild.return_value = None

        await commands.tw_add(make_ctx("tw.add", "UnitA"))

        assert GUILD_NOT_REGISTERED in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_add_unknown_unit_skips_lookup(
        self, commands, make_ctx, registered, mock_roster, mock_transport
    ) -> None:
        await commands.tw_add(make_ctx("tw.add", "Nobody"))

        mock_roster.get_guild.assert_not_awaited()
        assert 'Who is "Nobody"???' in _sent(mock_transport).description

    @pytest.mark.asyncio
    async def test_remove_needs_officer(
        self, commands, make_ctx, registered, mock_registry, mock_roster, mock_transport
    ) -> None:
        registered.vip_units_tw.append("UnitA")
        mock_roster.get_guild.return_value = _guild(GuildMemberLevel.MEMBER)

        await commands.tw_remove(make_ctx("tw.remove", "UnitA"))

        assert registered.vip_units_tw == ["UnitA"]
        mock_registry.save_guilds.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_unit(self, commands, make_ctx, registered, mock_registry) -> None:
        registered.vip_units_tw.append("UnitA")

        await commands.tw_remove(make_ctx("tw.remove", "UnitA"))

        assert registered.vip_units_tw == []
        mock_registry.save_guilds.assert_called_once()

    @pytest.mark.asyncio
    async def test_list_includes_guild_units(
        self, commands, make_ctx, registered, mock_roster, mock_transport
    ) -> None:
        registered.vip_units_tw.append("UnitB")
        mock_roster.get_player.return_value = PlayerRoster(
            name="Rex", ally_code=123456789, guild_ref_id="G1"
        )

        await commands.tw_list(make_ctx("tw.list"))

        fields = {field.name: field.value for field in _sent(mock_transport).fields}
        assert fields == {"Default": "Darth Revan", "Custom": "UnitB"}

    @pytest.mark.asyncio
    async def test_list_without_guild(self, commands, make_ctx, mock_roster, mock_transport) -> None:
        mock_roster.get_player.return_value = None

        await commands.tw_list(make_ctx("tw.list"))

        fields = {field.name: field.value for field in _sent(mock_transport).fields}
        assert fields == {"Default": "Darth Revan"}
