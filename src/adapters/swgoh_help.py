"""swgoh.help API adapter.

Provides:
- Player profiles with rosters (``/swgoh/players``)
- Guild profiles with member lists (``/swgoh/guilds``)
- Unit definitions (``/swgoh/data``, collection ``unitsList``)

Implements RosterProviderPort and UnitResolverPort with a single reused
aiohttp session. The unit list is loaded once at startup (``load_units``);
unit lookups afterwards are synchronous and case-insensitive on name, then
acronym, then base id.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import aiohttp
from pydantic import TypeAdapter, ValidationError

from src.config.settings import Settings, get_settings
from src.contracts.roster import GuildInfo, PlayerRoster, UnitInfo
from src.core.errors import ProviderError
from src.core.observability import trace_adapter
from src.core.ports import RosterProviderPort, UnitResolverPort

logger = logging.getLogger(__name__)

_PLAYERS = TypeAdapter(list[PlayerRoster])
_GUILDS = TypeAdapter(list[GuildInfo])
_UNITS = TypeAdapter(list[UnitInfo])

# swgoh.help public client credentials for the password grant
_CLIENT_ID = "abc"
_CLIENT_SECRET = "123"
# refresh the bearer token slightly before it expires
_TOKEN_MARGIN_SECONDS = 30


def load_acronyms(path: str | Path) -> dict[str, str]:
    """Load the acronym -> unit name map (keys upper-cased)."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning(f"Acronyms file {path} not found, acronyms disabled")
        return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ProviderError(f"Could not read acronyms file {path}: {e}") from e

    return {str(k).upper(): str(v) for k, v in data.items()}


class SwgohHelpAdapter(RosterProviderPort, UnitResolverPort):
    def __init__(
        self,
        settings: Settings | None = None,
        acronyms: dict[str, str] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._acronyms = acronyms if acronyms is not None else {}
        self._session: aiohttp.ClientSession | None = None
        self._token: str | None = None
        self._token_expires_at = 0.0
        self._units: list[UnitInfo] = []
        self._by_name: dict[str, UnitInfo] = {}
        self._by_id: dict[str, UnitInfo] = {}
        logger.info("swgoh.help adapter initialized")

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.swgoh_help_timeout_seconds)
            self._session = aiohttp.ClientSession(
                base_url=self._settings.swgoh_help_base_url, timeout=timeout
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._token = None

    async def _sign_in(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        if not self._settings.swgoh_help_username or not self._settings.swgoh_help_password:
            raise ProviderError("swgoh.help credentials are not configured")

        form = {
            "username": self._settings.swgoh_help_username,
            "password": self._settings.swgoh_help_password,
            "grant_type": "password",
            "client_id": _CLIENT_ID,
            "client_secret": _CLIENT_SECRET,
        }
        session = await self._ensure_session()
        try:
            async with session.post("/auth/signin", data=form) as resp:
                if resp.status != 200:
                    raise ProviderError(
                        f"swgoh.help sign in failed ({resp.status})", status_code=resp.status
                    )
                data = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"swgoh.help sign in error: {e}") from e

        self._token = data["access_token"]
        expires_in = int(data.get("expires_in", 3600))
        self._token_expires_at = time.monotonic() + expires_in - _TOKEN_MARGIN_SECONDS
        logger.info("Signed in to swgoh.help")
        return self._token

    async def _post(self, path: str, payload: dict[str, Any]) -> Any:
        """POST an authenticated JSON request and return the decoded body."""
        token = await self._sign_in()
        session = await self._ensure_session()
        body = {"language": self._settings.swgoh_help_language, "enums": False, **payload}
        headers = {"Authorization": f"Bearer {token}"}

        try:
            async with session.post(path, json=body, headers=headers) as resp:
                if resp.status == 401:
                    # force a new sign in next time
                    self._token = None
                if resp.status != 200:
                    text = await resp.text()
                    logger.error(f"swgoh.help {path} error {resp.status}: {text[:200]}")
                    raise ProviderError(
                        f"swgoh.help request {path} failed ({resp.status})",
                        status_code=resp.status,
                    )
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"swgoh.help request {path} error: {e}") from e

    @trace_adapter
    async def get_players(self, ally_codes: Sequence[str]) -> list[PlayerRoster]:
        if not ally_codes:
            return []
        data = await self._post("/swgoh/players", {"allycodes": [int(c) for c in ally_codes]})
        try:
            return _PLAYERS.validate_python(data)
        except ValidationError as e:
            raise ProviderError(f"Unexpected player data from swgoh.help: {e}") from e

    async def get_player(self, ally_code: str) -> PlayerRoster | None:
        players = await self.get_players([ally_code])
        return players[0] if players else None

    @trace_adapter
    async def get_guild(self, ally_code: str) -> GuildInfo | None:
        data = await self._post("/swgoh/guilds", {"allycodes": [int(ally_code)], "roster": True})
        try:
            guilds = _GUILDS.validate_python(data)
        except ValidationError as e:
            raise ProviderError(f"Unexpected guild data from swgoh.help: {e}") from e
        return guilds[0] if guilds else None

    async def load_units(self) -> int:
        """Fetch the unit definitions used by ``find_unit``.

        Returns:
            Number of units loaded
        """
        data = await self._post(
            "/swgoh/data",
            {
                "collection": "unitsList",
                "match": {"rarity": 7, "obtainable": True, "obtainableTime": 0},
                "project": {"baseId": 1, "nameKey": 1, "descKey": 1, "combatType": 1},
            },
        )
        try:
            self.set_units(_UNITS.validate_python(data))
        except ValidationError as e:
            raise ProviderError(f"Unexpected unit data from swgoh.help: {e}") from e

        logger.info(f"Loaded {len(self._units)} units from swgoh.help")
        return len(self._units)

    def set_units(self, units: Sequence[UnitInfo]) -> None:
        self._units = list(units)
        self._by_name = {unit.name_key.lower(): unit for unit in self._units}
        self._by_id = {unit.base_id.lower(): unit for unit in self._units}

    def find_unit(self, name: str) -> UnitInfo | None:
        key = name.strip()
        if not key:
            return None

        unit = self._by_name.get(key.lower())
        if unit is None:
            full_name = self._acronyms.get(key.upper())
            if full_name is not None:
                unit = self._by_name.get(full_name.lower()) or self._by_id.get(full_name.lower())
        if unit is None:
            unit = self._by_id.get(key.lower())

        if unit is None:
            logger.debug(f'Unit "{name}" not found')
        return unit

    @property
    def acronyms(self) -> dict[str, str]:
        return dict(self._acronyms)
