"""User/guild registry persisted as JSON files.

Both stores are JSON arrays keeping the historical camelCase layout:

    data/users.json   [{"id": ..., "allyCodes": [...], "vipUnitsGAC": [...]}]
    data/guilds.json  [{"id": ..., "vipUnitsTW": [...]}]

Every mutating call saves the affected store immediately.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.contracts.registry import RegisteredGuild, RegisteredUser
from src.core.errors import RegistryError
from src.core.ports import RegistryPort

logger = logging.getLogger(__name__)

_USERS = TypeAdapter(list[RegisteredUser])
_GUILDS = TypeAdapter(list[RegisteredGuild])


class JsonRegistryAdapter(RegistryPort):
    """Registry adapter backed by two JSON files."""

    def __init__(self, users_path: str | Path, guilds_path: str | Path) -> None:
        self.users_path = Path(users_path)
        self.guilds_path = Path(guilds_path)

        self._users: dict[str, RegisteredUser] = {
            user.id: user for user in self._load(self.users_path, _USERS)
        }
        self._guilds: dict[str, RegisteredGuild] = {
            guild.id: guild for guild in self._load(self.guilds_path, _GUILDS)
        }
        logger.info(
            f"Registry loaded ({len(self._users)} users, {len(self._guilds)} guilds)"
        )

    @staticmethod
    def _load(path: Path, adapter: TypeAdapter) -> list:
        """Read a registry file; a missing or unreadable file starts empty."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(f"Registry file {path} not found, starting empty")
            return []
        except OSError as e:
            logger.error(f"Error loading registry file {path}: {e}")
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Invalid registry file {path}: {e}")
            return []

    @staticmethod
    def _save(path: Path, items: list, adapter: TypeAdapter) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(adapter.dump_json(items, by_alias=True))
        except OSError as e:
            logger.error(f"Error saving registry file {path}: {e}")
            raise RegistryError(f"Could not save registry file {path}") from e

    # ----- users -----

    def save_users(self) -> None:
        self._save(self.users_path, list(self._users.values()), _USERS)
        logger.info(f"Saved users to registry (total = {len(self._users)})")

    def register_user(self, discord_id: str, ally_code: str) -> bool:
        registered_id = self.get_discord_id(ally_code)
        if registered_id is not None:
            logger.warning(
                f'Ally code "{ally_code}" is already registered to discord id "{registered_id}"'
            )
            return False

        user = self._users.get(discord_id)
        if user is None:
            self._users[discord_id] = RegisteredUser(id=discord_id, ally_codes=[ally_code])
            logger.info(f'Added discord id "{discord_id}" with ally code "{ally_code}"')
        else:
            user.ally_codes.append(ally_code)
            logger.info(f'Added ally code "{ally_code}" to existing discord id "{discord_id}"')

        self.save_users()
        return True

    def unregister_user(self, discord_id: str, ally_code: str | None = None) -> bool:
        user = self._users.get(discord_id)
        if user is None:
            logger.warning(f'Unknown discord id "{discord_id}" to unregister')
            return False

        if ally_code is not None and ally_code not in user.ally_codes:
            logger.warning(f'Could not find ally code "{ally_code}" for discord id "{discord_id}"')
            return False

        if len(user.ally_codes) <= 1:
            del self._users[discord_id]
            logger.info(f'Discord id "{discord_id}" deleted')
        elif ally_code is None:
            logger.warning(f'Multiple ally codes for discord id "{discord_id}" and none given')
            return False
        else:
            user.ally_codes = [code for code in user.ally_codes if code != ally_code]
            logger.info(f'Removed ally code "{ally_code}" from discord id "{discord_id}"')

        self.save_users()
        return True

    def get_user(self, discord_id: str) -> RegisteredUser | None:
        return self._users.get(discord_id)

    def get_users(self) -> list[RegisteredUser]:
        return list(self._users.values())

    def get_ally_codes(self, discord_id: str) -> list[str]:
        user = self._users.get(discord_id)
        return list(user.ally_codes) if user else []

    def get_discord_id(self, ally_code: str) -> str | None:
        for user in self._users.values():
            if ally_code in user.ally_codes:
                return user.id
        return None

    # ----- guilds -----

    def save_guilds(self) -> None:
        self._save(self.guilds_path, list(self._guilds.values()), _GUILDS)
        logger.info(f"Saved guilds to registry (total = {len(self._guilds)})")

    def register_guild(self, guild_id: str) -> bool:
        if guild_id in self._guilds:
            logger.warning(f'Guild with id "{guild_id}" already registered')
            return False

        self._guilds[guild_id] = RegisteredGuild(id=guild_id)
        self.save_guilds()
        logger.info(f'Added guild id "{guild_id}"')
        return True

    def unregister_guild(self, guild_id: str) -> bool:
        if guild_id not in self._guilds:
            logger.warning(f'Unknown guild id "{guild_id}" to unregister')
            return False

        del self._guilds[guild_id]
        self.save_guilds()
        logger.info(f'Guild id "{guild_id}" deleted')
        return True

    def get_guild(self, guild_id: str) -> RegisteredGuild | None:
        return self._guilds.get(guild_id)

    def get_guilds(self) -> list[RegisteredGuild]:
        return list(self._guilds.values())
