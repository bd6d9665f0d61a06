"""Loaders for the static JSON documents under ``config/``.

Files are read on each use so edits are picked up without a restart.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.contracts.commands import HelpArea, VipUnits
from src.core.errors import ConfigError

logger = logging.getLogger(__name__)

_HELP = TypeAdapter(list[HelpArea])


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {path}: {e}")
        raise ConfigError(f"Cannot read {path}") from e


def load_help(path: str | Path) -> list[HelpArea]:
    try:
        return _HELP.validate_python(_read_json(path))
    except ValidationError as e:
        raise ConfigError(f"Invalid help file {path}: {e}") from e


def load_vip_units(path: str | Path) -> VipUnits:
    try:
        return VipUnits.model_validate(_read_json(path))
    except ValidationError as e:
        raise ConfigError(f"Invalid VIP units file {path}: {e}") from e
