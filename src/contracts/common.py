"""
Common data types and base models for Captain Rex.
All models use Pydantic V2 with strict type checking.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CombatType(int, Enum):
    """Unit combat types as reported by swgoh.help."""

    CHARACTER = 1
    SHIP = 2


class GuildMemberLevel(int, Enum):
    """Guild member ranks (swgoh.help ``guildMemberLevel``)."""

    MEMBER = 2
    OFFICER = 3
    LEADER = 4


class EmbedColor(int, Enum):
    """Report embed colors for different states."""

    INFO = 0x0099FF  # Blue
    SUCCESS = 0x2ECC71  # Green
    WARNING = 0xF39C12  # Orange
    ERROR = 0xE74C3C  # Red


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration."""

    model_config = ConfigDict(
        # Validate data on assignment
        validate_assignment=True,
        # Use enum values in JSON
        use_enum_values=True,
        # Accept both python names and camelCase aliases
        populate_by_name=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )


class FrozenContract(BaseModel):
    """Immutable contract for templates and computed results."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )
