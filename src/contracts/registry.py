"""
Data contracts for the user/guild registry.

Field aliases keep the on-disk JSON layout (``allyCodes``, ``vipUnitsGAC``,
``vipUnitsTW``) stable across versions.
"""

from pydantic import Field

from src.contracts.common import BaseContract


class RegisteredUser(BaseContract):
    """Discord user with the ally codes registered to them."""

    id: str = Field(..., description="Discord user id (snowflake)")
    ally_codes: list[str] = Field(default_factory=list, alias="allyCodes")
    vip_units_gac: list[str] = Field(
        default_factory=list,
        alias="vipUnitsGAC",
        description="Custom VIP units for GAC intel gathering",
    )


class RegisteredGuild(BaseContract):
    """Game guild with guild-level preferences."""

    id: str = Field(..., description="Guild id")
    vip_units_tw: list[str] = Field(
        default_factory=list,
        alias="vipUnitsTW",
        description="Custom VIP units for TW intel gathering",
    )
