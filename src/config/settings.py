"""
Configuration settings using Pydantic Settings.

All sensitive configuration must be loaded from environment variables.
Never hardcode API keys or credentials in the code.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Ensure .env values take precedence over system environment variables.
    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Discord Configuration
    discord_bot_token: str | None = Field(
        None, validation_alias=AliasChoices("DISCORD_BOT_TOKEN", "DISCORD_TOKEN")
    )
    bot_prefix: str = Field("cr.", alias="BOT_PREFIX")
    bot_activity: str = Field("cr.help", alias="BOT_ACTIVITY")
    bot_invite_url: str | None = Field(None, alias="BOT_INVITE_URL")
    bot_thumbnail_url: str = Field(
        "https://game-assets.swgoh.gg/tex.charui_trooperclone_rex.png", alias="BOT_THUMBNAIL_URL"
    )
    message_delete_delay_seconds: float = Field(1.0, alias="MESSAGE_DELETE_DELAY_SECONDS")
    reaction_timeout_seconds: int = Field(30, alias="REACTION_TIMEOUT_SECONDS")

    # swgoh.help Configuration
    swgoh_help_base_url: str = Field("https://api.swgoh.help", alias="SWGOH_HELP_BASE_URL")
    swgoh_help_username: str | None = Field(None, alias="SWGOH_HELP_USERNAME")
    swgoh_help_password: str | None = Field(None, alias="SWGOH_HELP_PASSWORD")
    swgoh_help_timeout_seconds: int = Field(60, alias="SWGOH_HELP_TIMEOUT_SECONDS")
    swgoh_help_language: str = Field("eng_us", alias="SWGOH_HELP_LANGUAGE")

    # Registry storage
    user_registry_path: str = Field("data/users.json", alias="USER_REGISTRY_PATH")
    guild_registry_path: str = Field("data/guilds.json", alias="GUILD_REGISTRY_PATH")

    # Static configuration documents
    raids_catalog_path: str = Field("config/raids_helper.json", alias="RAIDS_CATALOG_PATH")
    help_path: str = Field("config/help.json", alias="HELP_PATH")
    vip_units_path: str = Field("config/vip_units.json", alias="VIP_UNITS_PATH")
    acronyms_path: str = Field("config/acronyms.json", alias="ACRONYMS_PATH")

    # Application
    app_name: str = Field("Captain Rex", alias="APP_NAME")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    app_env: str = Field("development", alias="APP_ENV")
    app_debug: bool = Field(False, alias="APP_DEBUG")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    app_log_file: str = Field("logs/captain_rex.log", alias="APP_LOG_FILE")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get the global settings instance."""
    return Settings()
