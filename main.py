"""
Main entry point for the Captain Rex Discord Bot.
"""

import asyncio
import logging
import os
import sys

from src.adapters.discord_adapter import DiscordAdapter
from src.adapters.json_registry import JsonRegistryAdapter
from src.adapters.swgoh_help import SwgohHelpAdapter, load_acronyms
from src.config.settings import get_settings
from src.core.observability import configure_stdlib_json_logging
from src.core.services.command_context import BotDeps
from src.core.services.command_router import CommandRouter


def setup_logging() -> None:
    """Set up structured logging for both stdout and file."""
    settings = get_settings()

    file_target: str | None = settings.app_log_file
    log_dir = os.path.dirname(file_target)
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e:
            print(f"Cannot create log directory {log_dir} ({e}), logging to stdout only")
            file_target = None

    configure_stdlib_json_logging(level=settings.app_log_level, file_target=file_target)

    # Reduce discord.py logging verbosity unless in debug mode
    if not settings.app_debug:
        logging.getLogger("discord").setLevel(logging.INFO)
        logging.getLogger("discord.http").setLevel(logging.WARNING)


async def health_check() -> None:
    """Perform basic health checks before starting the bot."""
    logger = logging.getLogger(__name__)
    settings = get_settings()

    logger.info("Performing health checks...")

    if not settings.discord_bot_token or not settings.discord_bot_token.strip():
        logger.error("Discord bot token not found in environment variables!")
        sys.exit(1)

    if not settings.swgoh_help_username or not settings.swgoh_help_password:
        logger.error("swgoh.help credentials not found in environment variables!")
        sys.exit(1)

    if not os.path.exists(settings.raids_catalog_path):
        logger.warning(f"Raids catalog {settings.raids_catalog_path} not found")

    logger.info("Health checks passed ✓")


def print_startup_banner() -> None:
    """Print a nice startup banner."""
    banner = """
    ╔══════════════════════════════════════════╗
    ║              Captain Rex                 ║
    ║      SWGOH guild assistant for Discord   ║
    ╚══════════════════════════════════════════╝
    """
    print(banner)


async def main() -> None:
    """Main async entry point."""
    logger = logging.getLogger(__name__)
    settings = get_settings()
    swgoh_help: SwgohHelpAdapter | None = None
    discord_adapter: DiscordAdapter | None = None

    try:
        print_startup_banner()
        setup_logging()

        logger.info(f"Starting {settings.app_name} {settings.app_version}...")
        await health_check()

        logger.info("Loading registry")
        registry = JsonRegistryAdapter(settings.user_registry_path, settings.guild_registry_path)

        logger.info("Connecting to swgoh.help")
        swgoh_help = SwgohHelpAdapter(settings, acronyms=load_acronyms(settings.acronyms_path))
        await swgoh_help.load_units()

        deps = BotDeps(settings=settings, registry=registry, roster=swgoh_help, units=swgoh_help)
        router = CommandRouter(deps)
        logger.info(f"Registered {len(router.commands)} commands")

        discord_adapter = DiscordAdapter(router, settings)

        logger.info("Bot initialization complete. Connecting to Discord...")
        await discord_adapter.start()

    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C)")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("Shutting down services...")
        if discord_adapter is not None:
            await discord_adapter.stop()
        if swgoh_help is not None:
            await swgoh_help.close()
        logger.info("All services stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nBot stopped by user.")
