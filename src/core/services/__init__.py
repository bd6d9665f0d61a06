"""Service layer implementing the bot commands.

Handlers only talk to ports; the router maps command names to them.
"""

from src.core.services.command_context import BotDeps, CommandContext
from src.core.services.command_router import CommandRouter, build_routes
from src.core.services.raids_helper_service import RaidsHelperService

__all__ = [
    "BotDeps",
    "CommandContext",
    "CommandRouter",
    "RaidsHelperService",
    "build_routes",
]
