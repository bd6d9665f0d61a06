"""Command router.

Parses ``<prefix><command> <args...>`` messages (prefix case-insensitive,
whitespace allowed after it) and dispatches them through a plain
``command name -> handler`` mapping, plus pattern routes for commands that
embed an argument in their name (``<allycode>.register``).

The router is the single catch-all for handler failures: the error is logged,
the request gets a failure reaction and the requester gets the error text.
"""

from __future__ import annotations

import logging
import re
import uuid

from src.contracts.commands import IncomingMessage
from src.core.observability import clear_correlation_id, set_correlation_id
from src.core.ports import TransportPort
from src.core.services.command_context import BotDeps, CommandContext, Handler
from src.core.services.general_commands import GeneralCommands
from src.core.services.guild_commands import GuildCommands
from src.core.services.raids_helper_service import RaidsHelperService
from src.core.services.user_commands import UserCommands
from src.core.views.report_builder import error_report, mention

logger = logging.getLogger(__name__)

REACTION_WORKING = "🤔"
REACTION_DONE = "✔️"
REACTION_FAILED = "☹️"


class CommandRouter:
    def __init__(
        self,
        deps: BotDeps,
        routes: dict[str, Handler] | None = None,
        patterns: dict[str, Handler] | None = None,
    ) -> None:
        self.deps = deps
        self.prefix = deps.settings.bot_prefix
        self.request_count = 0

        if routes is None or patterns is None:
            default_routes, default_patterns = build_routes(deps)
            routes = default_routes if routes is None else routes
            patterns = default_patterns if patterns is None else patterns

        self._routes = routes
        self._patterns = [(re.compile(p, re.IGNORECASE), h) for p, h in patterns.items()]

    @property
    def commands(self) -> list[str]:
        return sorted(self._routes)

    def parse(self, content: str) -> tuple[str, list[str]] | None:
        """Split a message into (command, args), or None when not a command."""
        if not content[: len(self.prefix)].lower() == self.prefix.lower():
            return None

        tokens = content[len(self.prefix) :].split()
        if not tokens:
            return None
        return tokens[0].lower(), tokens[1:]

    def resolve(self, command: str) -> Handler | None:
        handler = self._routes.get(command)
        if handler is not None:
            return handler

        for pattern, pattern_handler in self._patterns:
            if pattern.match(command):
                return pattern_handler
        return None

    async def dispatch(self, message: IncomingMessage, transport: TransportPort) -> bool:
        """Handle one chat message.

        Returns:
            True when the message was a command for this bot
        """
        parsed = self.parse(message.content)
        if parsed is None:
            return False

        command, args = parsed
        self.request_count += 1
        set_correlation_id(uuid.uuid4().hex[:12])
        logger.info(f'Parsed command "{command}" from "{message.author_name or message.author_id}"')

        try:
            await transport.react(REACTION_WORKING)

            handler = self.resolve(command)
            if handler is None:
                # unknown commands are not counted as processed requests
                self.request_count -= 1
                logger.info(f'Unknown command "{command}"')
                await transport.send_report(
                    error_report(
                        f"{mention(message.author_id)} What do you mean by \"{command}\"??? "
                        "My training does not include this feature."
                    )
                )
            else:
                ctx = CommandContext(
                    author_id=message.author_id,
                    command=command,
                    args=args,
                    transport=transport,
                    deps=self.deps,
                    mentions=list(message.mentions),
                    guild_id=message.guild_id,
                    request_count=self.request_count,
                )
                await handler(ctx)

            await transport.react(REACTION_DONE)
        except Exception as e:
            logger.exception(f'Command "{command}" failed: {e}')
            await transport.react(REACTION_FAILED)
            await transport.send_text(
                f"{mention(message.author_id)} Could not complete request "
                f'"{self.prefix}{command} {" ".join(args)}":\n{e}'
            )
        finally:
            clear_correlation_id()

        return True


def build_routes(deps: BotDeps) -> tuple[dict[str, Handler], dict[str, Handler]]:
    """Default command table and pattern routes."""
    general = GeneralCommands(deps)
    users = UserCommands(deps)
    guilds = GuildCommands(deps)
    raids = RaidsHelperService(deps)

    routes: dict[str, Handler] = {
        **general.routes(),
        **users.routes(),
        **guilds.routes(),
        **raids.routes(),
    }
    return routes, users.patterns()
