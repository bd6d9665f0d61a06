"""Port interface for the messaging transport.

Handlers only talk to the conversation a command came from: replies, status
messages, reactions and the reaction-based choice prompt.
"""

from abc import ABC, abstractmethod
from typing import Any

from src.contracts.reports import Report

CHOICE_EMOJIS = ("1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣", "6️⃣", "7️⃣", "8️⃣", "9️⃣")
"""Reactions offered by ``ask_choice``, in option order."""


class TransportPort(ABC):
    """Port interface for replying in the originating conversation."""

    @abstractmethod
    async def send_report(self, report: Report) -> Any:
        """Send a report payload.

        Returns:
            Opaque handle of the sent message (usable with ``delete``)
        """
        pass

    @abstractmethod
    async def send_text(self, text: str) -> Any:
        """Send a plain text message and return its handle."""
        pass

    @abstractmethod
    async def delete(self, message: Any, delay: float = 0) -> None:
        """Delete a previously sent message after an optional delay."""
        pass

    @abstractmethod
    async def react(self, emoji: str) -> None:
        """React to the originating message."""
        pass

    @abstractmethod
    async def ask_choice(self, report: Report, options: int, timeout: float) -> int | None:
        """Publish a prompt and wait for the requester to pick an option.

        Args:
            report: Prompt listing the numbered options
            options: Number of options offered (at most 9)
            timeout: Seconds to wait for the requester's reaction

        Returns:
            Zero-based index of the chosen option, or None on timeout
        """
        pass
