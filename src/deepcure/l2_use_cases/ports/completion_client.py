"""Port: chat-completion client."""

from __future__ import annotations

from typing import Protocol

from deepcure.l1_entities.chat_message import ChatMessage
from deepcure.l1_entities.completion import CompletionResult


class CompletionClient(Protocol):
    """Abstract completion client. Zero framework types leak through.

    Provider and transport failures come back as failed CompletionResults, never as exceptions.
    """

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        """Send one chat-completion request. Returns the raw first-choice text or a typed failure."""
        ...

    def check_connectivity(self) -> tuple[bool, str]:
        """Pre-flight connectivity check. Returns (ok, error_message)."""
        ...
