"""Textual Message subclasses — contracts between controller/workers and the App."""

from __future__ import annotations

from textual.message import Message

from deepcure.l1_entities.completion import CompletionResult


class ChatStateChanged(Message):
    """Posted whenever the chat controller notifies a state change."""


class SimplifyResult(Message):
    """Posted by the simplify worker when the plain-language rewrite completes."""

    def __init__(self, result: CompletionResult) -> None:
        super().__init__()
        self.result = result
