"""Conversation entry entity — one line of the on-screen chat."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from deepcure.l1_entities.assistant_category import AssistantCategory


def format_clock(moment: datetime) -> str:
    """Format a timestamp as HH:MM for chat display."""
    return moment.strftime('%H:%M')


class ConversationEntry(BaseModel):
    """A message shown in the chat, from the user or the assistant. Never persisted."""

    content: str
    is_user: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    category: AssistantCategory | None = None
