"""Tests for ConversationEntry."""

from __future__ import annotations

from datetime import datetime

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.conversation import ConversationEntry, format_clock


class TestConversationEntry:
    def test_timestamp_defaults_to_now(self):
        before = datetime.now()
        entry = ConversationEntry(content='hi', is_user=True)
        assert before <= entry.timestamp <= datetime.now()
        assert entry.category is None

    def test_carries_category(self):
        entry = ConversationEntry(content='ok', is_user=False, category=AssistantCategory.NUTRITION)
        assert entry.category is AssistantCategory.NUTRITION


class TestFormatClock:
    def test_hours_and_minutes(self):
        assert format_clock(datetime(2026, 3, 1, 9, 5, 59)) == '09:05'
