"""L1 entity: assistant category."""

from __future__ import annotations

import enum


class AssistantCategory(enum.Enum):
    GENERAL = 'General Medical'
    MEDICATION = 'Medication'
    NUTRITION = 'Nutrition'
    MENTAL_HEALTH = 'Mental Health'
    CHRONIC_CARE = 'Chronic Care'

    @property
    def label(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return _COLORS[self]

    @classmethod
    def from_label(cls, label: str | None) -> AssistantCategory | None:
        """Look up by label or member name, case-insensitively. Unknown → None."""
        if not label:
            return None
        key = label.strip().casefold()
        for member in cls:
            if key in (member.value.casefold(), member.name.casefold()):
                return member
        return None


# Hex so the values parse as both Rich and Textual markup colours.
_COLORS = {
    AssistantCategory.GENERAL: '#007aff',
    AssistantCategory.MEDICATION: '#af52de',
    AssistantCategory.NUTRITION: '#34c759',
    AssistantCategory.MENTAL_HEALTH: '#ff9500',
    AssistantCategory.CHRONIC_CARE: '#30b0c7',
}
