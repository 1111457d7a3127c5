"""Assistant bar — shows the selectable assistant categories and which one is active."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static

from deepcure.l1_entities.assistant_category import AssistantCategory


def category_key(category: AssistantCategory) -> str:
    """Function key bound to a category: F2 for the first, F3 for the second, …"""
    return f'f{list(AssistantCategory).index(category) + 2}'


class AssistantBar(Static):
    """One-line selector strip. The active category is highlighted in its colour."""

    DEFAULT_CSS = """
    AssistantBar {
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    selected: reactive[AssistantCategory] = reactive(AssistantCategory.GENERAL)

    def render(self) -> str:
        parts = []
        for category in AssistantCategory:
            key = category_key(category).upper()
            if category == self.selected:
                parts.append(f'[reverse {category.color}] {key} {category.label} [/]')
            else:
                parts.append(f'[dim]{key}[/dim] {category.label}')
        return '  '.join(parts)
