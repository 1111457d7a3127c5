"""Status bar — bottom bar showing the active assistant, request state and keybinding hints."""

from __future__ import annotations

from rich.cells import cell_len
from textual.reactive import reactive
from textual.widgets import Static


class StatusBar(Static):
    """Bottom status bar with assistant label, waiting indicator and keybinding hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
        overflow: hidden hidden;
    }
    """

    assistant_label: reactive[str] = reactive('')
    waiting: reactive[bool] = reactive(False)
    activity: reactive[str] = reactive('')
    provider_warning: reactive[str] = reactive('')
    keybinding_hints: reactive[str] = reactive('')

    def render(self) -> str:
        if self.activity:
            state = f'⟳ {self.activity}'
        elif self.waiting:
            state = '⟳ Assistant is typing…'
        elif self.provider_warning:
            state = '✗ Offline'
        else:
            state = '○ Ready'

        left_parts = []
        if self.assistant_label:
            left_parts.append(self.assistant_label)
        left_parts.append(state)
        left = ' │ '.join(left_parts)

        content_width = (self.size.width or 80) - 2
        hints = self.keybinding_hints
        if hints:
            hints_width = cell_len(hints.replace(r'\[', '['))
            gap = content_width - cell_len(left) - hints_width
            if gap >= 2:
                left = left + ' ' * gap + hints
        return left
