"""Chat log — scrolling RichLog of the conversation with the assistant."""

from __future__ import annotations

import pyperclip
from rich.markup import escape
from textual.binding import Binding
from textual.widgets import RichLog

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.conversation import ConversationEntry, format_clock


def format_entry_plain(entry: ConversationEntry) -> str:
    """Plain-text line for clipboard export."""
    speaker = 'You' if entry.is_user else _assistant_name(entry)
    return f'[{format_clock(entry.timestamp)}] {speaker}: {entry.content}'


def _assistant_name(entry: ConversationEntry) -> str:
    return f'{entry.category.label} Assistant' if entry.category else 'Assistant'


class ChatLog(RichLog):
    """Auto-scrolling conversation display. Renders only entries it has not seen yet."""

    DEFAULT_CSS = """
    ChatLog {
        height: 1fr;
        border: solid $primary;
        scrollbar-size: 1 1;
    }
    ChatLog:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [Binding('c', 'copy_content', 'Copy', show=False)]

    def __init__(self, title: str = 'Conversation', **kwargs) -> None:
        super().__init__(highlight=False, markup=True, wrap=True, auto_scroll=True, **kwargs)
        self.border_title = title
        self._all_text: list[str] = []

    @property
    def rendered_count(self) -> int:
        return len(self._all_text)

    def sync(self, entries: list[ConversationEntry]) -> None:
        """Bring the log in line with *entries*, appending what is new."""
        if len(entries) < len(self._all_text):
            self.clear()
            self._all_text.clear()
        for entry in entries[len(self._all_text) :]:
            self._write_entry(entry)

    def _write_entry(self, entry: ConversationEntry) -> None:
        self._all_text.append(format_entry_plain(entry))
        stamp = format_clock(entry.timestamp)
        if entry.is_user:
            speaker = '[bold]You[/bold]'
        else:
            color = entry.category.color if entry.category else AssistantCategory.GENERAL.color
            speaker = f'[bold {color}]{escape(_assistant_name(entry))}[/]'
        self.write(f'[dim]\\[{stamp}][/dim] {speaker}: {escape(entry.content)}')

    def action_copy_content(self) -> None:
        """Copy the full conversation to the system clipboard."""
        if not self._all_text:
            self.app.notify('No conversation to copy', severity='warning', timeout=2)
            return
        pyperclip.copy('\n'.join(self._all_text))
        self.app.notify('Conversation copied', timeout=2)
