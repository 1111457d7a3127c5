"""Simplify modal — paste medical text to get a patient-friendly version."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static, TextArea


class SimplifyModal(ModalScreen[str | None]):
    """Modal with a text area. Ctrl+S → return text, Escape → None."""

    DEFAULT_CSS = """
    SimplifyModal {
        align: center middle;
    }

    SimplifyModal > Vertical {
        width: 80%;
        max-width: 100;
        height: 70%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    SimplifyModal > Vertical > #simplify-title {
        text-style: bold;
        margin-bottom: 1;
    }

    SimplifyModal > Vertical > #simplify-input {
        height: 1fr;
    }

    SimplifyModal > Vertical > #simplify-hint {
        color: $text-muted;
        margin-top: 1;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding('escape', 'cancel', 'Cancel'),
        Binding('ctrl+s', 'submit', 'Simplify', priority=True),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static('Simplify medical text', id='simplify-title')
            yield TextArea(id='simplify-input')
            yield Static('Ctrl+S to simplify · Escape to cancel', id='simplify-hint')

    def on_mount(self) -> None:
        self.query_one('#simplify-input', TextArea).focus()

    def action_submit(self) -> None:
        text = self.query_one('#simplify-input', TextArea).text.strip()
        self.dismiss(text if text else None)

    def action_cancel(self) -> None:
        self.dismiss(None)
