"""Result modal — dismissible modal screen for a plain-language rewrite."""

from __future__ import annotations

import pyperclip
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static


class ResultModal(ModalScreen[None]):
    """Modal screen that displays a simplification result or its error. Escape to dismiss."""

    DEFAULT_CSS = """
    ResultModal {
        align: center middle;
    }

    ResultModal > VerticalScroll {
        width: 80%;
        max-width: 100;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    ResultModal.error > VerticalScroll {
        border: thick $error;
    }

    ResultModal > VerticalScroll > #result-title {
        text-style: bold;
        margin-bottom: 1;
    }

    ResultModal.error > VerticalScroll > #result-title {
        color: $error;
    }

    ResultModal > VerticalScroll > #result-body {
        height: auto;
    }

    ResultModal > VerticalScroll > #result-hint {
        dock: bottom;
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ('escape', 'dismiss', 'Close'),
        ('c', 'copy_body', 'Copy'),
    ]

    def __init__(self, title: str, body: str, is_error: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self._title = title
        self._body = body
        self._is_error = is_error

    @property
    def body(self) -> str:
        return self._body

    @property
    def is_error(self) -> bool:
        return self._is_error

    def on_mount(self) -> None:
        if self._is_error:
            self.add_class('error')

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(self._title, id='result-title')
            yield Static(self._body, id='result-body', markup=False)
            yield Static('c to copy · Escape to close', id='result-hint')

    def action_copy_body(self) -> None:
        pyperclip.copy(self._body)
        self.app.notify('Copied', timeout=2)
