"""Help modal — assistant list, keybinding reference and the medical disclaimer."""

from __future__ import annotations

from collections.abc import Sequence

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Markdown, Static

DISCLAIMER = 'Answers are general information only and do not replace professional medical advice.'


def _table(heading: str, rows: Sequence[tuple[str, str]]) -> str:
    lines = [f'| Key | {heading} |', '|-----|------|']
    lines.extend(f'| `{key}` | {text} |' for key, text in rows)
    return '\n'.join(lines)


class HelpModal(ModalScreen[None]):
    """Two-column help: assistants on the left, keybindings on the right."""

    DEFAULT_CSS = """
    HelpModal {
        align: center middle;
    }

    HelpModal > Vertical {
        width: 90%;
        max-width: 110;
        height: auto;
        background: $surface;
        border: round $primary;
        border-title-style: bold;
        padding: 0 1;
    }

    HelpModal #help-columns {
        height: auto;
    }

    HelpModal #help-assistants, HelpModal #help-keys {
        width: 1fr;
        height: auto;
    }

    HelpModal #help-disclaimer {
        color: $warning;
        text-style: italic;
        padding: 0 1;
    }

    HelpModal #help-hint {
        text-align: right;
        color: $text-muted;
    }
    """

    BINDINGS = [
        ('escape', 'dismiss', 'Close'),
        ('f1', 'dismiss', 'Close'),
    ]

    def __init__(
        self,
        assistants: Sequence[tuple[str, str]],
        keybindings: Sequence[tuple[str, str]],
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._assistants = list(assistants)
        self._keybindings = list(keybindings)

    @property
    def assistants_md(self) -> str:
        return _table('Assistant', self._assistants)

    @property
    def keybindings_md(self) -> str:
        return _table('Action', self._keybindings)

    def compose(self) -> ComposeResult:
        with Vertical() as box:
            box.border_title = 'DeepCure Help'
            with Horizontal(id='help-columns'):
                yield Markdown(self.assistants_md, id='help-assistants')
                yield Markdown(self.keybindings_md, id='help-keys')
            yield Static(DISCLAIMER, id='help-disclaimer')
            yield Static('Escape / F1 to close', id='help-hint')
