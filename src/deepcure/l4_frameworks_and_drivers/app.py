"""Textual App — thin TUI shell: compose + message routing only."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import Input, OptionList, Static

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.config import AppConfig
from deepcure.l3_interface_adapters.controllers.chat_controller import ChatController
from deepcure.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from deepcure.l4_frameworks_and_drivers.messages import ChatStateChanged, SimplifyResult
from deepcure.l4_frameworks_and_drivers.widgets.assistant_bar import AssistantBar, category_key
from deepcure.l4_frameworks_and_drivers.widgets.chat_log import ChatLog
from deepcure.l4_frameworks_and_drivers.widgets.help_modal import HelpModal
from deepcure.l4_frameworks_and_drivers.widgets.result_modal import ResultModal
from deepcure.l4_frameworks_and_drivers.widgets.simplify_modal import SimplifyModal
from deepcure.l4_frameworks_and_drivers.widgets.status_bar import StatusBar

log = logging.getLogger('dc.app')

HELP_KEYBINDINGS = [
    ('Enter', 'Send message'),
    ('F7', 'Simplify medical text'),
    ('c', 'Copy conversation (chat log focused)'),
    ('Tab', 'Switch focus'),
    ('F1', 'Toggle this help'),
    ('Ctrl+Q', 'Quit'),
]


class App(TextualApp):
    """Main TUI application for the medical guidance chat."""

    CSS = """
    #header {
        height: 1;
        background: $primary;
        color: $text;
        text-style: bold;
    }

    #suggestions {
        height: auto;
        max-height: 7;
        border: solid $secondary;
    }

    #message-input {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding('ctrl+q', 'quit_app', 'Quit', priority=True),
        Binding('f1', 'show_help', 'Help', priority=True),
        Binding('f7', 'simplify', 'Simplify', priority=True),
        Binding('tab', 'focus_next', 'Switch Panel', show=False),
    ]

    def __init__(
        self,
        config: AppConfig,
        controller: ChatController | None = None,
        log_dir: Path | None = None,
        connectivity_error: str = '',
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._config = config
        setup_file_logging(log_dir or Path(config.log.directory), config.log.level)

        # Controller (injected or created with default wiring)
        if controller is not None:
            self._controller = controller
        else:  # pragma: no cover -- composition-root wiring; controller always injected in tests
            from deepcure.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: only wired when no controller injected (non-test path)
                DependencyContainer,
            )

            self._controller = DependencyContainer(config).controller

        self._connectivity_error = connectivity_error
        self._unsubscribe = None

        # Function-key bindings per assistant category (F2..F6)
        for category in AssistantCategory:
            self._bindings.bind(
                category_key(category),
                f"select_category('{category.name}')",
                description=category.label,
                show=False,
                priority=True,
            )

    @property
    def controller(self) -> ChatController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Static('  DeepCure | AI Medical Guidance', id='header')
        yield AssistantBar(id='assistant-bar')
        yield ChatLog(id='chat-log')
        yield OptionList(*self._controller.suggested_questions, id='suggestions')
        yield Input(placeholder='Ask a health question…', id='message-input')
        yield StatusBar(id='status-bar')

    def on_mount(self) -> None:
        self.query_one('#suggestions', OptionList).border_title = 'Suggested questions'
        bar = self.query_one('#status-bar', StatusBar)
        bar.keybinding_hints = r'\[F1] help  \[F2-F6] assistant  \[F7] simplify  \[ctrl+q] quit'
        if self._connectivity_error:
            bar.provider_warning = self._connectivity_error
            self.notify(
                f'AI assistant unreachable: {self._connectivity_error}',
                severity='warning',
                timeout=10,
            )

        self._unsubscribe = self._controller.subscribe(lambda _ctrl: self.post_message(ChatStateChanged()))
        self._controller.start()
        self._render_state()
        self.query_one('#message-input', Input).focus()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _render_state(self) -> None:
        ctrl = self._controller
        self.query_one('#chat-log', ChatLog).sync(ctrl.entries)
        self.query_one('#assistant-bar', AssistantBar).selected = ctrl.category
        self.query_one('#suggestions', OptionList).display = ctrl.show_suggestions
        bar = self.query_one('#status-bar', StatusBar)
        bar.assistant_label = f'{ctrl.category.label} Assistant'
        bar.waiting = ctrl.is_waiting
        bar.activity = 'Simplifying...' if ctrl.is_simplifying else ''

    # --- Message Handlers ---

    def on_chat_state_changed(self, message: ChatStateChanged) -> None:
        self._render_state()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != 'message-input':
            return
        event.input.value = ''
        self._send(event.value)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != 'suggestions':
            return
        self._send(str(event.option.prompt))

    def on_simplify_result(self, message: SimplifyResult) -> None:
        result = message.result
        if result.text is not None:
            self.push_screen(ResultModal(title='Plain-language version', body=result.text))
        else:
            detail = result.error.describe() if result.error else 'Unknown error'
            self.push_screen(ResultModal(title='Simplification failed', body=detail, is_error=True))

    # --- Workers ---

    def _send(self, text: str) -> None:
        if not text.strip():
            return

        async def _send_task() -> None:
            try:
                await self._controller.send(text)
            except Exception as e:
                log.error('Guidance request crashed: %s', e, exc_info=True)
                self.notify(f'Request failed: {e}', severity='error', timeout=8)

        # Not exclusive: a new question never cancels one already in flight.
        self.run_worker(_send_task, group='guidance')

    def _run_simplify_worker(self, text: str) -> None:
        async def _simplify_task() -> None:
            try:
                result = await self._controller.simplify(text)
            except Exception as e:
                log.error('Simplify request crashed: %s', e, exc_info=True)
                self.notify(f'Simplify failed: {e}', severity='error', timeout=8)
                return
            self.post_message(SimplifyResult(result))

        self.run_worker(_simplify_task, exclusive=True, group='simplify')

    # --- Actions ---

    def action_select_category(self, name: str) -> None:
        self._controller.select_category(AssistantCategory[name])

    def action_simplify(self) -> None:
        if isinstance(self.screen, SimplifyModal):
            return
        self.push_screen(SimplifyModal(), callback=self._on_simplify_text)

    def _on_simplify_text(self, text: str | None) -> None:
        if not text:
            return
        self._run_simplify_worker(text)

    def action_show_help(self) -> None:
        if isinstance(self.screen, HelpModal):
            self.screen.dismiss()
            return

        assistants = [(category_key(c).upper(), c.label) for c in AssistantCategory]
        self.push_screen(HelpModal(assistants=assistants, keybindings=HELP_KEYBINDINGS))

    def action_quit_app(self) -> None:
        self.exit()
