"""ChatController — observable chat state, orchestrates the guidance use cases."""

from __future__ import annotations

import logging
from collections.abc import Callable

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.completion import CompletionResult
from deepcure.l1_entities.config import AppConfig
from deepcure.l1_entities.conversation import ConversationEntry
from deepcure.l2_use_cases.guidance_use_case import GetGuidanceUseCase
from deepcure.l2_use_cases.ports.completion_client import CompletionClient
from deepcure.l2_use_cases.simplify_text_use_case import SimplifyMedicalTextUseCase

log = logging.getLogger('dc.controller')

ERROR_REPLY_PREFIX = "I'm sorry, I encountered an issue while processing your question. Please try again. Error: "

ChatListener = Callable[['ChatController'], None]


class ChatController:
    """State holder for one chat session, with change notification.

    Owns the conversation entries, the selected assistant category and the
    waiting flag. Listeners are called with the controller after every change;
    the TUI (L4) subscribes and re-renders.
    """

    def __init__(self, config: AppConfig, client: CompletionClient) -> None:
        self._config = config
        self._guidance_uc = GetGuidanceUseCase(client, config.completion, config.personas)
        self._simplify_uc = SimplifyMedicalTextUseCase(client, config.completion)

        self.entries: list[ConversationEntry] = []
        self.category: AssistantCategory = config.assistant.default_category
        self.suggested_questions: list[str] = list(config.assistant.suggested_questions)
        self.show_suggestions: bool = bool(self.suggested_questions)

        self._listeners: list[ChatListener] = []
        self._in_flight = 0
        self._simplifying = 0
        self._started = False

    @property
    def is_waiting(self) -> bool:
        return self._in_flight > 0

    @property
    def is_simplifying(self) -> bool:
        return self._simplifying > 0

    def subscribe(self, listener: ChatListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _append(
        self,
        content: str,
        *,
        is_user: bool,
        category: AssistantCategory | None = None,
    ) -> ConversationEntry:
        entry = ConversationEntry(content=content, is_user=is_user, category=category or self.category)
        self.entries.append(entry)
        return entry

    def start(self) -> None:
        """Post the welcome message. Only the first call has an effect."""
        if self._started:
            return
        self._started = True
        self._append(self._config.assistant.welcome_message, is_user=False)
        self._notify()

    def select_category(self, category: AssistantCategory) -> None:
        """Switch the assistant persona and announce it in the chat."""
        if category == self.category:
            return
        self.category = category
        log.info('Assistant switched to %s', category.label)
        self._append(f'Switching to {category.label} assistant. How can I help you?', is_user=False)
        self._notify()

    async def send(self, text: str) -> ConversationEntry | None:
        """Send a user message and append the assistant's reply. Blank input is ignored.

        Returns the reply entry, or None when nothing was sent. Every dispatched
        message gets a reply entry, an error text when the request failed.
        """
        query = text.strip()
        if not query:
            return None

        category = self.category
        self._append(query, is_user=True)
        self.show_suggestions = False
        self._in_flight += 1
        self._notify()

        try:
            result = await self._guidance_uc.execute(query, category)
            answer = result.text
            detail = result.error.describe() if result.error else 'Unknown error'
        except Exception as e:
            log.error('Guidance request crashed: %s', e, exc_info=True)
            answer, detail = None, f'{type(e).__name__}: {e}'
        finally:
            self._in_flight -= 1

        if answer is not None:
            reply = self._append(answer, is_user=False, category=category)
        else:
            log.error('AI response error: %s', detail)
            reply = self._append(ERROR_REPLY_PREFIX + detail, is_user=False, category=category)
        self._notify()
        return reply

    async def simplify(self, text: str) -> CompletionResult:
        """Rewrite medical text in plain language. Does not touch the chat history or the waiting flag."""
        self._simplifying += 1
        self._notify()
        try:
            return await self._simplify_uc.execute(text)
        finally:
            self._simplifying -= 1
            self._notify()
