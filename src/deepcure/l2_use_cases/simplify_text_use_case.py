"""Use case: rewrite medical text in patient-friendly language."""

from __future__ import annotations

import logging

from deepcure.l1_entities.completion import CompletionResult
from deepcure.l1_entities.config import CompletionConfig
from deepcure.l1_entities.errors import EmptyQueryError
from deepcure.l2_use_cases.ports.completion_client import CompletionClient
from deepcure.l2_use_cases.utils.prompt_builder import build_simplify_messages, strip_markdown

log = logging.getLogger('dc.llm')


class SimplifyMedicalTextUseCase:
    """Runs a stateless single request turning clinical wording into plain language."""

    def __init__(self, client: CompletionClient, config: CompletionConfig) -> None:
        self._client = client
        self._config = config

    async def execute(self, text: str) -> CompletionResult:
        if not text.strip():
            raise EmptyQueryError('Text to simplify must not be empty')

        log.info('Simplify request: %d chars', len(text))
        result = await self._client.complete(
            self._config.model,
            build_simplify_messages(text),
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )
        if result.text is None:
            return result
        return CompletionResult.success(strip_markdown(result.text))
