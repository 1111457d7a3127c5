"""Use case: ask the medical guidance assistant a question."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.completion import CompletionResult
from deepcure.l1_entities.config import CompletionConfig
from deepcure.l1_entities.errors import EmptyQueryError
from deepcure.l2_use_cases.ports.completion_client import CompletionClient
from deepcure.l2_use_cases.utils.prompt_builder import build_guidance_messages, strip_markdown

log = logging.getLogger('dc.llm')


class GetGuidanceUseCase:
    """Builds the persona conversation for a category, dispatches it once, cleans the answer."""

    def __init__(
        self,
        client: CompletionClient,
        config: CompletionConfig,
        personas: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._personas = dict(personas or {})

    async def execute(self, query: str, category: AssistantCategory | str | None) -> CompletionResult:
        """Run one guidance request. Raises EmptyQueryError on blank input; never on provider failure."""
        if not query.strip():
            raise EmptyQueryError('Query must not be empty')

        messages = build_guidance_messages(query, category, self._personas)
        label = category.label if isinstance(category, AssistantCategory) else category
        log.info('Guidance request: category=%s, msgs=%d, model=%s', label, len(messages), self._config.model)

        result = await self._client.complete(
            self._config.model,
            messages,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )
        if result.text is None:
            err = result.error
            log.warning('Guidance failed: %s', err.describe() if err else 'unknown error')
            return result

        cleaned = strip_markdown(result.text)
        log.debug('Guidance response (%d chars): %s', len(cleaned), cleaned[:500])
        return CompletionResult.success(cleaned)
