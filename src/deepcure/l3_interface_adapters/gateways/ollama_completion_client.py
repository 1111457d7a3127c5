"""Gateway: Ollama completion client — implements CompletionClient port."""

from __future__ import annotations

import logging

import httpx
import ollama as ollama_sync

from deepcure.l1_entities.chat_message import ChatMessage
from deepcure.l1_entities.completion import CompletionResult, ErrorKind
from deepcure.l3_interface_adapters.gateways.endpoint import is_valid_endpoint

log = logging.getLogger('dc.llm')


class OllamaCompletionClient:
    """Wraps ollama.AsyncClient to implement the CompletionClient protocol."""

    def __init__(self, host: str = 'http://localhost:11434') -> None:
        self._host = host

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        if not is_valid_endpoint(self._host):
            log.error('Invalid Ollama host: %r', self._host)
            return CompletionResult.failure(ErrorKind.INVALID_ENDPOINT, message=self._host)

        client = ollama_sync.AsyncClient(host=self._host)
        try:
            resp = await client.chat(
                model=model,
                messages=[m.model_dump() for m in messages],
                options={'temperature': temperature, 'num_predict': max_tokens},
            )
        except ollama_sync.ResponseError as e:
            log.error('Ollama rejected request (HTTP %s): %s', e.status_code, e.error)
            return CompletionResult.failure(ErrorKind.PROVIDER_ERROR, message=e.error)
        except (ConnectionError, httpx.HTTPError) as e:
            log.error('Ollama transport error: %s', e, exc_info=True)
            return CompletionResult.failure(ErrorKind.TRANSPORT_ERROR, message=str(e), cause=e)

        content = resp.message.content if resp.message is not None else None
        if not isinstance(content, str):
            return CompletionResult.failure(ErrorKind.UNPARSEABLE_RESPONSE)
        return CompletionResult.success(content)

    def check_connectivity(self) -> tuple[bool, str]:
        if not is_valid_endpoint(self._host):
            return False, f'Invalid Ollama host: {self._host!r}'
        try:
            client = ollama_sync.Client(host=self._host)
            client.list()
            return True, ''
        except Exception as e:
            return False, f'Cannot connect to Ollama: {e}'
