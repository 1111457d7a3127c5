"""Gateway: OpenAI-compatible completion client — implements CompletionClient port.

Works with any OpenAI-compatible API: OpenAI, Groq, Together, vLLM, etc.
The body of a successful response is read raw so that an empty or malformed
payload is reported as such instead of surfacing as an SDK exception.
"""

from __future__ import annotations

import json
import logging
import os

import httpx
import openai

from deepcure.l1_entities.chat_message import ChatMessage
from deepcure.l1_entities.completion import CompletionResult, ErrorKind
from deepcure.l3_interface_adapters.gateways.endpoint import is_valid_endpoint

log = logging.getLogger('dc.llm')

DEFAULT_BASE_URL = 'https://api.openai.com/v1'


class OpenAICompletionClient:
    """Wraps openai.AsyncOpenAI to implement the CompletionClient protocol. One POST per call, no retries."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._http_client = http_client

    def _resolve_api_key(self) -> str:
        # An empty key is reported as PROVIDER_ERROR, by the SDK or by the provider's auth check.
        return self._api_key or os.environ.get('OPENAI_API_KEY') or ''

    def _async_client(self) -> openai.AsyncOpenAI:
        kwargs: dict = {}
        if self._timeout is not None:
            kwargs['timeout'] = self._timeout
        if self._http_client is not None:
            kwargs['http_client'] = self._http_client
        return openai.AsyncOpenAI(
            api_key=self._resolve_api_key(),
            base_url=self._base_url,
            max_retries=0,
            **kwargs,
        )

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        if not is_valid_endpoint(self._base_url):
            log.error('Invalid completion endpoint: %r', self._base_url)
            return CompletionResult.failure(ErrorKind.INVALID_ENDPOINT, message=self._base_url)

        try:
            client = self._async_client()
        except openai.OpenAIError as e:
            # Raised before any request, e.g. no API key anywhere.
            log.error('Cannot create completion client: %s', e)
            return CompletionResult.failure(ErrorKind.PROVIDER_ERROR, message=str(e))

        try:
            raw = await client.chat.completions.with_raw_response.create(
                model=model,
                messages=[{'role': m.role, 'content': m.content} for m in messages],  # ty: ignore[invalid-argument-type] -- dict satisfies ChatCompletionMessageParam at runtime
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIConnectionError as e:
            cause = e.__cause__ if e.__cause__ is not None else e
            log.error('Completion transport error: %s', cause, exc_info=True)
            return CompletionResult.failure(ErrorKind.TRANSPORT_ERROR, message=str(e), cause=cause)
        except openai.APIStatusError as e:
            message = provider_message(e.body) or e.message
            log.error('Completion rejected by provider (HTTP %d): %s', e.status_code, message)
            return CompletionResult.failure(ErrorKind.PROVIDER_ERROR, message=message)

        return parse_completion_body(raw.http_response.content)

    def check_connectivity(self) -> tuple[bool, str]:
        if not is_valid_endpoint(self._base_url):
            return False, f'Invalid API URL: {self._base_url!r}'
        try:
            client = openai.OpenAI(api_key=self._resolve_api_key(), base_url=self._base_url, max_retries=0)
            client.models.list()
            return True, ''
        except openai.AuthenticationError as e:
            return False, f'Authentication failed: {e}'
        except Exception as e:
            return False, f'Cannot connect to OpenAI-compatible API: {e}'


def provider_message(body: object) -> str | None:
    """Return `message` from a provider error object, if it has one."""
    if isinstance(body, dict):
        message = body.get('message')
        if isinstance(message, str):
            return message
    return None


def parse_completion_body(body: bytes) -> CompletionResult:
    """Turn a raw 2xx chat-completion body into a CompletionResult.

    `choices[0].message.content` wins; otherwise `error.message` is a provider
    error; anything else is unparseable.
    """
    if not body or not body.strip():
        return CompletionResult.failure(ErrorKind.NO_RESPONSE_BODY)
    try:
        data = json.loads(body)
    except ValueError:
        log.warning('Completion body is not JSON (%d bytes)', len(body))
        return CompletionResult.failure(ErrorKind.UNPARSEABLE_RESPONSE)
    if not isinstance(data, dict):
        return CompletionResult.failure(ErrorKind.UNPARSEABLE_RESPONSE)

    content = _first_choice_content(data)
    if content is not None:
        return CompletionResult.success(content)

    message = provider_message(data.get('error'))
    if message is not None:
        log.error('Provider reported error: %s', message)
        return CompletionResult.failure(ErrorKind.PROVIDER_ERROR, message=message)

    log.warning('Unexpected completion body shape: keys=%s', sorted(data))
    return CompletionResult.failure(ErrorKind.UNPARSEABLE_RESPONSE)


def _first_choice_content(data: dict) -> str | None:
    choices = data.get('choices')
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get('message')
    if not isinstance(message, dict):
        return None
    content = message.get('content')
    return content if isinstance(content, str) else None
