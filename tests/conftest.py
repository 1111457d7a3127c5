"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from deepcure.l1_entities.chat_message import ChatMessage
from deepcure.l1_entities.completion import CompletionResult, ErrorKind
from deepcure.l1_entities.config import AppConfig
from deepcure.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeCompletionClient:
    """Fake completion client for L2/L3 tests."""

    def __init__(self, response: str = 'Fake LLM response', result: CompletionResult | None = None):
        self._result = result or CompletionResult.success(response)
        self.complete_calls: list[dict] = []
        self._connectivity = (True, '')

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        self.complete_calls.append(
            {
                'model': model,
                'messages': list(messages),
                'temperature': temperature,
                'max_tokens': max_tokens,
            }
        )
        return self._result

    def check_connectivity(self) -> tuple[bool, str]:
        return self._connectivity

    def set_response(self, response: str) -> None:
        self._result = CompletionResult.success(response)

    def set_failure(self, kind: ErrorKind, message: str = '', cause: BaseException | None = None) -> None:
        self._result = CompletionResult.failure(kind, message=message, cause=cause)

    def set_connectivity(self, ok: bool, msg: str = '') -> None:
        self._connectivity = (ok, msg)


class GatedCompletionClient(FakeCompletionClient):
    """Blocks every completion until the test releases it."""

    def __init__(self, response: str = 'Fake LLM response'):
        super().__init__(response=response)
        self.gate = asyncio.Event()

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> CompletionResult:
        await self.gate.wait()
        return await super().complete(model, messages, temperature=temperature, max_tokens=max_tokens)


# --- Standard Fixtures ---


@pytest.fixture(autouse=True)
def _reset_dc_logging():
    """Drop file handlers added to the `dc` logger tree during a test."""
    yield
    root = logging.getLogger('dc')
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    log_dir = (tmp_path / 'logs').as_posix()
    content = f"""\
completion:
  model: "gpt-4o"
  temperature: 0.2
  max_tokens: 500
assistant:
  default_category: "Nutrition"
  welcome_message: "Hi there."
  suggested_questions:
    - "Is coffee bad for me?"
log:
  directory: "{log_dir}"
  level: "INFO"
personas:
  Nutrition: "You are a registered dietitian."
llm_provider: "openai"
openai:
  base_url: "https://api.example.test/v1"
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    return FakeCompletionClient()
