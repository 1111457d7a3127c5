"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from deepcure.l1_entities.config import AppConfig
from deepcure.l2_use_cases.ports.completion_client import CompletionClient
from deepcure.l2_use_cases.ports.config_loader import ConfigLoader
from deepcure.l3_interface_adapters.controllers.chat_controller import ChatController
from deepcure.l3_interface_adapters.gateways.ollama_completion_client import OllamaCompletionClient
from deepcure.l3_interface_adapters.gateways.openai_completion_client import OpenAICompletionClient
from deepcure.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader
from deepcure.l4_frameworks_and_drivers.config import APP_CONFIG_DEFAULTS, InfraConfig


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig, infra: InfraConfig | None = None) -> None:
        self.config = config

        _infra = infra or InfraConfig()
        self.completion_client: CompletionClient = self._build_completion_client(_infra)
        self.controller = ChatController(config=config, client=self.completion_client)

    @staticmethod
    def _build_completion_client(infra: InfraConfig) -> CompletionClient:
        if infra.llm_provider == 'ollama':
            return OllamaCompletionClient(host=infra.ollama.host)
        if infra.llm_provider == 'openai':
            return OpenAICompletionClient(
                api_key=infra.openai.api_key,
                base_url=infra.openai.base_url,
                timeout=infra.openai.timeout,
            )
        raise ValueError(f"Unknown llm_provider {infra.llm_provider!r} (expected 'openai' or 'ollama')")

    @staticmethod
    def config_loader() -> ConfigLoader:
        return YamlConfigLoader(defaults=APP_CONFIG_DEFAULTS)
