"""Built-in config defaults and infrastructure provider configs — lives in L4, not domain."""

from __future__ import annotations

import copy

from pydantic import BaseModel, Field

from deepcure.l1_entities.config import AppConfig
from deepcure.l3_interface_adapters.gateways.paths import LOG_DIR
from deepcure.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'completion': {
        'model': 'gpt-4o-mini',
        'temperature': 0.7,
        'max_tokens': 1000,
    },
    'assistant': {
        'default_category': 'General Medical',
        'welcome_message': (
            "Hello! I'm your DeepCure Medical Assistant. How can I help you today? "
            "Please note that I provide general information only and don't replace professional medical advice."
        ),
        'suggested_questions': [
            'What could cause persistent headaches?',
            'How can I manage my diabetes better?',
            'Is this medication safe during pregnancy?',
            'What should I know about my high blood pressure?',
            'How to interpret my recent blood test results?',
        ],
    },
    'log': {
        'directory': str(LOG_DIR),
        'level': 'DEBUG',
    },
    'personas': {},
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


class OllamaProviderConfig(BaseModel):
    host: str = 'http://localhost:11434'


class OpenAIProviderConfig(BaseModel):
    api_key: str | None = None  # None → OPENAI_API_KEY env
    base_url: str = 'https://api.openai.com/v1'
    timeout: float | None = None  # None → SDK default


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    llm_provider: str = 'openai'  # 'openai' | 'ollama'
    ollama: OllamaProviderConfig = Field(default_factory=OllamaProviderConfig)
    openai: OpenAIProviderConfig = Field(default_factory=OpenAIProviderConfig)
