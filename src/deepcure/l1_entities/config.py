"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from deepcure.l1_entities.assistant_category import AssistantCategory


class CompletionConfig(BaseModel):
    model: str
    temperature: float = Field(ge=0.0, le=2.0)
    max_tokens: int = Field(gt=0)


class AssistantConfig(BaseModel):
    default_category: AssistantCategory
    welcome_message: str
    suggested_questions: list[str] = Field(default_factory=list)

    @field_validator('default_category', mode='before')
    @classmethod
    def _parse_category(cls, value: object) -> object:
        if isinstance(value, str):
            category = AssistantCategory.from_label(value)
            if category is None:
                raise ValueError(f'Unknown assistant category: {value!r}')
            return category
        return value


class LogConfig(BaseModel):
    directory: str
    level: str = 'DEBUG'


class AppConfig(BaseModel):
    completion: CompletionConfig
    assistant: AssistantConfig
    log: LogConfig
    personas: dict[str, str] = Field(default_factory=dict)  # label → persona override
