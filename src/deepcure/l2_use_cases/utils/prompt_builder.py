"""Pure functions for building LLM message lists and cleaning responses."""

from __future__ import annotations

import re
from collections.abc import Mapping

from deepcure.l1_entities.assistant_category import AssistantCategory
from deepcure.l1_entities.chat_message import ChatMessage
from deepcure.l1_entities.persona import DISCLAIMER_DIRECTIVE, SIMPLIFY_PERSONA, persona_for

_EMPHASIS_RE = re.compile(r'\*\*|\*')


def build_guidance_messages(
    query: str,
    category: AssistantCategory | str | None,
    personas: Mapping[str, str] | None = None,
) -> list[ChatMessage]:
    """Build [persona, disclaimer, user query] for a guidance request."""
    return [
        ChatMessage(role='system', content=persona_for(category, personas)),
        ChatMessage(role='system', content=DISCLAIMER_DIRECTIVE),
        ChatMessage(role='user', content=query.strip()),
    ]


def build_simplify_prompt(text: str) -> str:
    """Build the user prompt asking for a patient-friendly version of medical text."""
    return (
        'The following is a medical transcription. Please translate it into simple, patient-friendly language:\n'
        '\n'
        f'{text.strip()}\n'
        '\n'
        'Please explain medical terms in plain English and organize the information in a clear format.'
    )


def build_simplify_messages(text: str) -> list[ChatMessage]:
    """Build [simplification persona, user prompt] for a simplification request."""
    return [
        ChatMessage(role='system', content=SIMPLIFY_PERSONA),
        ChatMessage(role='user', content=build_simplify_prompt(text)),
    ]


def strip_markdown(text: str) -> str:
    """Remove bold/italic emphasis markers (`**`, `*`)."""
    return _EMPHASIS_RE.sub('', text)
