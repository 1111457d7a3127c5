"""Completion result entity — success text or a typed failure, never an exception."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorKind(enum.Enum):
    INVALID_ENDPOINT = 'invalid_endpoint'
    NO_RESPONSE_BODY = 'no_response_body'
    UNPARSEABLE_RESPONSE = 'unparseable_response'
    PROVIDER_ERROR = 'provider_error'
    TRANSPORT_ERROR = 'transport_error'


@dataclass(frozen=True)
class CompletionError:
    """Why a completion failed. `message` is set for provider errors, `cause` for transport errors."""

    kind: ErrorKind
    message: str = ''
    cause: BaseException | None = None

    def describe(self) -> str:
        """User-facing description of the failure."""
        if self.kind == ErrorKind.INVALID_ENDPOINT:
            return 'Invalid API URL'
        if self.kind == ErrorKind.NO_RESPONSE_BODY:
            return 'No data received from API'
        if self.kind == ErrorKind.UNPARSEABLE_RESPONSE:
            return 'Failed to parse API response'
        if self.kind == ErrorKind.PROVIDER_ERROR:
            return f'API Error: {self.message}'
        if self.cause is not None:
            return str(self.cause) or type(self.cause).__name__
        return self.message or 'Network error'


@dataclass(frozen=True)
class CompletionResult:
    """Result of one completion call: either `text` or `error`."""

    text: str | None = None
    error: CompletionError | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None

    @classmethod
    def success(cls, text: str) -> CompletionResult:
        return cls(text=text)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str = '',
        cause: BaseException | None = None,
    ) -> CompletionResult:
        return cls(error=CompletionError(kind=kind, message=message, cause=cause))
