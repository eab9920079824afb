# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for the translation service transport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from code_translator.core.models import ErrorKind, TranslationRequest
from code_translator.core.retry import TransportOutcome

if TYPE_CHECKING:
    import aiohttp


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class TranslationError(TranslatorError):
    """A classified translation failure raised for callers that prefer exceptions."""

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class ConfigurationError(TranslatorError):
    """Configuration error (missing endpoint, invalid parameters, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


@runtime_checkable
class TranslationTransport(Protocol):
    """Protocol for sending one translate request to the service."""

    @property
    def endpoint(self) -> str:
        """Translate endpoint URL."""
        ...

    async def get_session(self) -> aiohttp.ClientSession:
        """Return the HTTP session shared with health checks and probes."""
        ...

    async def send(self, request: TranslationRequest) -> TransportOutcome:
        """Perform a single attempt.

        Transport and decoding failures are returned as outcomes, not
        raised. Cancellation propagates.
        """
        ...
