# SPDX-License-Identifier: Apache-2.0
"""HTTP transport for the remote code translation service."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from code_translator.core.models import TranslationRequest
from code_translator.core.retry import TransportOutcome
from code_translator.translators.base import ConfigurationError

logger = logging.getLogger(__name__)


class RemoteTranslator:
    """Send translate requests to the service over HTTP.

    One POST per ``send`` call; retrying is up to the caller.

    Attributes:
        name: Backend identifier ("remote").
    """

    DEFAULT_API_URL = "https://translate.u16p.com/api/v1/translate"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize RemoteTranslator.

        Args:
            endpoint: Translate URL (default: public service endpoint).
            timeout: Per-attempt timeout in seconds.
            session: Existing session to use instead of creating one.

        Raises:
            ConfigurationError: If the endpoint is blank or the timeout is
                not positive.
        """
        endpoint = self.DEFAULT_API_URL if endpoint is None else endpoint.strip()
        if not endpoint:
            raise ConfigurationError("Translation endpoint URL is required")
        if timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {timeout}")

        self._endpoint = endpoint
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "remote"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def __aenter__(self) -> RemoteTranslator:
        """Enter async context manager."""
        await self.get_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def send(self, request: TranslationRequest) -> TransportOutcome:
        """POST one translate request.

        Args:
            request: The translation request.

        Returns:
            Outcome describing the response or the transport failure.
        """
        session = await self.get_session()
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        logger.debug(
            "POST %s (%s -> %s, %d chars)",
            self._endpoint,
            request.from_lang,
            request.to_lang,
            len(request.source_text),
        )
        try:
            async with session.post(
                self._endpoint,
                json=request.to_payload(),
                headers=headers,
                timeout=timeout,
            ) as response:
                body = await self._read_body(response)
                logger.debug("Translation response status: %d", response.status)
                return TransportOutcome.from_response(
                    response.status, response.reason, body, response.headers
                )
        except Exception as e:
            logger.debug("Translation request failed: %r", e)
            return TransportOutcome.from_error(e)

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        """Decode a JSON body, or None if the body is not JSON."""
        try:
            return await response.json(content_type=None)
        except ValueError:
            return None

    async def close(self) -> None:
        """Close the HTTP session if this translator created it."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None
