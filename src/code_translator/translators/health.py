# SPDX-License-Identifier: Apache-2.0
"""Cached health checks against the translation service."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable

import aiohttp

logger = logging.getLogger(__name__)

_TRANSLATE_SUFFIX = re.compile(r"/translate\Z")


@dataclass(frozen=True)
class HealthState:
    """Last known service health.

    Attributes:
        is_healthy: Result of the last check (optimistic before any check).
        last_checked_at: Clock reading of the last real check, or None.
        message: Short description of the last check result.
    """

    is_healthy: bool = True
    last_checked_at: float | None = None
    message: str = "Not checked yet"


def health_url(endpoint: str) -> str:
    """Derive the health URL by replacing a trailing ``/translate``."""
    return _TRANSLATE_SUFFIX.sub("/health", endpoint)


class HealthMonitor:
    """Process-wide service health with a caching window.

    A check younger than ``cache_window`` is returned without any network
    call. Failed checks are cached for the same window.
    """

    DEFAULT_CACHE_WINDOW = 5 * 60.0
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        cache_window: float = DEFAULT_CACHE_WINDOW,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        state: HealthState | None = None,
    ) -> None:
        self._cache_window = cache_window
        self._timeout = timeout
        self._clock = clock
        self._state = state or HealthState()

    @property
    def state(self) -> HealthState:
        return self._state

    def is_fresh(self, now: float | None = None) -> bool:
        last = self._state.last_checked_at
        if last is None:
            return False
        now = self._clock() if now is None else now
        return now - last < self._cache_window

    def invalidate(self) -> None:
        """Force the next ``check_health`` call to hit the network."""
        self._state = HealthState(
            is_healthy=self._state.is_healthy,
            last_checked_at=None,
            message=self._state.message,
        )

    async def check_health(
        self,
        session: aiohttp.ClientSession,
        endpoint: str,
    ) -> HealthState:
        """Return the cached state or perform a fresh health check.

        Args:
            session: HTTP session to use.
            endpoint: Translate endpoint URL; the health URL is derived.

        Returns:
            Current health state. Never raises for network errors.
        """
        now = self._clock()
        if self.is_fresh(now):
            return self._state

        url = health_url(endpoint)
        logger.debug("Checking API health at: %s", url)
        try:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
            ) as response:
                healthy = response.status == 200
                message = (
                    "API is healthy"
                    if healthy
                    else f"API returned status {response.status}"
                )
        except Exception as e:
            healthy = False
            message = f"Connection failed: {type(e).__name__}: {e}"

        if healthy:
            logger.info("Translation service health check passed")
        else:
            logger.warning("API health check failed: %s", message)

        self._record(healthy, message, now)
        return self._state

    def _record(self, healthy: bool, message: str, now: float) -> None:
        last = self._state.last_checked_at
        checked_at = now if last is None else max(last, now)
        self._state = HealthState(
            is_healthy=healthy, last_checked_at=checked_at, message=message
        )
