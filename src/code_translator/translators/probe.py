# SPDX-License-Identifier: Apache-2.0
"""Header-only reachability probe used for diagnostics."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import aiohttp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a connectivity probe."""

    reachable: bool
    message: str
    status_code: int | None = None


class ConnectivityProbe:
    """Issue a HEAD request and describe what happened. Never raises."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    async def probe(self, session: aiohttp.ClientSession, url: str) -> ProbeResult:
        logger.debug("Testing connection to: %s", url)
        started = time.monotonic()
        try:
            async with session.head(
                url, timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as response:
                status = response.status
        except Exception as e:
            logger.debug("Connection test to %s failed: %r", url, e)
            return ProbeResult(
                reachable=False,
                message=f"Connection failed: {type(e).__name__}: {e}",
            )

        elapsed_ms = (time.monotonic() - started) * 1000
        if status < 400:
            message = f"Connection successful ({status} in {elapsed_ms:.0f}ms)"
        else:
            message = f"Connection returned {status} in {elapsed_ms:.0f}ms"
        return ProbeResult(reachable=status < 400, message=message, status_code=status)
