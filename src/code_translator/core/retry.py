# SPDX-License-Identifier: Apache-2.0
"""Retry classification and backoff schedule.

Every non-successful attempt is described by a ``TransportOutcome`` and
classified into either ``RetryAfter(delay)`` or ``Fail(kind)``. The
controller is pure apart from its random source, which can be injected.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

import aiohttp

from code_translator.core.models import ErrorKind

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """What happened to one request attempt."""

    UNSUPPORTED = "unsupported"  # rejected before sending
    TOO_LARGE = "too_large"  # rejected before sending
    RESPONSE = "response"  # an HTTP response arrived
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    ERROR = "error"


@dataclass(frozen=True)
class TransportOutcome:
    """Result of a single attempt, before classification.

    Attributes:
        kind: Outcome category.
        status: HTTP status code for ``RESPONSE`` outcomes.
        reason: HTTP reason phrase or error description.
        body: Decoded JSON body, if any.
        retry_after: Raw ``Retry-After`` header value, if any.
        error: The exception raised by the transport, if any.
    """

    kind: OutcomeKind
    status: int | None = None
    reason: str = ""
    body: Any = None
    retry_after: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return (
            self.kind is OutcomeKind.RESPONSE
            and self.status is not None
            and 200 <= self.status < 300
        )

    @property
    def server_message(self) -> str | None:
        if isinstance(self.body, Mapping):
            message = self.body.get("message")
            if isinstance(message, str) and message:
                return message
        return None

    @classmethod
    def from_response(
        cls,
        status: int,
        reason: str | None,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> TransportOutcome:
        retry_after = headers.get("Retry-After") if headers is not None else None
        return cls(
            OutcomeKind.RESPONSE,
            status=status,
            reason=reason or "",
            body=body,
            retry_after=retry_after,
        )

    @classmethod
    def from_error(cls, error: BaseException) -> TransportOutcome:
        """Categorize an exception raised while sending a request."""
        # aiohttp's timeout errors also subclass ClientError; check them first
        if isinstance(error, asyncio.TimeoutError):
            kind = OutcomeKind.TIMEOUT
        elif isinstance(error, (aiohttp.ClientConnectionError, ConnectionError)):
            kind = OutcomeKind.CONNECTION
        else:
            kind = OutcomeKind.ERROR
        return cls(kind, reason=str(error) or type(error).__name__, error=error)


@dataclass(frozen=True)
class RetryAfter:
    """Wait ``delay`` seconds, then try again."""

    delay: float


@dataclass(frozen=True)
class Fail:
    """Stop and report ``kind``."""

    kind: ErrorKind
    detail: str


RetryDecision = Union[RetryAfter, Fail]


@dataclass
class RetryState:
    """Retry budget of a single translate call."""

    attempts_remaining: int
    total_attempts: int = 0

    @property
    def retry_number(self) -> int:
        """Zero-based index of the next retry."""
        return max(0, self.total_attempts - 1)

    def consume(self) -> None:
        if self.attempts_remaining <= 0:
            raise ValueError("Retry budget already exhausted")
        self.attempts_remaining -= 1


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters, in seconds."""

    max_retries: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter_max: float = 1.0
    default_retry_after: float = 5.0


class RetryController:
    """Classify attempt outcomes into retry-or-fail decisions."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._policy = policy or RetryPolicy()
        self._rng = rng or random.Random()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def new_state(self) -> RetryState:
        return RetryState(attempts_remaining=self._policy.max_retries)

    def backoff_delay(self, retry_number: int) -> float:
        """Exponential delay for the given zero-based retry, plus jitter."""
        policy = self._policy
        delay = min(policy.base_delay * (2**retry_number), policy.max_delay)
        return delay + self._rng.uniform(0, policy.jitter_max)

    def retry_after_delay(self, header: str | None) -> float:
        """Delay requested by a 429 response's ``Retry-After`` header."""
        if header is None:
            return self._policy.default_retry_after
        try:
            seconds = float(header.strip())
        except ValueError:
            return self._policy.default_retry_after
        if not math.isfinite(seconds):
            return self._policy.default_retry_after
        return max(0.0, seconds)

    def classify(self, outcome: TransportOutcome, state: RetryState) -> RetryDecision:
        """Decide what to do after an unsuccessful attempt.

        Args:
            outcome: The attempt outcome. Successful responses are not
                classified.
            state: Retry budget of the current call.

        Returns:
            RetryAfter or Fail.
        """
        if outcome.ok:
            raise ValueError("Successful outcomes are not classified")

        kind = outcome.kind
        if kind is OutcomeKind.UNSUPPORTED:
            return Fail(ErrorKind.UNSUPPORTED, outcome.reason)
        if kind is OutcomeKind.TOO_LARGE:
            return Fail(ErrorKind.PAYLOAD_TOO_LARGE, outcome.reason)

        status = outcome.status
        if kind is OutcomeKind.TIMEOUT or status == 504:
            if state.attempts_remaining > 0:
                return RetryAfter(self.backoff_delay(state.retry_number))
            return Fail(
                ErrorKind.SERVICE_UNAVAILABLE,
                "Translation service is currently unavailable. The request timed out.",
            )

        if status == 429:
            if state.attempts_remaining > 0:
                return RetryAfter(self.retry_after_delay(outcome.retry_after))
            return Fail(
                ErrorKind.RATE_LIMITED,
                "Translation service rate limit exceeded. Please try again later.",
            )

        if status == 413:
            return Fail(
                ErrorKind.PAYLOAD_TOO_LARGE,
                "The code is too large to translate. Please reduce the size and try again.",
            )

        if kind is OutcomeKind.RESPONSE and status is not None:
            message = (
                outcome.server_message
                or outcome.reason
                or f"Request failed with status {status}"
            )
            return Fail(ErrorKind.SERVICE_ERROR, f"Translation failed ({status}): {message}")

        if kind is OutcomeKind.CONNECTION:
            if state.attempts_remaining > 0:
                return RetryAfter(self.backoff_delay(state.retry_number))
            return Fail(
                ErrorKind.CONNECTION_ERROR,
                f"Could not reach the translation service: {outcome.reason}",
            )

        return Fail(ErrorKind.UNKNOWN_ERROR, f"Translation failed: {outcome.reason}")
