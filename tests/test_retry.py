# SPDX-License-Identifier: Apache-2.0
"""Tests for retry classification and backoff."""

from __future__ import annotations

import asyncio
import random

import aiohttp
import pytest

from code_translator.core.models import ErrorKind
from code_translator.core.retry import (
    Fail,
    OutcomeKind,
    RetryAfter,
    RetryController,
    RetryPolicy,
    RetryState,
    TransportOutcome,
)


def _controller(**kwargs: float) -> RetryController:
    """Controller without jitter unless requested."""
    kwargs.setdefault("jitter_max", 0.0)
    return RetryController(RetryPolicy(**kwargs), rng=random.Random(0))


def _response(status: int, body: object = None, **headers: str) -> TransportOutcome:
    return TransportOutcome.from_response(status, "Reason", body, headers)


def _fresh() -> RetryState:
    return RetryState(attempts_remaining=1, total_attempts=1)


def _exhausted() -> RetryState:
    return RetryState(attempts_remaining=0, total_attempts=2)


class TestTransportOutcome:
    """Tests for TransportOutcome."""

    def test_ok_for_2xx(self) -> None:
        assert _response(200).ok
        assert _response(204).ok
        assert not _response(404).ok

    def test_timeout_errors(self) -> None:
        assert TransportOutcome.from_error(asyncio.TimeoutError()).kind is OutcomeKind.TIMEOUT
        assert (
            TransportOutcome.from_error(aiohttp.ServerTimeoutError("slow")).kind
            is OutcomeKind.TIMEOUT
        )

    def test_connection_errors(self) -> None:
        assert (
            TransportOutcome.from_error(aiohttp.ServerDisconnectedError()).kind
            is OutcomeKind.CONNECTION
        )
        assert (
            TransportOutcome.from_error(ConnectionResetError("reset")).kind
            is OutcomeKind.CONNECTION
        )

    def test_other_errors(self) -> None:
        outcome = TransportOutcome.from_error(RuntimeError("boom"))
        assert outcome.kind is OutcomeKind.ERROR
        assert outcome.reason == "boom"

    def test_server_message(self) -> None:
        assert _response(500, {"message": "overloaded"}).server_message == "overloaded"
        assert _response(500, {"message": ""}).server_message is None
        assert _response(500, ["not", "a", "dict"]).server_message is None


class TestBackoff:
    """Tests for delay computation."""

    def test_exponential_schedule(self) -> None:
        controller = _controller()
        assert controller.backoff_delay(0) == 1.0
        assert controller.backoff_delay(1) == 2.0
        assert controller.backoff_delay(2) == 4.0

    def test_capped_at_max_delay(self) -> None:
        controller = _controller()
        assert controller.backoff_delay(10) == 30.0

    def test_jitter_bounds(self) -> None:
        controller = RetryController(RetryPolicy(), rng=random.Random(42))
        for _ in range(50):
            delay = controller.backoff_delay(0)
            assert 1.0 <= delay <= 2.0

    def test_retry_after_header(self) -> None:
        controller = _controller()
        assert controller.retry_after_delay("2") == 2.0
        assert controller.retry_after_delay(None) == 5.0
        assert controller.retry_after_delay("soon") == 5.0
        assert controller.retry_after_delay("inf") == 5.0
        assert controller.retry_after_delay("1e309") == 5.0
        assert controller.retry_after_delay("nan") == 5.0


class TestClassify:
    """Tests for RetryController.classify in priority order."""

    def test_unsupported_never_retried(self) -> None:
        outcome = TransportOutcome(OutcomeKind.UNSUPPORTED, reason="nope")
        assert _controller().classify(outcome, _fresh()) == Fail(ErrorKind.UNSUPPORTED, "nope")

    def test_too_large_never_retried(self) -> None:
        outcome = TransportOutcome(OutcomeKind.TOO_LARGE, reason="big")
        decision = _controller().classify(outcome, _fresh())
        assert decision == Fail(ErrorKind.PAYLOAD_TOO_LARGE, "big")

    def test_timeout_retried_with_backoff(self) -> None:
        outcome = TransportOutcome.from_error(asyncio.TimeoutError())
        assert _controller().classify(outcome, _fresh()) == RetryAfter(1.0)

    def test_second_retry_doubles_delay(self) -> None:
        outcome = TransportOutcome.from_error(asyncio.TimeoutError())
        state = RetryState(attempts_remaining=1, total_attempts=2)
        assert _controller().classify(outcome, state) == RetryAfter(2.0)

    def test_gateway_timeout_retried(self) -> None:
        assert _controller().classify(_response(504), _fresh()) == RetryAfter(1.0)

    def test_timeout_exhausted(self) -> None:
        decision = _controller().classify(_response(504), _exhausted())
        assert isinstance(decision, Fail)
        assert decision.kind is ErrorKind.SERVICE_UNAVAILABLE

    def test_rate_limit_uses_retry_after(self) -> None:
        """The Retry-After hint overrides the exponential schedule."""
        outcome = _response(429, **{"Retry-After": "7"})
        assert _controller().classify(outcome, _fresh()) == RetryAfter(7.0)

    def test_rate_limit_default_wait(self) -> None:
        assert _controller().classify(_response(429), _fresh()) == RetryAfter(5.0)

    def test_rate_limit_infinite_hint_uses_default(self) -> None:
        outcome = _response(429, **{"Retry-After": "inf"})
        assert _controller().classify(outcome, _fresh()) == RetryAfter(5.0)

    def test_rate_limit_exhausted(self) -> None:
        decision = _controller().classify(_response(429), _exhausted())
        assert isinstance(decision, Fail)
        assert decision.kind is ErrorKind.RATE_LIMITED

    def test_server_payload_too_large(self) -> None:
        decision = _controller().classify(_response(413), _fresh())
        assert isinstance(decision, Fail)
        assert decision.kind is ErrorKind.PAYLOAD_TOO_LARGE

    def test_other_status_uses_server_message(self) -> None:
        decision = _controller().classify(_response(500, {"message": "boom"}), _fresh())
        assert decision == Fail(ErrorKind.SERVICE_ERROR, "Translation failed (500): boom")

    def test_other_status_falls_back_to_reason(self) -> None:
        decision = _controller().classify(_response(404), _fresh())
        assert decision == Fail(ErrorKind.SERVICE_ERROR, "Translation failed (404): Reason")

    def test_other_status_without_reason(self) -> None:
        outcome = TransportOutcome.from_response(400, None, None)
        decision = _controller().classify(outcome, _fresh())
        assert isinstance(decision, Fail)
        assert decision.detail.endswith("Request failed with status 400")

    def test_connection_error_retried(self) -> None:
        outcome = TransportOutcome.from_error(ConnectionResetError("reset"))
        assert _controller().classify(outcome, _fresh()) == RetryAfter(1.0)

    def test_connection_error_exhausted(self) -> None:
        outcome = TransportOutcome.from_error(aiohttp.ServerDisconnectedError())
        decision = _controller().classify(outcome, _exhausted())
        assert isinstance(decision, Fail)
        assert decision.kind is ErrorKind.CONNECTION_ERROR

    def test_unknown_error_never_retried(self) -> None:
        outcome = TransportOutcome.from_error(RuntimeError("weird"))
        decision = _controller().classify(outcome, _fresh())
        assert decision == Fail(ErrorKind.UNKNOWN_ERROR, "Translation failed: weird")

    def test_success_is_not_classified(self) -> None:
        with pytest.raises(ValueError):
            _controller().classify(_response(200), _fresh())


class TestRetryState:
    """Tests for RetryState."""

    def test_new_state_uses_policy_budget(self) -> None:
        state = RetryController(RetryPolicy(max_retries=3)).new_state()
        assert state.attempts_remaining == 3
        assert state.total_attempts == 0

    def test_consume_decrements_to_zero(self) -> None:
        state = RetryState(attempts_remaining=1)
        state.consume()
        assert state.attempts_remaining == 0
        with pytest.raises(ValueError):
            state.consume()
