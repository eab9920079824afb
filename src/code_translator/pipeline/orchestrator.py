# SPDX-License-Identifier: Apache-2.0
"""Translation orchestrator.

Composes admission checks, the health gate, the HTTP transport, retry
classification, and response normalization into one ``translate`` call
that always returns a ``TranslationOutcome``.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from code_translator.core.languages import LanguageRegistry
from code_translator.core.models import (
    ErrorKind,
    TranslationFailure,
    TranslationOutcome,
    TranslationRequest,
)
from code_translator.core.normalizer import normalize
from code_translator.core.retry import (
    Fail,
    RetryController,
    RetryPolicy,
    TransportOutcome,
)
from code_translator.pipeline.continuation import (
    HealthContinuation,
    HealthDecision,
    HealthReport,
)
from code_translator.pipeline.diagnostics import collect_network_diagnostics
from code_translator.pipeline.progress import ProgressCallback
from code_translator.translators.base import ConfigurationError, TranslationTransport
from code_translator.translators.health import HealthMonitor
from code_translator.translators.probe import ConnectivityProbe
from code_translator.translators.remote import RemoteTranslator

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class OrchestratorConfig:
    """Translation client configuration. Durations are in seconds."""

    endpoint: str = RemoteTranslator.DEFAULT_API_URL
    preserve_comments: bool = True

    timeout: float = 10.0
    health_timeout: float = 10.0
    health_cache_window: float = 5 * 60.0

    max_retries: int = 1
    max_code_length: int = 10_000

    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter_max: float = 1.0
    default_retry_after: float = 5.0

    # "Check again" answers allowed before the health gate gives up
    max_health_rechecks: int = 3

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            jitter_max=self.jitter_max,
            default_retry_after=self.default_retry_after,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> OrchestratorConfig:
        """Build a config from ``CODE_TRANSLATOR_*`` environment variables.

        Keyword overrides that are not None take precedence.

        Raises:
            ConfigurationError: If a variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        endpoint = env.get("CODE_TRANSLATOR_ENDPOINT")
        if endpoint:
            values["endpoint"] = endpoint
        if "CODE_TRANSLATOR_TIMEOUT" in env:
            values["timeout"] = _parse(env, "CODE_TRANSLATOR_TIMEOUT", float)
        if "CODE_TRANSLATOR_MAX_RETRIES" in env:
            values["max_retries"] = _parse(env, "CODE_TRANSLATOR_MAX_RETRIES", int)
        if "CODE_TRANSLATOR_PRESERVE_COMMENTS" in env:
            values["preserve_comments"] = _parse_bool(
                env, "CODE_TRANSLATOR_PRESERVE_COMMENTS"
            )

        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigurationError on out-of-range values."""
        if not self.endpoint.strip():
            raise ConfigurationError("Translation endpoint URL is required")
        for name in ("timeout", "health_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must not be negative")
        if self.max_code_length <= 0:
            raise ConfigurationError("max_code_length must be positive")
        for name in (
            "base_delay",
            "max_delay",
            "jitter_max",
            "default_retry_after",
            "health_cache_window",
            "max_health_rechecks",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")


def _parse(env: Mapping[str, str], name: str, convert: Callable[[str], Any]) -> Any:
    try:
        return convert(env[name])
    except ValueError:
        raise ConfigurationError(f"Invalid value for {name}: {env[name]!r}") from None


def _parse_bool(env: Mapping[str, str], name: str) -> bool:
    value = env[name].strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid value for {name}: {env[name]!r}")


class TranslationOrchestrator:
    """Resilient entry point for code translation.

    Collaborators are injectable so the whole flow runs headlessly in
    tests: a fake transport, a pre-seeded health monitor, a fixed
    continuation answer, and a recording ``sleep``.
    """

    def __init__(
        self,
        config: OrchestratorConfig | None = None,
        health_monitor: HealthMonitor | None = None,
        transport: TranslationTransport | None = None,
        *,
        registry: LanguageRegistry | None = None,
        probe: ConnectivityProbe | None = None,
        retry_controller: RetryController | None = None,
        continuation: HealthContinuation | None = None,
        progress_callback: ProgressCallback | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = config or OrchestratorConfig()
        self._health = health_monitor or HealthMonitor(
            cache_window=self._config.health_cache_window,
            timeout=self._config.health_timeout,
        )
        self._transport: TranslationTransport = transport or RemoteTranslator(
            self._config.endpoint, timeout=self._config.timeout
        )
        self._registry = registry or LanguageRegistry()
        self._probe = probe or ConnectivityProbe(timeout=self._config.health_timeout)
        self._retry = retry_controller or RetryController(self._config.retry_policy)
        self._continuation = continuation
        self._progress_callback = progress_callback
        self._sleep = sleep

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    async def __aenter__(self) -> TranslationOrchestrator:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    async def translate_code(
        self,
        code: str,
        source_lang: str,
        target_lang: str,
        preserve_comments: bool | None = None,
    ) -> TranslationOutcome:
        """Shortcut building the request from plain arguments."""
        if preserve_comments is None:
            preserve_comments = self._config.preserve_comments
        return await self.translate(
            TranslationRequest(code, source_lang, target_lang, preserve_comments)
        )

    async def translate(self, request: TranslationRequest) -> TranslationOutcome:
        """Translate code via the remote service.

        Args:
            request: What to translate.

        Returns:
            TranslationSuccess with normalized code, or TranslationFailure.
            Cancelling the calling task aborts the in-flight request or
            backoff wait and schedules no further attempts.
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Network diagnostics: %s", collect_network_diagnostics())
        logger.debug(
            "Translation request: %s -> %s, %d chars, preserve_comments=%s",
            request.from_lang,
            request.to_lang,
            len(request.source_text),
            request.preserve_comments,
        )

        rejected = self._admission_check(request)
        if rejected is not None:
            return self._fail(rejected)

        aborted = await self._health_gate()
        if aborted is not None:
            return aborted

        return await self._request_loop(request)

    def _admission_check(self, request: TranslationRequest) -> Fail | None:
        if not self._registry.is_admissible(request.pair):
            return Fail(
                ErrorKind.UNSUPPORTED,
                (
                    f"Translation from {request.from_lang} to {request.to_lang} "
                    "is not currently supported."
                ),
            )

        limit = self._config.max_code_length
        length = len(request.source_text)
        if length > limit:
            return Fail(
                ErrorKind.PAYLOAD_TOO_LARGE,
                (
                    f"The code is too large ({length} characters). Please try "
                    f"with a smaller piece of code (under {limit} characters)."
                ),
            )
        return None

    async def _health_gate(self) -> TranslationFailure | None:
        session = await self._transport.get_session()
        endpoint = self._transport.endpoint
        rechecks = 0

        while True:
            health = await self._health.check_health(session, endpoint)
            self._notify("health", 1, 1, health.message)
            if health.is_healthy:
                return None

            probe_result = await self._probe.probe(session, endpoint)
            report = HealthReport(health=health, probe=probe_result)
            logger.warning("Connection test result: %s", probe_result.message)

            decision = HealthDecision.ABORT
            if self._continuation is not None:
                decision = await self._continuation(report)

            if decision is HealthDecision.RECHECK:
                if rechecks < self._config.max_health_rechecks:
                    rechecks += 1
                    self._health.invalidate()
                    continue
                logger.warning("Health recheck limit reached, aborting")
                decision = HealthDecision.ABORT

            if decision is HealthDecision.PROCEED:
                logger.info("Proceeding with translation despite failed health check")
                return None

            return TranslationFailure(
                ErrorKind.ABORTED,
                f"Translation aborted.\n{report.describe()}",
            )

    async def _request_loop(self, request: TranslationRequest) -> TranslationOutcome:
        state = self._retry.new_state()
        total = state.attempts_remaining + 1

        while True:
            state.total_attempts += 1
            self._notify("request", state.total_attempts, total)
            outcome = await self._transport.send(request)

            if outcome.ok:
                return self._finish(outcome)

            decision = self._retry.classify(outcome, state)
            if isinstance(decision, Fail):
                return self._fail(decision)

            state.consume()
            logger.warning(
                "Translation attempt %d/%d failed (%s), retrying in %.1fs",
                state.total_attempts,
                total,
                outcome.reason or outcome.status,
                decision.delay,
            )
            self._notify("retry", state.total_attempts, total, f"{decision.delay:.1f}s")
            await self._sleep(decision.delay)

    def _finish(self, outcome: TransportOutcome) -> TranslationOutcome:
        body = outcome.body
        translated = body.get("translated_code") if isinstance(body, Mapping) else None
        if not isinstance(translated, str):
            return self._fail(
                Fail(
                    ErrorKind.SERVICE_ERROR,
                    "Invalid response format from translation service: "
                    "missing translated_code",
                )
            )

        self._notify("normalize", 1, 1)
        result = normalize(translated)
        if isinstance(result, TranslationFailure):
            logger.warning("Translation failed: %s", result.detail)
        return result

    def _fail(self, decision: Fail) -> TranslationFailure:
        logger.warning("Translation failed (%s): %s", decision.kind.value, decision.detail)
        return TranslationFailure(decision.kind, decision.detail)

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)
