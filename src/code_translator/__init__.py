# SPDX-License-Identifier: Apache-2.0
"""Resilient client for the remote code translation service.

Usage:
    from code_translator import TranslationOrchestrator, TranslationRequest

    async with TranslationOrchestrator() as orchestrator:
        outcome = await orchestrator.translate(
            TranslationRequest("print(1)", "python", "javascript")
        )
        if outcome.ok:
            print(outcome.translated_text)
        else:
            print(outcome.kind, outcome.detail)
"""

from code_translator.core.languages import LanguagePair, LanguageRegistry
from code_translator.core.models import (
    ErrorKind,
    TranslationFailure,
    TranslationOutcome,
    TranslationRequest,
    TranslationSuccess,
)
from code_translator.pipeline.continuation import HealthDecision, HealthReport
from code_translator.pipeline.orchestrator import OrchestratorConfig, TranslationOrchestrator
from code_translator.translators.base import (
    ConfigurationError,
    TranslationError,
    TranslatorError,
)
from code_translator.translators.health import HealthMonitor, HealthState

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "HealthDecision",
    "HealthMonitor",
    "HealthReport",
    "HealthState",
    "LanguagePair",
    "LanguageRegistry",
    "OrchestratorConfig",
    "TranslationError",
    "TranslationFailure",
    "TranslationOrchestrator",
    "TranslationOutcome",
    "TranslationRequest",
    "TranslationSuccess",
    "TranslatorError",
]
