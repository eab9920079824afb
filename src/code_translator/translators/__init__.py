# SPDX-License-Identifier: Apache-2.0
"""Network collaborators for the remote translation service.

Usage:
    from code_translator.translators import RemoteTranslator

    async with RemoteTranslator() as translator:
        outcome = await translator.send(request)
"""

from code_translator.translators.base import (
    ConfigurationError,
    TranslationError,
    TranslationTransport,
    TranslatorError,
)
from code_translator.translators.health import HealthMonitor, HealthState, health_url
from code_translator.translators.probe import ConnectivityProbe, ProbeResult
from code_translator.translators.remote import RemoteTranslator

__all__ = [
    # Protocol and exceptions
    "TranslationTransport",
    "TranslatorError",
    "TranslationError",
    "ConfigurationError",
    # Transport and health
    "RemoteTranslator",
    "HealthMonitor",
    "HealthState",
    "health_url",
    "ConnectivityProbe",
    "ProbeResult",
]
