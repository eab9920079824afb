# SPDX-License-Identifier: Apache-2.0
"""Translation orchestration package."""

from .continuation import HealthContinuation, HealthDecision, HealthReport, fixed_decision
from .diagnostics import collect_network_diagnostics, format_diagnostics
from .orchestrator import OrchestratorConfig, TranslationOrchestrator
from .progress import ProgressCallback

__all__ = [
    "HealthContinuation",
    "HealthDecision",
    "HealthReport",
    "OrchestratorConfig",
    "ProgressCallback",
    "TranslationOrchestrator",
    "collect_network_diagnostics",
    "fixed_decision",
    "format_diagnostics",
]
