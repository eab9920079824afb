# SPDX-License-Identifier: Apache-2.0
"""Caller decision hook for degraded service health."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Protocol, runtime_checkable

from code_translator.translators.health import HealthState
from code_translator.translators.probe import ProbeResult


class HealthDecision(str, Enum):
    PROCEED = "proceed"
    RECHECK = "recheck"
    ABORT = "abort"


@dataclass(frozen=True)
class HealthReport:
    """Diagnostics shown to the caller when the health check fails."""

    health: HealthState
    probe: ProbeResult

    def describe(self) -> str:
        return (
            "The translation service is currently unavailable.\n"
            f"Health Check: {self.health.message}\n"
            f"Connection Test: {self.probe.message}"
        )


@runtime_checkable
class HealthContinuation(Protocol):
    """Asked whether to continue after a failed health check."""

    def __call__(self, report: HealthReport) -> Awaitable[HealthDecision]: ...


def fixed_decision(decision: HealthDecision) -> HealthContinuation:
    """Continuation that always answers ``decision``."""

    async def answer(report: HealthReport) -> HealthDecision:
        return decision

    return answer
