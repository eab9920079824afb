# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for the translation orchestrator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    Stages: "health", "request", "retry", "normalize".
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
