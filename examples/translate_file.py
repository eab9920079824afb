#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Code translation sample script.

Shows the library API: build an orchestrator, translate one file, and
report either the translated code or the classified failure.

Usage:
    cd examples
    python translate_file.py

Environment variables (loaded from .env):
    CODE_TRANSLATOR_ENDPOINT: Translate endpoint URL (optional)
    CODE_TRANSLATOR_MAX_RETRIES: Retries after the first attempt (optional)
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

from code_translator import (
    HealthDecision,
    OrchestratorConfig,
    TranslationFailure,
    TranslationOrchestrator,
)
from code_translator.core.languages import display_name, language_from_filename
from code_translator.pipeline import fixed_decision

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings
# =============================================================================

INPUT_FILE = Path(__file__).parent / "sample.py"
TARGET_LANG = "javascript"

# Continue even if the health check fails
PROCEED_WHEN_UNHEALTHY = True


def on_progress(stage: str, current: int, total: int, message: str = "") -> None:
    suffix = f" ({message})" if message else ""
    print(f"[{stage}] {current}/{total}{suffix}")


async def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    if not INPUT_FILE.exists():
        INPUT_FILE.write_text("def greet(name):\n    print(f'Hello, {name}')\n")

    source_lang = language_from_filename(INPUT_FILE.name)
    if source_lang is None:
        print(f"Unknown language for {INPUT_FILE.name}")
        return 1

    decision = HealthDecision.PROCEED if PROCEED_WHEN_UNHEALTHY else HealthDecision.ABORT
    config = OrchestratorConfig.from_env()

    print(f"{display_name(source_lang)} -> {display_name(TARGET_LANG)}")
    async with TranslationOrchestrator(
        config,
        continuation=fixed_decision(decision),
        progress_callback=on_progress,
    ) as orchestrator:
        outcome = await orchestrator.translate_code(
            INPUT_FILE.read_text(encoding="utf-8"), source_lang, TARGET_LANG
        )

    if isinstance(outcome, TranslationFailure):
        print(f"Failed ({outcome.kind.value}): {outcome.detail}")
        return 1

    print(outcome.translated_text)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
