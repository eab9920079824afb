# SPDX-License-Identifier: Apache-2.0
"""Strip fenced code-block markup from translated payloads."""

from __future__ import annotations

import re

from code_translator.core.models import ErrorKind, TranslationFailure, TranslationSuccess

# One opening fence line (``` plus anything up to the first newline)
_LEADING_FENCE = re.compile(r"\A```[\s\S]*?\n")
# One closing fence at the very end of the payload
_TRAILING_FENCE = re.compile(r"\n```\Z")


def strip_code_fence(raw: str) -> str:
    """Remove one leading and one trailing fence, then trim whitespace."""
    text = _LEADING_FENCE.sub("", raw, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def normalize(raw: str) -> TranslationSuccess | TranslationFailure:
    """Normalize a raw ``translated_code`` value.

    Args:
        raw: Payload as returned by the service.

    Returns:
        TranslationSuccess with the bare code, or an ``EMPTY_PAYLOAD``
        failure if nothing remains after stripping.
    """
    text = strip_code_fence(raw)
    if not text:
        return TranslationFailure(
            ErrorKind.EMPTY_PAYLOAD,
            "Received empty translation from the server",
        )
    return TranslationSuccess(text)
