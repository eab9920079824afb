# SPDX-License-Identifier: Apache-2.0
"""Request and outcome types shared by the translation client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from code_translator.core.languages import LanguagePair


class ErrorKind(str, Enum):
    """Classified failure reported to the caller."""

    UNSUPPORTED = "unsupported"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    SERVICE_UNAVAILABLE = "service_unavailable"
    RATE_LIMITED = "rate_limited"
    SERVICE_ERROR = "service_error"
    CONNECTION_ERROR = "connection_error"
    EMPTY_PAYLOAD = "empty_payload"
    UNKNOWN_ERROR = "unknown_error"
    ABORTED = "aborted"


@dataclass(frozen=True)
class TranslationRequest:
    """A single code translation request.

    Attributes:
        source_text: Code to translate.
        from_lang: Source language tag.
        to_lang: Target language tag.
        preserve_comments: Ask the service to keep comments.
    """

    source_text: str
    from_lang: str
    to_lang: str
    preserve_comments: bool = True

    @property
    def pair(self) -> LanguagePair:
        return LanguagePair(self.from_lang, self.to_lang)

    def to_payload(self) -> dict[str, Any]:
        """JSON body expected by the translate endpoint."""
        return {
            "source_code": self.source_text,
            "from_lang": self.from_lang,
            "to_lang": self.to_lang,
            "preserve_comments": self.preserve_comments,
        }


@dataclass(frozen=True)
class TranslationSuccess:
    """Normalized translated code."""

    translated_text: str

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.translated_text


@dataclass(frozen=True)
class TranslationFailure:
    """A classified failure with a message suitable for display."""

    kind: ErrorKind
    detail: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        """Raise the failure as a TranslationError."""
        from code_translator.translators.base import TranslationError

        raise TranslationError(self.kind, self.detail)


TranslationOutcome = Union[TranslationSuccess, TranslationFailure]
