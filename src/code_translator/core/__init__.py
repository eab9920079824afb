# SPDX-License-Identifier: Apache-2.0
"""Pure building blocks: language registry, models, normalization, retry policy."""

from .languages import (
    LanguagePair,
    LanguageRegistry,
    display_name,
    language_from_filename,
)
from .models import (
    ErrorKind,
    TranslationFailure,
    TranslationOutcome,
    TranslationRequest,
    TranslationSuccess,
)
from .normalizer import normalize, strip_code_fence
from .retry import (
    Fail,
    OutcomeKind,
    RetryAfter,
    RetryController,
    RetryPolicy,
    RetryState,
    TransportOutcome,
)

__all__ = [
    "ErrorKind",
    "Fail",
    "LanguagePair",
    "LanguageRegistry",
    "OutcomeKind",
    "RetryAfter",
    "RetryController",
    "RetryPolicy",
    "RetryState",
    "TranslationFailure",
    "TranslationOutcome",
    "TranslationRequest",
    "TranslationSuccess",
    "TransportOutcome",
    "display_name",
    "language_from_filename",
    "normalize",
    "strip_code_fence",
]
