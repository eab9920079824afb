# SPDX-License-Identifier: Apache-2.0
"""Tests for request and outcome models."""

from __future__ import annotations

import pytest

from code_translator.core.languages import LanguagePair
from code_translator.core.models import (
    ErrorKind,
    TranslationFailure,
    TranslationRequest,
    TranslationSuccess,
)
from code_translator.translators.base import (
    ConfigurationError,
    TranslationError,
    TranslatorError,
)


class TestTranslationRequest:
    """Tests for TranslationRequest."""

    def test_pair(self) -> None:
        request = TranslationRequest("x", "go", "rust")
        assert request.pair == LanguagePair("go", "rust")

    def test_payload(self) -> None:
        request = TranslationRequest("x = 1", "python", "go", preserve_comments=False)
        assert request.to_payload() == {
            "source_code": "x = 1",
            "from_lang": "python",
            "to_lang": "go",
            "preserve_comments": False,
        }

    def test_immutable(self) -> None:
        request = TranslationRequest("x", "go", "rust")
        with pytest.raises(AttributeError):
            request.source_text = "y"  # type: ignore[misc]


class TestOutcomes:
    """Tests for TranslationSuccess and TranslationFailure."""

    def test_success(self) -> None:
        outcome = TranslationSuccess("code")
        assert outcome.ok is True
        assert outcome.unwrap() == "code"

    def test_failure_unwrap_raises(self) -> None:
        outcome = TranslationFailure(ErrorKind.RATE_LIMITED, "slow down")
        assert outcome.ok is False
        with pytest.raises(TranslationError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.kind is ErrorKind.RATE_LIMITED
        assert str(exc_info.value) == "slow down"

    def test_error_kind_values(self) -> None:
        assert ErrorKind("unsupported") is ErrorKind.UNSUPPORTED
        assert ErrorKind.EMPTY_PAYLOAD.value == "empty_payload"


class TestExceptions:
    """Test exception hierarchy."""

    def test_translation_error_inherits_from_translator_error(self) -> None:
        assert issubclass(TranslationError, TranslatorError)

    def test_configuration_error_inherits_from_translator_error(self) -> None:
        assert issubclass(ConfigurationError, TranslatorError)

    def test_translator_error_inherits_from_exception(self) -> None:
        assert issubclass(TranslatorError, Exception)
