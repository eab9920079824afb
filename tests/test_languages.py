# SPDX-License-Identifier: Apache-2.0
"""Tests for the language-pair registry and language helpers."""

from __future__ import annotations

import pytest

from code_translator.core.languages import (
    SUPPORTED_LANGUAGE_PAIRS,
    LanguagePair,
    LanguageRegistry,
    display_name,
    language_from_filename,
)


class TestLanguageRegistry:
    """Tests for LanguageRegistry."""

    def test_supported_pair_is_admissible(self) -> None:
        """Listed pairs should be admissible."""
        registry = LanguageRegistry()
        assert registry.is_admissible(LanguagePair("python", "javascript"))
        assert registry.is_admissible(LanguagePair("java", "cobol"))
        assert registry.is_admissible(LanguagePair("flask", "express"))

    def test_unlisted_pair_is_not_admissible(self) -> None:
        """Pairs are not inferred transitively."""
        registry = LanguageRegistry()
        # python -> java and java -> cobol exist, python -> cobol does not
        assert not registry.is_admissible(LanguagePair("python", "cobol"))

    def test_comparison_is_case_sensitive(self) -> None:
        """Tags must match exactly."""
        registry = LanguageRegistry()
        assert not registry.is_admissible(LanguagePair("Python", "javascript"))
        assert not registry.is_admissible(LanguagePair("python", "JavaScript"))

    def test_same_language_is_not_admissible(self) -> None:
        """Identity pairs are not in the table."""
        registry = LanguageRegistry()
        assert not registry.is_admissible(LanguagePair("python", "python"))

    def test_targets_for_python(self) -> None:
        """targets_for should return every configured target."""
        registry = LanguageRegistry()
        assert registry.targets_for("python") == {
            "javascript", "java", "typescript", "c++", "c#", "ruby",
            "go", "php", "perl", "fortran", "pascal",
        }

    def test_targets_for_unknown_source_is_empty(self) -> None:
        """Unknown sources yield an empty set, not an error."""
        registry = LanguageRegistry()
        assert registry.targets_for("elixir") == set()

    def test_custom_pairs(self) -> None:
        """A registry can be built from a custom table."""
        registry = LanguageRegistry(frozenset({LanguagePair("a", "b")}))
        assert registry.is_admissible(LanguagePair("a", "b"))
        assert not registry.is_admissible(LanguagePair("b", "a"))
        assert registry.sources() == {"a"}

    def test_duplicates_collapse(self) -> None:
        """The pair table is a set."""
        assert len(SUPPORTED_LANGUAGE_PAIRS) == len(set(SUPPORTED_LANGUAGE_PAIRS))
        assert LanguagePair("python", "go") == LanguagePair("python", "go")


class TestDisplayName:
    """Tests for display_name."""

    def test_known_tag(self) -> None:
        assert display_name("c++") == "C++"
        assert display_name("flask") == "Flask (Python)"

    def test_lookup_ignores_case(self) -> None:
        """Display lookup is more permissive than admission."""
        assert display_name("PYTHON") == "Python"

    def test_unknown_tag_is_capitalized(self) -> None:
        assert display_name("elixir") == "Elixir"

    def test_empty_tag(self) -> None:
        assert display_name("") == ""


class TestLanguageFromFilename:
    """Tests for language_from_filename."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("src/main.py", "python"),
            ("component.tsx", "tsx"),
            ("App.JSX", "jsx"),
            ("engine.cpp", "c++"),
            ("Program.cs", "c#"),
            ("PAYROLL.CBL", "cobol"),
            ("solver.f90", "fortran"),
            ("Widget.vue", "vue"),
        ],
    )
    def test_extensions(self, filename: str, expected: str) -> None:
        assert language_from_filename(filename) == expected

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("project/manage.py", "django"),
            ("pom.xml", "spring"),
            ("build.gradle.kts", "spring"),
            ("package.json", "express"),
            ("requirements.txt", "flask"),
        ],
    )
    def test_framework_files_win(self, filename: str, expected: str) -> None:
        """Framework marker files take precedence over extensions."""
        assert language_from_filename(filename) == expected

    def test_unknown(self) -> None:
        assert language_from_filename("notes.txt") is None
        assert language_from_filename("Makefile") is None
