# SPDX-License-Identifier: Apache-2.0
"""Supported language pairs, display names, and file-name detection.

The pair table is a flat enumeration. Reverse directions are listed
explicitly rather than derived, so supporting a new pair is a data change.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class LanguagePair:
    """An ordered (source, target) language combination."""

    source: str
    target: str


def _pairs(*items: tuple[str, str]) -> frozenset[LanguagePair]:
    return frozenset(LanguagePair(source, target) for source, target in items)


SUPPORTED_LANGUAGE_PAIRS: frozenset[LanguagePair] = _pairs(
    # Python
    ("python", "javascript"), ("javascript", "python"),
    ("python", "java"), ("java", "python"),
    ("python", "typescript"), ("typescript", "python"),
    ("python", "c++"), ("c++", "python"),
    ("python", "c#"), ("c#", "python"),
    ("python", "ruby"), ("ruby", "python"),
    ("python", "go"), ("go", "python"),
    ("python", "php"), ("php", "python"),
    ("python", "perl"), ("perl", "python"),
    ("python", "fortran"), ("fortran", "python"),
    ("python", "pascal"), ("pascal", "python"),
    # JavaScript / TypeScript
    ("javascript", "java"), ("java", "javascript"),
    ("javascript", "typescript"), ("typescript", "javascript"),
    ("javascript", "c++"), ("c++", "javascript"),
    ("javascript", "c#"), ("c#", "javascript"),
    ("javascript", "dart"), ("dart", "javascript"),
    ("javascript", "html"), ("html", "javascript"),
    ("javascript", "php"), ("php", "javascript"),
    # PHP
    ("php", "typescript"), ("typescript", "php"),
    # Java
    ("java", "c++"), ("c++", "java"),
    ("java", "c#"), ("c#", "java"),
    ("java", "go"), ("go", "java"),
    ("java", "kotlin"), ("kotlin", "java"),
    ("java", "scala"), ("scala", "java"),
    ("java", "cobol"), ("cobol", "java"),
    # C / C++
    ("c++", "c"), ("c", "c++"),
    ("c++", "rust"), ("rust", "c++"),
    ("c++", "c#"), ("c#", "c++"),
    # Web
    ("css", "scss"), ("scss", "css"),
    ("typescript", "dart"), ("dart", "typescript"),
    # Systems
    ("rust", "go"), ("go", "rust"),
    # Frameworks
    ("flask", "express"), ("express", "flask"),
    ("django", "spring"), ("spring", "django"),
    ("vue", "react"), ("react", "vue"),
    ("jsx", "tsx"), ("tsx", "jsx"),
    ("vue", "svelte"), ("svelte", "vue"),
    ("angular", "react"), ("react", "angular"),
    # Newer languages
    ("swift", "kotlin"), ("kotlin", "swift"),
)

DISPLAY_NAMES: dict[str, str] = {
    "python": "Python",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "java": "Java",
    "c#": "C#",
    "c++": "C++",
    "c": "C",
    "go": "Go",
    "rust": "Rust",
    "ruby": "Ruby",
    "php": "PHP",
    "perl": "Perl",
    "swift": "Swift",
    "kotlin": "Kotlin",
    "scala": "Scala",
    "dart": "Dart",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "cobol": "COBOL",
    "fortran": "Fortran",
    "pascal": "Pascal",
    "flask": "Flask (Python)",
    "express": "Express.js",
    "django": "Django (Python)",
    "spring": "Spring Boot (Java)",
    "vue": "Vue.js",
    "react": "React",
    "angular": "Angular",
    "svelte": "Svelte",
    "jsx": "React (JSX)",
    "tsx": "React (TSX)",
}

# Checked before extensions, matched as a case-insensitive name suffix
FRAMEWORK_FILES: dict[str, str] = {
    "pom.xml": "spring",
    "build.gradle": "spring",
    "build.gradle.kts": "spring",
    "application.properties": "spring",
    "application.yml": "spring",
    "application.yaml": "spring",
    "requirements.txt": "flask",
    "app.py": "flask",
    "manage.py": "django",
    "urls.py": "django",
    "settings.py": "django",
    "package.json": "express",
    "server.js": "express",
    "app.js": "express",
}

EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".java": "java",
    ".kt": "kotlin",
    ".scala": "scala",
    ".c": "c",
    ".h": "c",
    ".cpp": "c++",
    ".hpp": "c++",
    ".cc": "c++",
    ".cs": "c#",
    ".go": "go",
    ".rb": "ruby",
    ".php": "php",
    ".pl": "perl",
    ".pm": "perl",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".scss": "scss",
    ".swift": "swift",
    ".dart": "dart",
    ".rs": "rust",
    ".vue": "vue",
    ".svelte": "svelte",
    ".cbl": "cobol",
    ".cob": "cobol",
    ".f": "fortran",
    ".for": "fortran",
    ".f90": "fortran",
    ".pas": "pascal",
    ".pp": "pascal",
}


class LanguageRegistry:
    """Admission checks over a fixed set of language pairs.

    Tags are compared exactly (case-sensitive).
    """

    def __init__(self, pairs: frozenset[LanguagePair] | None = None) -> None:
        self._pairs = frozenset(pairs) if pairs is not None else SUPPORTED_LANGUAGE_PAIRS

    @property
    def pairs(self) -> frozenset[LanguagePair]:
        return self._pairs

    def is_admissible(self, pair: LanguagePair) -> bool:
        """Return True if the pair is in the registry."""
        return pair in self._pairs

    def targets_for(self, source: str) -> set[str]:
        """Return every target reachable from ``source`` (may be empty)."""
        return {pair.target for pair in self._pairs if pair.source == source}

    def sources(self) -> set[str]:
        return {pair.source for pair in self._pairs}


def display_name(tag: str) -> str:
    """Human-readable name for a language tag.

    Lookup ignores case; unknown tags are returned capitalized.
    """
    name = DISPLAY_NAMES.get(tag) or DISPLAY_NAMES.get(tag.lower())
    if name is not None:
        return name
    return tag[:1].upper() + tag[1:]


def language_from_filename(filename: str) -> str | None:
    """Guess the language tag of a file from its name.

    Framework marker files (``manage.py``, ``pom.xml``, ...) win over the
    plain extension table.

    Args:
        filename: File name or path.

    Returns:
        Language tag, or None if the name is not recognized.
    """
    lowered = filename.lower()
    for marker, tag in FRAMEWORK_FILES.items():
        if lowered.endswith(marker):
            return tag

    suffix = PurePath(lowered).suffix
    if not suffix:
        return None
    return EXTENSION_TO_LANGUAGE.get(suffix)
