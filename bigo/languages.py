"""
Language profiles for complexity analysis.

Maps a caller-supplied language tag onto one of a closed set of language
families and the builtin-call table used for that language.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional

from .lattice import ComplexityClass


class LanguageFamily(str, Enum):
    """Extraction/detection strategy selected for a language tag."""

    INDENTATION = "indentation"
    BRACE = "brace"
    SCRIPT = "script"
    GENERIC = "generic"


SUPPORTED_LANGUAGES = (
    "javascript",
    "typescript",
    "python",
    "java",
    "c",
    "cpp",
    "rust",
)

# Alias -> canonical tag
_ALIASES = {
    "python": "python",
    "py": "python",
    "javascript": "javascript",
    "js": "javascript",
    "typescript": "typescript",
    "ts": "typescript",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "c++": "cpp",
    "rust": "rust",
    "rs": "rust",
}

_FAMILIES = {
    "python": LanguageFamily.INDENTATION,
    "javascript": LanguageFamily.SCRIPT,
    "typescript": LanguageFamily.SCRIPT,
    "java": LanguageFamily.BRACE,
    "c": LanguageFamily.BRACE,
    "cpp": LanguageFamily.BRACE,
    "rust": LanguageFamily.BRACE,
}

BuiltinTable = tuple[tuple[str, ComplexityClass], ...]

_SCRIPT_BUILTINS: BuiltinTable = (
    ("sort", ComplexityClass.LINEARITHMIC),
    ("indexOf", ComplexityClass.LINEAR),
    ("includes", ComplexityClass.LINEAR),
    ("find", ComplexityClass.LINEAR),
    ("filter", ComplexityClass.LINEAR),
    ("map", ComplexityClass.LINEAR),
    ("reduce", ComplexityClass.LINEAR),
)

_PYTHON_BUILTINS: BuiltinTable = (
    ("sorted", ComplexityClass.LINEARITHMIC),
    ("sort", ComplexityClass.LINEARITHMIC),
    ("max", ComplexityClass.LINEAR),
    ("min", ComplexityClass.LINEAR),
    ("sum", ComplexityClass.LINEAR),
)

_JAVA_BUILTINS: BuiltinTable = (
    ("Arrays.sort", ComplexityClass.LINEARITHMIC),
    ("Collections.sort", ComplexityClass.LINEARITHMIC),
)

_BUILTINS = {
    "python": _PYTHON_BUILTINS,
    "javascript": _SCRIPT_BUILTINS,
    "typescript": _SCRIPT_BUILTINS,
    "java": _JAVA_BUILTINS,
}

_EXTENSIONS = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".rs": "rust",
}


def canonical_language(language: str) -> Optional[str]:
    """
    Resolve a language tag to its canonical supported name.

    Matching is case-insensitive and accepts common aliases
    (``py``, ``js``, ``ts``, ``c++``, ``rs``).

    Returns:
        Canonical tag, or None for an unrecognized language
    """
    return _ALIASES.get((language or "").strip().lower())


def family_for(language: str) -> LanguageFamily:
    canonical = canonical_language(language)
    if canonical is None:
        return LanguageFamily.GENERIC
    return _FAMILIES[canonical]


def builtin_table(language: str) -> BuiltinTable:
    """Builtin-call complexity table for a language; empty when unknown."""
    canonical = canonical_language(language)
    return _BUILTINS.get(canonical, ()) if canonical else ()


def list_supported_languages() -> list[str]:
    """Languages that have a dedicated extraction/detection profile."""
    return list(SUPPORTED_LANGUAGES)


def language_from_filename(filename: str) -> Optional[str]:
    """
    Guess the language tag from a file name's extension.

    Args:
        filename: File name or path, e.g. ``"solver.py"``

    Returns:
        Supported language tag, or None if the extension is unknown
    """
    _, ext = os.path.splitext(filename or "")
    return _EXTENSIONS.get(ext.lower())
