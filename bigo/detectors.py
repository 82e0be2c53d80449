"""
Signal detectors.

Pure predicates and counters over one function body (its source lines joined
with newlines). Matching is textual: idiom detectors use plain substring
tests and accept false positives such as ``sort`` inside an unrelated
identifier.
"""

from __future__ import annotations

import re
from typing import Callable

from .languages import LanguageFamily

MAX_LOOP_SCAN_LINES = 1000
MAX_LOOP_DEPTH = 10
MAX_RECURSIVE_CALLS = 100
MAX_RECURSION_NAME_LENGTH = 50
TAIL_SCAN_LINES = 10

_HALVING = re.compile(r"/\s*2\b|>>\s*1\b|\bdiv\s+2\b")
_N_MINUS_1_TOKENS = ("n-1", "n - 1")
_N_MINUS_2_TOKENS = ("n-2", "n - 2")

_MID_TOKENS = ("mid", "middle")
_LOWER_BOUND_TOKENS = ("left", "low", "start")
_UPPER_BOUND_TOKENS = ("right", "high", "end")

SORTING_PATTERNS = (
    "sort(",
    ".sort(",
    "sorted(",
    "quicksort",
    "mergesort",
    "arrays.sort",
    "collections.sort",
)

DP_PATTERNS = (
    "memo",
    "cache",
    "dp[",
    "table[",
    "@lru_cache",
    "@cache",
)


def _is_comment_or_blank(stripped: str) -> bool:
    return not stripped or stripped.startswith(("//", "#"))


def _indentation_loop_start(stripped: str) -> bool:
    return stripped.startswith(("for ", "while ", "async for "))


def _brace_loop_start(stripped: str) -> bool:
    return (
        stripped.startswith(("for ", "for(", "while ", "while("))
        or "for (" in stripped
        or "while (" in stripped
    )


_LOOP_START: dict[LanguageFamily, Callable[[str], bool]] = {
    LanguageFamily.INDENTATION: _indentation_loop_start,
    LanguageFamily.BRACE: _brace_loop_start,
    LanguageFamily.SCRIPT: _brace_loop_start,
    LanguageFamily.GENERIC: _brace_loop_start,
}


def is_loop_start(stripped: str, family: LanguageFamily) -> bool:
    return _LOOP_START[family](stripped)


def loop_depth(body: str, family: LanguageFamily) -> int:
    """
    Maximum loop nesting depth seen in ``body``.

    A loop start on a line is counted before that line closes anything.
    Brace languages close loops by counting ``}`` on each line. For
    indentation languages a non-comment line starting at column zero ends
    every open block, including a loop it opens itself.

    Args:
        body: Function body text
        family: Language family of the source

    Returns:
        Max nesting depth, capped at MAX_LOOP_DEPTH
    """
    max_depth = 0
    depth = 0

    for line in body.splitlines()[:MAX_LOOP_SCAN_LINES]:
        stripped = line.strip()
        if _is_comment_or_blank(stripped):
            continue

        if is_loop_start(stripped, family):
            depth += 1
            max_depth = max(max_depth, depth)

        if family is LanguageFamily.INDENTATION:
            if not line[0].isspace():
                depth = 0
        else:
            depth = max(0, depth - line.count("}"))

    return min(max_depth, MAX_LOOP_DEPTH)


def count_recursive_calls(body: str, name: str) -> int:
    """
    Occurrences of ``name(`` in ``body``, capped at MAX_RECURSIVE_CALLS.

    Plain substring count: ``binary_search(`` also counts as a call to
    ``search``.
    """
    if not name or len(name) > MAX_RECURSION_NAME_LENGTH:
        return 0
    return min(body.count(f"{name}("), MAX_RECURSIVE_CALLS)


def _has_any(body: str, tokens: tuple[str, ...]) -> bool:
    return any(token in body for token in tokens)


def has_halving(body: str) -> bool:
    return _HALVING.search(body) is not None


def detect_binary_search(body: str) -> bool:
    has_mid = any(token in body for token in _MID_TOKENS)
    has_bounds = any(token in body for token in _LOWER_BOUND_TOKENS) and any(
        token in body for token in _UPPER_BOUND_TOKENS
    )
    return has_mid and has_bounds and has_halving(body)


def detect_sorting(body: str) -> bool:
    lowered = body.lower()
    return any(pattern in lowered for pattern in SORTING_PATTERNS)


def detect_dynamic_programming(body: str) -> bool:
    lowered = body.lower()
    return any(pattern in lowered for pattern in DP_PATTERNS)


def detect_factorial(body: str) -> bool:
    if "factorial" in body:
        return True
    return "*" in body and _has_any(body, _N_MINUS_1_TOKENS)


def is_divide_and_conquer(body: str) -> bool:
    splits = "mid" in body or has_halving(body)
    merges = "merge" in body or "combine" in body
    return splits and merges


def is_tail_recursive(body: str, name: str) -> bool:
    """
    True when the last self-call in the final lines is a lone ``return`` call.

    Only the last TAIL_SCAN_LINES lines are inspected, newest first. The first
    line holding a self-call decides: it must start with ``return`` and make
    exactly one self-call (``return f(n-1) + f(n-2)`` is not a tail call).
    """
    if not name or len(name) > MAX_RECURSION_NAME_LENGTH:
        return False
    call = f"{name}("
    for line in reversed(body.splitlines()[-TAIL_SCAN_LINES:]):
        stripped = line.strip()
        calls = stripped.count(call)
        if calls:
            return stripped.startswith("return ") and calls == 1
    return False


def is_fibonacci_like(body: str, name: str) -> bool:
    return (
        count_recursive_calls(body, name) >= 2
        and _has_any(body, _N_MINUS_1_TOKENS)
        and _has_any(body, _N_MINUS_2_TOKENS)
    )
