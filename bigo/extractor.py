"""
Function extraction.

Splits raw source text into function spans with per-family line heuristics.
No tokenizer or grammar is involved: Python-like code is segmented by
indentation, everything else by brace balance.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple, Optional

from .languages import LanguageFamily, family_for
from .models import FunctionSpan

logger = logging.getLogger(__name__)

MAX_SCAN_LINES = 10_000
FALLBACK_SPAN_LINES = 1_000
MAX_NAME_LENGTH = 100

_PY_DEF = re.compile(r"^(?:async\s+)?def\s+")

_IDENTIFIER = re.compile(r"^[A-Za-z_$~][\w$~]*(?:::[A-Za-z_$~][\w$~]*)*$")
_CONTROL_KEYWORDS = frozenset({"if", "while", "for", "switch", "catch", "function", "synchronized"})
_LEADING_KEYWORDS = frozenset({
    # control flow
    "if", "else", "while", "for", "do", "loop", "match", "switch", "try", "catch",
    # statements that call rather than declare
    "return", "throw", "new", "await", "yield", "delete", "case",
})

# Right-hand side must begin with the arrow's own parameters
_ARROW_ASSIGNMENT = re.compile(
    r"^(?:(?:export\s+)?(?:const|let|var)\s+)?([A-Za-z_$][\w$]*)\s*(?::[^=]+)?"
    r"=\s*(?:async\s+)?(?:\([^)]*\)(?:\s*:[^=]+)?|[A-Za-z_$][\w$]*)\s*=>"
)
_METHOD_SHORTHAND = re.compile(
    r"^([A-Za-z_$][\w$]*)\s*:\s*(?:async\s+)?"
    r"(?:function\b|\([^)]*\)\s*=>|[A-Za-z_$][\w$]*\s*=>)"
)


class Extraction(NamedTuple):
    spans: list[FunctionSpan]
    detected: bool
    truncated: bool


def _valid_name(name: str) -> bool:
    return bool(name) and len(name) < MAX_NAME_LENGTH


def python_function_name(stripped: str) -> Optional[str]:
    """Name between ``def`` and ``(``, or None when it cannot be read."""
    match = _PY_DEF.match(stripped)
    if not match:
        return None
    rest = stripped[match.end():]
    paren = rest.find("(")
    if paren == -1:
        return None
    name = rest[:paren].strip()
    return name if _valid_name(name) else None


def brace_function_name(stripped: str) -> Optional[str]:
    """
    Name of a C-style function declared on this line, if any.

    The line must contain ``(`` and either ``{`` or a trailing ``;``. The
    last word before the first ``(`` is the name. Lines led by a control-flow
    keyword (with or without parentheses around the condition), assignments,
    match arms and statement lines (``return f(x);``) are rejected, and a
    ``;``-terminated line also needs a return type in front of the name so
    that plain calls are not mistaken for prototypes.
    """
    stripped = stripped.lstrip("}").lstrip()
    if "(" not in stripped or "=>" in stripped:
        return None
    has_body = "{" in stripped
    if not has_body and not stripped.endswith(";"):
        return None

    prefix = stripped.split("(", 1)[0]
    if "=" in prefix:
        return None
    words = prefix.split()
    if not words:
        return None
    name = words[-1]
    if name in _CONTROL_KEYWORDS or words[0] in _LEADING_KEYWORDS:
        return None
    if not has_body and len(words) < 2:
        return None
    if not _IDENTIFIER.match(name) or not _valid_name(name):
        return None
    return name


def script_function_name(stripped: str) -> Optional[str]:
    """Brace-style declaration, named arrow assignment or object method shorthand."""
    name = brace_function_name(stripped)
    if name is not None:
        return name
    for pattern in (_ARROW_ASSIGNMENT, _METHOD_SHORTHAND):
        match = pattern.match(stripped)
        if match and _valid_name(match.group(1)):
            return match.group(1)
    return None


def text_after_parameters(stripped: str) -> str:
    """
    Body text of a one-line function: whatever follows its parameter list.

    Parameters are the first balanced ``(...)`` group, or everything up to
    ``=>`` for a bare single-parameter arrow (``x => x + 1``).
    """
    open_idx = stripped.find("(")
    arrow_idx = stripped.find("=>")
    if arrow_idx != -1 and (open_idx == -1 or arrow_idx < open_idx):
        return stripped[arrow_idx + 2:]
    if open_idx == -1:
        return ""

    depth = 0
    for i in range(open_idx, len(stripped)):
        if stripped[i] == "(":
            depth += 1
        elif stripped[i] == ")":
            depth -= 1
            if depth == 0:
                return stripped[i + 1:]
    return ""


def _unwrap_body(text: str) -> str:
    body = text.strip()
    if body.startswith("=>"):
        body = body[2:].strip()
    if body.startswith("{"):
        body = body[1:]
        closing = body.rstrip(" ;,")
        if closing.endswith("}"):
            body = closing[:-1]
    return body.strip()


def _one_line_span(name: str, stripped: str, line_no: int) -> FunctionSpan:
    body = _unwrap_body(text_after_parameters(stripped))
    if not body.strip(" ;"):
        # Prototype or declaration without a body
        return FunctionSpan(name=name, start_line=line_no + 1, end_line=line_no)
    return FunctionSpan(name=name, start_line=line_no, end_line=line_no, inline_body=body)


def _extract_indented(lines: list[str]) -> list[FunctionSpan]:
    spans: list[FunctionSpan] = []
    current: Optional[tuple[str, int, int]] = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue

        indent = len(line) - len(line.lstrip())
        is_def = _PY_DEF.match(stripped) is not None

        if current is not None and (is_def or indent <= current[2]):
            name, start, _ = current
            # i is 0-based, so it is the 1-based number of the previous line
            spans.append(FunctionSpan(name=name, start_line=start, end_line=i))
            current = None

        if is_def:
            name = python_function_name(stripped)
            if name is not None:
                current = (name, i + 2, indent)

    if current is not None:
        name, start, _ = current
        spans.append(FunctionSpan(name=name, start_line=start, end_line=len(lines)))

    return spans


def _extract_braced(lines: list[str], opener: Callable[[str], Optional[str]]) -> list[FunctionSpan]:
    spans: list[FunctionSpan] = []
    current: Optional[tuple[str, int]] = None
    balance = 0

    for i, line in enumerate(lines):
        delta = line.count("{") - line.count("}")
        name = opener(line.strip())

        if name is not None:
            if current is not None:
                spans.append(FunctionSpan(name=current[0], start_line=current[1], end_line=i))
                current = None
            balance = delta
            if balance <= 0:
                spans.append(_one_line_span(name, line.strip(), i + 1))
            else:
                current = (name, i + 2)
        elif current is not None:
            balance += delta
            if balance <= 0:
                spans.append(FunctionSpan(name=current[0], start_line=current[1], end_line=i + 1))
                current = None

    if current is not None:
        spans.append(FunctionSpan(name=current[0], start_line=current[1], end_line=len(lines)))

    return spans


_EXTRACTORS: dict[LanguageFamily, Callable[[list[str]], list[FunctionSpan]]] = {
    LanguageFamily.INDENTATION: _extract_indented,
    LanguageFamily.BRACE: lambda lines: _extract_braced(lines, brace_function_name),
    LanguageFamily.SCRIPT: lambda lines: _extract_braced(lines, script_function_name),
    LanguageFamily.GENERIC: lambda lines: _extract_braced(lines, brace_function_name),
}


def extract_spans(source: str, language: str) -> Extraction:
    """
    Segment ``source`` into function spans.

    Args:
        source: Raw source text
        language: Language tag (any case; unknown tags use brace rules)

    Returns:
        Extraction whose ``spans`` is never empty. ``detected`` is False when
        no function was recognized and the whole input became one ``main``
        span; ``truncated`` is True when the input was too long to scan.
    """
    lines = source.splitlines()

    if len(lines) > MAX_SCAN_LINES:
        logger.warning(
            f"Input has {len(lines)} lines; analyzing only the first {FALLBACK_SPAN_LINES}"
        )
        span = FunctionSpan(name="main", start_line=1, end_line=min(len(lines), FALLBACK_SPAN_LINES))
        return Extraction(spans=[span], detected=True, truncated=True)

    family = family_for(language)
    spans = _EXTRACTORS[family](lines)
    logger.debug(f"Extracted {len(spans)} function(s) using {family.value} rules")

    if not spans:
        return Extraction(
            spans=[FunctionSpan(name="main", start_line=1, end_line=len(lines))],
            detected=False,
            truncated=False,
        )
    return Extraction(spans=spans, detected=True, truncated=False)


def extract(source: str, language: str) -> list[FunctionSpan]:
    """Function spans in ``source``; falls back to a single ``main`` span."""
    return extract_spans(source, language).spans
