"""
Core Code Complexity Analyzer.

Heuristic Big-O estimation: extracts function spans from raw text, runs the
signal detectors over each span and folds the signals into a complexity
class, a confidence score and a rationale trail.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import detectors
from .aggregator import (
    NO_FUNCTIONS_WARNING,
    TOO_LARGE_WARNING,
    TRUNCATED_WARNING,
    build_report,
    degraded_report,
)
from .extractor import extract_spans
from .languages import BuiltinTable, LanguageFamily, builtin_table, family_for
from .lattice import ComplexityClass, combine
from .models import AnalysisReport, FunctionReport, FunctionSpan

logger = logging.getLogger(__name__)

MAX_SOURCE_LENGTH = 500_000
SOFT_SOURCE_LENGTH = 100_000

DEFAULT_CONFIDENCE = 0.9


class InputRejectedError(ValueError):
    """Source text that cannot be analyzed at all (empty or over the hard limit)."""

    def __init__(self, message: str, length: Optional[int] = None):
        self.message = message
        self.length = length
        super().__init__(message)


def validate_source(source: str, max_length: int = MAX_SOURCE_LENGTH) -> None:
    """
    Reject input before any analysis happens.

    Raises:
        InputRejectedError: If the text is empty or longer than ``max_length``
    """
    if not source:
        raise InputRejectedError("Empty code provided", length=len(source or ""))
    if len(source) > max_length:
        raise InputRejectedError(
            f"Code too large to analyze ({len(source)} > {max_length} chars)",
            length=len(source),
        )


class ComplexityAnalyzer:
    """
    Heuristic complexity analyzer bound to one language.

    The builtin table and language family are chosen once at construction;
    ``analyze`` keeps no state between calls.
    """

    def __init__(self, language: str):
        self.language = language
        self.family: LanguageFamily = family_for(language)
        self.builtins: BuiltinTable = builtin_table(language)

    def analyze(self, source: str) -> AnalysisReport:
        """
        Analyze every function in ``source``.

        Oversized input degrades to a constant-class report with a warning
        instead of failing.
        """
        if len(source) > SOFT_SOURCE_LENGTH:
            logger.warning(f"Skipping analysis of {len(source)} chars (soft limit {SOFT_SOURCE_LENGTH})")
            return degraded_report(self.language, TOO_LARGE_WARNING)

        extraction = extract_spans(source, self.language)
        warnings: list[str] = []
        if not extraction.detected:
            warnings.append(NO_FUNCTIONS_WARNING)
        if extraction.truncated:
            warnings.append(TRUNCATED_WARNING)

        lines = source.splitlines()
        reports = [self.analyze_function(span, lines) for span in extraction.spans]

        return build_report(self.language, reports, warnings)

    def analyze_function(self, span: FunctionSpan, lines: list[str]) -> FunctionReport:
        """
        Classify one function span.

        Steps run in a fixed order; later steps may override (binary search),
        cap (dynamic programming) or set (factorial) the confidence left by
        earlier ones.

        Args:
            span: Span to analyze; its detector fields are filled in
            lines: All source lines

        Returns:
            FunctionReport for the span
        """
        complexity = ComplexityClass.CONSTANT
        confidence = DEFAULT_CONFIDENCE
        rationale: list[str] = []

        if span.inline_body is not None:
            body = span.inline_body
        else:
            start_idx = max(span.start_line - 1, 0)
            end_idx = min(span.end_line, len(lines))
            if start_idx >= len(lines) or start_idx >= end_idx:
                rationale.append("Unable to analyze function body")
                return self._report(span, complexity, confidence, rationale)
            body = "\n".join(lines[start_idx:end_idx])

        for name, builtin_complexity in self.builtins:
            if name in body:
                complexity = combine(complexity, builtin_complexity)
                rationale.append(f"Built-in function '{name}' detected")

        span.loop_depth = detectors.loop_depth(body, self.family)
        span.recursive_calls = detectors.count_recursive_calls(body, span.name)
        span.has_binary_search = detectors.detect_binary_search(body)
        span.has_sorting = detectors.detect_sorting(body)
        span.has_dynamic_programming = detectors.detect_dynamic_programming(body)

        depth = span.loop_depth
        if depth == 0:
            if span.recursive_calls == 0:
                rationale.append("No loops or recursion detected")
        elif depth == 1:
            complexity = combine(complexity, ComplexityClass.LINEAR)
            rationale.append("Single loop detected")
            if span.has_binary_search:
                complexity = ComplexityClass.LOGARITHMIC
                confidence = 0.9
                rationale.append("Binary search pattern overrides linear complexity")
        elif depth == 2:
            complexity = combine(complexity, ComplexityClass.QUADRATIC)
            confidence = 0.85
            rationale.append("Nested loops detected (depth: 2)")
        elif depth == 3:
            complexity = combine(complexity, ComplexityClass.CUBIC)
            confidence = 0.85
            rationale.append("Triple nested loops detected (depth: 3)")
        else:
            complexity = combine(complexity, ComplexityClass.POLYNOMIAL)
            confidence = 0.7
            rationale.append(f"Deeply nested loops detected (depth: {depth})")

        if span.recursive_calls > 0:
            if detectors.is_tail_recursive(body, span.name):
                complexity = combine(complexity, ComplexityClass.LINEAR)
                confidence = 0.8
                rationale.append("Tail recursion detected")
            elif detectors.is_divide_and_conquer(body):
                complexity = combine(complexity, ComplexityClass.LINEARITHMIC)
                confidence = 0.85
                rationale.append("Divide and conquer recursion detected")
            elif span.recursive_calls > 1:
                complexity = combine(complexity, ComplexityClass.EXPONENTIAL)
                if detectors.is_fibonacci_like(body, span.name):
                    confidence = 0.9
                    rationale.append("Exponential recursion (fibonacci-like) detected")
                else:
                    confidence = 0.7
                    rationale.append("Multiple recursive calls detected")
            else:
                complexity = combine(complexity, ComplexityClass.LINEAR)
                confidence = 0.7
                rationale.append("Simple recursion detected")

        if span.has_dynamic_programming:
            rationale.append("Dynamic programming pattern detected - may reduce complexity")
            confidence = min(confidence, 0.6)

        if span.has_sorting:
            complexity = combine(complexity, ComplexityClass.LINEARITHMIC)
            rationale.append("Sorting operation detected")

        if detectors.detect_factorial(body):
            complexity = combine(complexity, ComplexityClass.FACTORIAL)
            confidence = 0.8
            rationale.append("Factorial complexity pattern detected")

        logger.debug(f"{span.name} (lines {span.start_line}-{span.end_line}): {complexity.value} @ {confidence}")
        return self._report(span, complexity, confidence, rationale)

    @staticmethod
    def _report(
        span: FunctionSpan,
        complexity: ComplexityClass,
        confidence: float,
        rationale: list[str],
    ) -> FunctionReport:
        return FunctionReport(
            name=span.name,
            complexity=complexity,
            confidence=confidence,
            rationale=rationale,
            line_start=span.start_line,
            line_end=span.end_line,
        )


def analyze(source: str, language: str) -> AnalysisReport:
    """
    Estimate the time complexity of every function in ``source``.

    Args:
        source: Source code text
        language: Language tag, matched case-insensitively

    Returns:
        AnalysisReport for the whole input

    Raises:
        InputRejectedError: If ``source`` is empty or over the hard size limit
    """
    validate_source(source)
    logger.debug(f"Analyzing {language} code ({len(source)} chars)")
    return ComplexityAnalyzer(language).analyze(source)
