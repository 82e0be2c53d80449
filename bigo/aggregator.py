"""
Whole-input aggregation.

Reduces per-function estimates to one overall class and assembles the final
report.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .lattice import ComplexityClass, WORST_TO_BEST
from .models import AnalysisReport, FunctionReport

NO_FUNCTIONS_WARNING = "no functions detected — analyzing entire input as one block"
TOO_LARGE_WARNING = "Code too large to analyze safely"
TRUNCATED_WARNING = "Input exceeds 10,000 lines; only the first 1,000 lines were analyzed"


def overall_complexity(reports: Sequence[FunctionReport]) -> ComplexityClass:
    """Worst class present among ``reports``; O(1) when there are none."""
    present = {report.complexity for report in reports}
    for cls in WORST_TO_BEST:
        if cls in present:
            return cls
    return ComplexityClass.CONSTANT


def build_report(
    language: str,
    functions: Sequence[FunctionReport],
    warnings: Iterable[str] = (),
) -> AnalysisReport:
    return AnalysisReport(
        overall=overall_complexity(functions),
        functions=list(functions),
        language=language,
        warnings=list(warnings),
    )


def degraded_report(language: str, warning: str) -> AnalysisReport:
    """Constant-class report with no per-function detail."""
    return AnalysisReport(
        overall=ComplexityClass.CONSTANT,
        functions=[],
        language=language,
        warnings=[warning],
    )
