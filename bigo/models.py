"""
Data models for complexity analysis.

Pydantic models for function spans and the reports produced from them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .lattice import ComplexityClass, WORST_TO_BEST


class FunctionSpan(BaseModel):
    """
    One candidate function in the source text.

    Line numbers are 1-based and inclusive; a span whose start is past its
    end has no body. A function written on a single line carries its body
    text in ``inline_body`` and points both line numbers at that line. The
    detector fields are scratch state filled in while the span is analyzed.
    """

    name: str = Field(default="main", description="Function name or placeholder")
    start_line: int = Field(..., description="First body line (1-based)")
    end_line: int = Field(..., description="Last body line (inclusive)")
    inline_body: Optional[str] = Field(default=None, description="Body text of a one-line function")

    loop_depth: int = 0
    recursive_calls: int = 0
    has_binary_search: bool = False
    has_sorting: bool = False
    has_dynamic_programming: bool = False


class FunctionReport(BaseModel):
    """Complexity estimate for a single function."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Function name")
    complexity: ComplexityClass = Field(..., description="Big-O class")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Heuristic confidence")
    rationale: list[str] = Field(default_factory=list, description="Signals that fired, in order")
    line_start: int = Field(..., description="First line of the analyzed range")
    line_end: int = Field(..., description="Last line of the analyzed range")


class AnalysisReport(BaseModel):
    """
    Result of one ``analyze`` call.

    ``overall`` is the join of every function's class. ``warnings`` lists
    degraded-mode behavior; an empty list means the full analysis ran.
    """

    model_config = ConfigDict(frozen=True)

    overall: ComplexityClass = Field(default=ComplexityClass.CONSTANT)
    functions: list[FunctionReport] = Field(default_factory=list)
    language: str = Field(..., description="Language tag as supplied by the caller")
    warnings: list[str] = Field(default_factory=list)

    @property
    def average_confidence(self) -> float:
        if not self.functions:
            return 0.0
        return sum(f.confidence for f in self.functions) / len(self.functions)

    @property
    def distribution(self) -> dict[ComplexityClass, int]:
        """Function count per class, worst class first."""
        counts = {cls: 0 for cls in WORST_TO_BEST}
        for func in self.functions:
            counts[func.complexity] += 1
        return {cls: n for cls, n in counts.items() if n}
