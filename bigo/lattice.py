"""
Complexity lattice.

Nine growth-rate classes in a total order. The only way two classes are
merged is ``combine``, which keeps the worse one.
"""

from __future__ import annotations

from enum import Enum
from functools import reduce
from typing import Iterable


class ComplexityClass(str, Enum):
    """Asymptotic time complexity class; the value is its Big-O string."""

    CONSTANT = "O(1)"
    LOGARITHMIC = "O(log n)"
    LINEAR = "O(n)"
    LINEARITHMIC = "O(n log n)"
    QUADRATIC = "O(n²)"
    CUBIC = "O(n³)"
    POLYNOMIAL = "O(n^k)"
    EXPONENTIAL = "O(2ⁿ)"
    FACTORIAL = "O(n!)"

    @property
    def order(self) -> int:
        return _ORDER[self]

    @property
    def notation(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def rating(self) -> str:
        return _RATINGS[self]

    @property
    def color(self) -> str:
        """Hex badge color used by the HTML report."""
        return _COLORS[self]

    def __str__(self) -> str:
        return self.value


# Declaration order is growth order.
_ORDER = {cls: rank for rank, cls in enumerate(ComplexityClass)}

WORST_TO_BEST = tuple(sorted(ComplexityClass, key=lambda c: _ORDER[c], reverse=True))

_DESCRIPTIONS = {
    ComplexityClass.CONSTANT: "Constant time - excellent performance",
    ComplexityClass.LOGARITHMIC: "Logarithmic time - very good performance",
    ComplexityClass.LINEAR: "Linear time - good performance",
    ComplexityClass.LINEARITHMIC: "Linearithmic time - acceptable performance",
    ComplexityClass.QUADRATIC: "Quadratic time - poor performance for large inputs",
    ComplexityClass.CUBIC: "Cubic time - very poor performance",
    ComplexityClass.POLYNOMIAL: "Polynomial time - extremely poor performance",
    ComplexityClass.EXPONENTIAL: "Exponential time - unacceptable for large inputs",
    ComplexityClass.FACTORIAL: "Factorial time - only suitable for tiny inputs",
}

_RATINGS = {
    ComplexityClass.CONSTANT: "Excellent",
    ComplexityClass.LOGARITHMIC: "Excellent",
    ComplexityClass.LINEAR: "Good",
    ComplexityClass.LINEARITHMIC: "Good",
    ComplexityClass.QUADRATIC: "Fair",
    ComplexityClass.CUBIC: "Poor",
    ComplexityClass.POLYNOMIAL: "Poor",
    ComplexityClass.EXPONENTIAL: "Critical",
    ComplexityClass.FACTORIAL: "Critical",
}

_COLORS = {
    ComplexityClass.CONSTANT: "#28a745",
    ComplexityClass.LOGARITHMIC: "#20c997",
    ComplexityClass.LINEAR: "#ffc107",
    ComplexityClass.LINEARITHMIC: "#fd7e14",
    ComplexityClass.QUADRATIC: "#dc3545",
    ComplexityClass.CUBIC: "#6f42c1",
    ComplexityClass.POLYNOMIAL: "#e83e8c",
    ComplexityClass.EXPONENTIAL: "#343a40",
    ComplexityClass.FACTORIAL: "#000000",
}


def order(cls: ComplexityClass) -> int:
    """Rank of ``cls`` in the growth order (O(1) is 0, O(n!) is 8)."""
    return _ORDER[cls]


def combine(a: ComplexityClass, b: ComplexityClass) -> ComplexityClass:
    """Lattice join: the higher-growth of the two classes."""
    return a if _ORDER[a] >= _ORDER[b] else b


def combine_all(classes: Iterable[ComplexityClass]) -> ComplexityClass:
    return reduce(combine, classes, ComplexityClass.CONSTANT)
