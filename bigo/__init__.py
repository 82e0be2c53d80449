"""Heuristic Big-O complexity analysis."""

from .lattice import ComplexityClass, combine, order
from .models import AnalysisReport, FunctionReport, FunctionSpan
from .languages import LanguageFamily, language_from_filename, list_supported_languages
from .extractor import extract
from .analyzer import ComplexityAnalyzer, InputRejectedError, analyze
from .export import export_report

__all__ = [
    "ComplexityClass",
    "combine",
    "order",
    "AnalysisReport",
    "FunctionReport",
    "FunctionSpan",
    "LanguageFamily",
    "language_from_filename",
    "list_supported_languages",
    "extract",
    "ComplexityAnalyzer",
    "InputRejectedError",
    "analyze",
    "export_report",
]
