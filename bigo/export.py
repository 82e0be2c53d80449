"""
Report exporters.

Render an AnalysisReport as JSON, Markdown, CSV or HTML text.
"""

from __future__ import annotations

import csv
import io
from typing import Callable, Literal, Optional

import jinja2

from .lattice import ComplexityClass
from .models import AnalysisReport

ExportFormat = Literal["json", "markdown", "csv", "html"]


def to_json(report: AnalysisReport, indent: int = 2) -> str:
    return report.model_dump_json(indent=indent)


def to_markdown(report: AnalysisReport, file_name: Optional[str] = None) -> str:
    """
    Markdown report with a summary, warnings, the class distribution and
    one section per function.
    """
    out = ["# Algorithm Complexity Analysis Report", ""]
    out.append(f"**Language:** {report.language}")
    if file_name:
        out.append(f"**File:** {file_name}")
    out.append("")

    out += ["## Summary", ""]
    out.append(f"- **Overall Complexity:** {report.overall.value}")
    out.append(f"- **Functions Analyzed:** {len(report.functions)}")
    if report.functions:
        out.append(f"- **Average Confidence:** {report.average_confidence * 100:.1f}%")
    out.append("")

    if report.warnings:
        out += ["## Warnings", ""]
        out += [f"- {warning}" for warning in report.warnings]
        out.append("")

    if report.functions:
        total = len(report.functions)
        out += ["## Complexity Distribution", ""]
        out.append("| Complexity | Count | Percentage |")
        out.append("|------------|-------|------------|")
        for cls, count in report.distribution.items():
            out.append(f"| {cls.value} | {count} | {count / total * 100:.1f}% |")
        out.append("")

        out += ["## Function Analysis", ""]
        for func in report.functions:
            out.append(f"### `{func.name}`")
            out.append("")
            out.append(f"- **Complexity:** {func.complexity.value}")
            out.append(f"- **Confidence:** {func.confidence * 100:.1f}%")
            out.append(f"- **Lines:** {func.line_start} - {func.line_end}")
            out.append(f"- **Description:** {func.complexity.description}")
            if func.rationale:
                out.append("- **Analysis Details:**")
                out += [f"  - {detail}" for detail in func.rationale]
            out.append("")

    return "\n".join(out)


def to_csv(report: AnalysisReport) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Function", "Complexity", "Confidence", "Line Start", "Line End", "Description"])
    for func in report.functions:
        writer.writerow([
            func.name,
            func.complexity.value,
            func.confidence,
            func.line_start,
            func.line_end,
            func.complexity.description,
        ])
    return buffer.getvalue()


_HTML_ENV = jinja2.Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

_HTML_TEMPLATE = _HTML_ENV.from_string("""\
{% macro badge(notation, color) %}<span class="complexity-badge" style="background-color: {{ color }}">{{ notation }}</span>{% endmacro %}
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Algorithm Complexity Analysis Report</title>
<style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
           max-width: 1200px; margin: 0 auto; padding: 20px; line-height: 1.6; color: #333; }
    .header { border-bottom: 2px solid #e1e4e8; padding-bottom: 20px; margin-bottom: 30px; }
    .meta { margin-top: 10px; color: #586069; font-size: 14px; }
    .summary-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
                    gap: 20px; margin-bottom: 30px; }
    .summary-card { background: #f6f8fa; border: 1px solid #e1e4e8; border-radius: 8px;
                    padding: 20px; text-align: center; }
    .summary-card .value { font-size: 24px; font-weight: bold; margin: 10px 0; }
    .complexity-badge { display: inline-block; padding: 6px 12px; border-radius: 16px;
                        color: white; font-weight: bold; font-size: 14px; }
    .section { border: 1px solid #e1e4e8; border-radius: 8px; padding: 20px; margin-bottom: 30px; }
    .warnings { background: #fff3cd; border-color: #ffeaa7; color: #856404; }
    table { width: 100%; border-collapse: collapse; }
    th, td { padding: 12px; text-align: left; border-bottom: 1px solid #e1e4e8; }
    th { background: #f6f8fa; font-weight: 600; }
</style>
</head>
<body>
<div class="header">
<h1>Algorithm Complexity Analysis Report</h1>
<div class="meta">Language: {{ language }}{% if file_name %} | File: {{ file_name }}{% endif %}</div>
</div>
<div class="summary-grid">
<div class="summary-card"><h3>Overall Complexity</h3>
<div class="value">{{ badge(overall.notation, overall.color) }}</div>
<div>{{ overall.description }}</div></div>
<div class="summary-card"><h3>Functions Analyzed</h3>
<div class="value">{{ functions | length }}</div></div>
<div class="summary-card"><h3>Average Confidence</h3>
<div class="value">{{ average_confidence }}</div></div>
</div>
{% if warnings %}
<div class="section warnings"><h3>Warnings</h3>
<ul>
{% for warning in warnings %}
<li>{{ warning }}</li>
{% endfor %}
</ul>
</div>
{% endif %}
{% if functions %}
<div class="section"><h3>Complexity Distribution</h3>
<table>
<thead><tr><th>Complexity</th><th>Count</th><th>Percentage</th></tr></thead>
<tbody>
{% for row in distribution %}
<tr><td>{{ badge(row.notation, row.color) }}</td><td>{{ row.count }}</td><td>{{ row.percentage }}</td></tr>
{% endfor %}
</tbody>
</table>
</div>
<div class="section"><h3>Function Analysis Details</h3>
<table>
<thead><tr><th>Function</th><th>Complexity</th><th>Confidence</th><th>Lines</th><th>Details</th></tr></thead>
<tbody>
{% for func in functions %}
<tr><td><code>{{ func.name }}</code></td><td>{{ badge(func.notation, func.color) }}</td><td>{{ func.confidence }}</td><td>{{ func.line_start }}-{{ func.line_end }}</td><td>{{ func.details }}</td></tr>
{% endfor %}
</tbody>
</table>
</div>
{% else %}
<div class="section"><h3>No functions found for analysis</h3></div>
{% endif %}
</body>
</html>
""")


def _class_context(cls: ComplexityClass) -> dict[str, str]:
    return {"notation": cls.value, "color": cls.color, "description": cls.description}


def to_html(report: AnalysisReport, file_name: Optional[str] = None) -> str:
    """
    Standalone HTML page: header, summary cards, warnings, the class
    distribution and a table with one row per function.
    """
    total = len(report.functions)
    return _HTML_TEMPLATE.render(
        language=report.language,
        file_name=file_name,
        overall=_class_context(report.overall),
        average_confidence=f"{report.average_confidence * 100:.1f}%",
        warnings=report.warnings,
        distribution=[
            {**_class_context(cls), "count": count, "percentage": f"{count / total * 100:.1f}%"}
            for cls, count in report.distribution.items()
        ],
        functions=[
            {
                **_class_context(func.complexity),
                "name": func.name,
                "confidence": f"{func.confidence * 100:.1f}%",
                "line_start": func.line_start,
                "line_end": func.line_end,
                "details": "; ".join(func.rationale),
            }
            for func in report.functions
        ],
    )


_EXPORTERS: dict[str, Callable[[AnalysisReport, Optional[str]], str]] = {
    "json": lambda report, file_name: to_json(report),
    "markdown": to_markdown,
    "csv": lambda report, file_name: to_csv(report),
    "html": to_html,
}

MEDIA_TYPES = {
    "json": "application/json",
    "markdown": "text/markdown",
    "csv": "text/csv",
    "html": "text/html",
}


def export_report(report: AnalysisReport, fmt: ExportFormat, file_name: Optional[str] = None) -> str:
    """
    Render ``report`` in the requested format.

    Args:
        report: Report to render
        fmt: One of ``json``, ``markdown``, ``csv``, ``html``
        file_name: Source file name, shown in the Markdown and HTML headers

    Raises:
        ValueError: If ``fmt`` is not a known export format
    """
    try:
        exporter = _EXPORTERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported export format: {fmt}") from None
    return exporter(report, file_name)
