import json

import pytest

from bigo import analyze, export_report
from bigo.export import MEDIA_TYPES, to_csv, to_html, to_markdown


@pytest.fixture
def report(scenario_a):
    return analyze(scenario_a, "python")


def test_json_export(report):
    data = json.loads(export_report(report, "json"))
    assert data["overall"] == "O(n²)"
    assert data["language"] == "python"
    assert data["functions"][0]["name"] == "f"
    assert data["functions"][0]["confidence"] == 0.85


def test_csv_export(report):
    lines = to_csv(report).splitlines()
    assert lines[0] == "Function,Complexity,Confidence,Line Start,Line End,Description"
    assert lines[1] == "f,O(n²),0.85,2,4,Quadratic time - poor performance for large inputs"


def test_markdown_export(report):
    md = to_markdown(report, file_name="loops.py")
    assert md.startswith("# Algorithm Complexity Analysis Report")
    assert "**File:** loops.py" in md
    assert "- **Overall Complexity:** O(n²)" in md
    assert "- **Average Confidence:** 85.0%" in md
    assert "| O(n²) | 1 | 100.0% |" in md
    assert "### `f`" in md
    assert "  - Nested loops detected (depth: 2)" in md


def test_markdown_lists_warnings():
    md = export_report(analyze("x = 1\n", "python"), "markdown")
    assert "## Warnings" in md
    assert "no functions detected" in md


def test_unknown_format():
    with pytest.raises(ValueError):
        export_report(analyze("x = 1\n", "python"), "xml")


def test_html_export(report):
    page = to_html(report, file_name="loops.py")
    assert page.startswith("<!DOCTYPE html>")
    assert "Language: python | File: loops.py" in page
    assert 'style="background-color: #dc3545">O(n²)</span>' in page
    assert '<div class="value">85.0%</div>' in page
    assert "<td>1</td><td>100.0%</td>" in page
    assert "<td><code>f</code></td>" in page
    assert "<td>2-4</td>" in page
    assert "Nested loops detected (depth: 2)" in page
    assert MEDIA_TYPES["html"] == "text/html"


def test_html_export_escapes_and_reports_empty_input():
    page = export_report(analyze("x <= 1\n", "python"), "html", file_name="<a>.py")
    assert "File: &lt;a&gt;.py" in page
    assert "no functions detected" in page
    assert "<td><code>main</code></td>" in page


def test_html_export_without_functions():
    page = to_html(analyze("x" * 150_000, "python"))
    assert "No functions found for analysis" in page
    assert '<div class="value">0.0%</div>' in page
