import logging

import pytest
from fastapi.testclient import TestClient

from bigo_service.config import settings
from bigo_service.main import app, resolve_language


@pytest.fixture
def client():
    return TestClient(app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_languages(client):
    response = client.get("/languages")
    assert response.json()["languages"] == [
        "javascript", "typescript", "python", "java", "c", "cpp", "rust",
    ]


def test_analyze(client, scenario_a):
    response = client.post("/analyze", json={"code": scenario_a, "language": "python"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["result"]["overall"] == "O(n²)"
    assert data["result"]["functions"][0]["name"] == "f"
    assert data["summary"]["rating"] == "Fair"
    assert data["summary"]["functionCount"] == 1


def test_analyze_detects_language_from_filename(client, scenario_c):
    response = client.post("/analyze", json={"code": scenario_c, "filename": "fib.py"})
    result = response.json()["result"]
    assert result["language"] == "python"
    assert result["overall"] == "O(2ⁿ)"


def test_analyze_rejects_empty_code(client):
    response = client.post("/analyze", json={"code": "", "language": "python"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_analyze_requires_code(client):
    response = client.post("/analyze", json={"language": "python"})
    assert response.status_code == 422


def test_export_csv(client, scenario_a):
    response = client.post("/export?format=csv", json={"code": scenario_a, "language": "python"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.startswith("Function,Complexity")


def test_export_markdown_includes_filename(client, scenario_b):
    response = client.post("/export?format=markdown", json={"code": scenario_b, "filename": "search.js"})
    assert "**File:** search.js" in response.text
    assert "O(log n)" in response.text


def test_resolve_language():
    assert resolve_language("Rust", "x.py") == "Rust"
    assert resolve_language("auto", "x.ts") == "typescript"
    assert resolve_language("auto", "untitled") == "generic"


def test_export_html(client, scenario_a):
    response = client.post("/export?format=html", json={"code": scenario_a, "filename": "loops.py"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "File: loops.py" in response.text


def test_export_rejects_unknown_format(client, scenario_a):
    response = client.post("/export?format=xml", json={"code": scenario_a})
    assert response.status_code == 422


def test_analyze_accepts_whitespace_only_code(client):
    response = client.post("/analyze", json={"code": "   \n", "language": "python"})
    assert response.status_code == 200
    assert response.json()["result"]["functions"][0]["name"] == "main"


def test_engine_loggers_follow_settings():
    assert logging.getLogger("bigo").level == getattr(logging, settings.ENGINE_LOG_LEVEL)
    assert logging.getLogger("bigo.extractor").getEffectiveLevel() == getattr(logging, settings.ENGINE_LOG_LEVEL)
