import importlib.util
import io
import sys
import zipfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

API_MAIN = Path(__file__).resolve().parents[1] / "services" / "api" / "main.py"


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "dev")
    monkeypatch.setenv("SETTINGS_PATH", str(tmp_path / "settings.json"))
    for name in ("PROJECT_ID", "GEMINI_API_KEY", "RELAY_WEBHOOK_URL", "USE_DIRECT_API"):
        monkeypatch.delenv(name, raising=False)

    spec = importlib.util.spec_from_file_location("site_synthesizer_api", API_MAIN)
    module = importlib.util.module_from_spec(spec)
    # pydantic resolves the deferred annotations through sys.modules
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    return TestClient(module.app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_without_credential_uses_template(client):
    response = client.post("/v1/sites:generate", json={"prompt": "A bakery with pricing", "theme": "blog"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "template"
    assert body["warnings"] == []
    assert body["html"].startswith("<!DOCTYPE html>")
    assert '<section id="pricing"' in body["html"]


def test_generate_rejects_blank_prompt(client):
    response = client.post("/v1/sites:generate", json={"prompt": "   "})

    assert response.status_code == 422


def test_settings_round_trip_never_returns_credential(client):
    assert client.get("/v1/settings").json()["mode"] == "template"

    response = client.put(
        "/v1/settings",
        json={"credential": "key-123", "relay_url": "https://relay.example.com/webhook/x"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "relay"
    assert body["has_credential"] is True
    assert "key-123" not in response.text
    assert client.get("/v1/settings").json() == body


def test_export_returns_zip_attachment(client):
    markup = "<!DOCTYPE html><html><body>Hi</body></html>"

    response = client.post("/v1/sites:export", json={"html": markup, "theme": "tech"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="website-tech-' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert archive.read("index.html").decode("utf-8") == markup


def test_diagnose_requires_relay_url(client):
    response = client.post("/v1/relay:diagnose")

    assert response.status_code == 400


def test_cleared_credential_stays_cleared(client):
    client.put("/v1/settings", json={"credential": "key-123"})

    response = client.put("/v1/settings", json={"credential": None})

    assert response.json()["mode"] == "template"
    assert client.get("/v1/settings").json()["mode"] == "template"
    generated = client.post("/v1/sites:generate", json={"prompt": "pricing"}).json()
    assert generated["source"] == "template"
