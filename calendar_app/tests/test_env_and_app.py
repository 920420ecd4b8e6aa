import logging

from fastapi.testclient import TestClient

from calendar_app.config import Settings
from calendar_app.core.env import load_env
from calendar_app.logging import configure_logging
from calendar_app.main import create_app
from calendar_app.services.events.store import InMemoryEventStore


def test_load_env_does_not_fail_when_missing() -> None:
    load_env()


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SERVE_STATIC", "true")

    config = Settings()

    assert config.PORT == 8080
    assert config.SERVE_STATIC is True
    assert Settings(ENV="production").is_production


def test_configure_logging_quiets_noisy_loggers() -> None:
    configure_logging("debug")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("pymongo").level == logging.WARNING


def test_development_root_reports_running() -> None:
    app = create_app(Settings(STORE_BACKEND="memory"), store=InMemoryEventStore())

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.text == "Calendar App API is running..."


def test_production_serves_front_end_with_index_fallback(tmp_path) -> None:
    (tmp_path / "index.html").write_text("<html>calendar</html>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "app.js").write_text("console.log('hi')")
    config = Settings(ENV="production", STATIC_DIR=str(tmp_path), STORE_BACKEND="memory")
    app = create_app(config, store=InMemoryEventStore())

    with TestClient(app) as client:
        asset = client.get("/assets/app.js")
        deep_link = client.get("/week/2024-03-11")
        root = client.get("/")
        api = client.get("/api/events")

    assert asset.text == "console.log('hi')"
    assert "calendar" in deep_link.text
    assert "calendar" in root.text
    assert api.json() == []


def test_cors_headers_are_sent(client) -> None:
    response = client.get("/api/events", headers={"Origin": "http://localhost:8080"})

    assert response.headers["access-control-allow-origin"] == "*"
