from fastapi.testclient import TestClient

from app.config import settings
from app.main import app


def test_health():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["x-frame-options"] == "DENY"


def test_ready(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://example.supabase.co")
    monkeypatch.setattr(settings, "supabase_service_role_key", "service-key")
    response = TestClient(app).get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "service_role": True}


def test_not_ready_without_supabase_url(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "")
    response = TestClient(app).get("/ready")
    assert response.status_code == 503
