"""Demo host app."""

from fastapi.testclient import TestClient

from linkedin_auth import main


def test_health_reports_disabled_strategy(monkeypatch):
    monkeypatch.delenv("LINKEDIN_AUTH_ENABLED", raising=False)
    main.get_strategy.cache_clear()

    client = TestClient(main.app)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "linkedin_enabled": False}
    assert client.get("/auth/linkedin", follow_redirects=False).status_code == 404

    main.get_strategy.cache_clear()
