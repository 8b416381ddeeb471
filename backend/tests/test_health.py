import platform


def test_health_reports_key_prefix_only(client, settings):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is True
    assert data["port"] == 8787
    assert data["hasKey"] is True
    assert data["keyPrefix"] == "gsk_"
    assert data["python"] == platform.python_version()
    assert settings.groq_api_key not in r.text


def test_health_without_key(client):
    from app.config import Settings, get_settings  # type: ignore
    from app.main import app  # type: ignore

    app.dependency_overrides[get_settings] = lambda: Settings(port=9000)
    data = client.get("/health").json()
    assert data["hasKey"] is False
    assert data["keyPrefix"] == ""
    assert data["port"] == 9000
