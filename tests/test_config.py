import pytest

from app.core.config import Settings, resolve_api_base, strip_trailing_slash


@pytest.mark.parametrize(
    "value, expected",
    [
        ("/api/arachne/", "/api/arachne"),
        ("/api/arachne", "/api/arachne"),
        ("http://arachne:8080//", "http://arachne:8080/"),
    ],
)
def test_strip_trailing_slash(value, expected):
    assert strip_trailing_slash(value) == expected


def test_relative_base_resolves_against_origin():
    assert resolve_api_base("/api/arachne", "http://dashboard.local:8000/") == "http://dashboard.local:8000/api/arachne"


def test_absolute_base_unchanged():
    assert resolve_api_base("https://arachne.example.com", "http://dashboard.local/") == "https://arachne.example.com"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_SCRAPER_API_URL", " https://arachne.example.com/ ")
    monkeypatch.setenv("SCRAPER_API_URL", "http://scraper:9000/")

    settings = Settings()

    assert settings.analytics_api_base == "https://arachne.example.com"
    assert settings.scraper_api_root == "http://scraper:9000"


def test_dashboard_origin_defaults_to_local_server(monkeypatch):
    monkeypatch.delenv("DASHBOARD_ORIGIN", raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_SCRAPER_API_URL", "/api/arachne")
    monkeypatch.setenv("PORT", "8123")

    settings = Settings()

    assert settings.dashboard_origin_url == "http://127.0.0.1:8123"
    assert settings.analytics_base_url == "http://127.0.0.1:8123/api/arachne"


def test_configured_dashboard_origin(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_SCRAPER_API_URL", "/api/arachne/")
    monkeypatch.setenv("DASHBOARD_ORIGIN", " https://dashboard.example.com/ ")

    assert Settings().analytics_base_url == "https://dashboard.example.com/api/arachne"


def test_absolute_analytics_base_ignores_origin(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_SCRAPER_API_URL", "https://arachne.example.com")
    monkeypatch.setenv("DASHBOARD_ORIGIN", "https://dashboard.example.com")

    assert Settings().analytics_base_url == "https://arachne.example.com"
