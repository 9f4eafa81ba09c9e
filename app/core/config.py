from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    scraper_api_url: str = "http://localhost:8080"  # Arachne backend root (server-side)
    next_public_scraper_api_url: str = "/api/arachne"  # Analytics API base, may be relative
    analytics_timeout_seconds: float = 10.0
    default_time_range_days: int = 30
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    allowed_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    log_level: str = "INFO"
    log_dir: str = "logs"
    dashboard_origin: str = ""  # Trusted origin for a relative analytics base; defaults to the local server

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def analytics_api_base(self) -> str:
        return strip_trailing_slash(self.next_public_scraper_api_url.strip())

    @property
    def dashboard_origin_url(self) -> str:
        return self.dashboard_origin.strip() or f"http://127.0.0.1:{self.port}"

    @property
    def analytics_base_url(self) -> str:
        """Absolute analytics API root. Never derived from request headers."""
        return resolve_api_base(self.analytics_api_base, self.dashboard_origin_url)

    @property
    def scraper_api_root(self) -> str:
        return strip_trailing_slash(self.scraper_api_url.strip())

    class Config:
        env_file = ".env"
        case_sensitive = False


def strip_trailing_slash(value: str) -> str:
    # Only a single trailing slash is removed
    return value[:-1] if value.endswith("/") else value


def resolve_api_base(base: str, origin: str) -> str:
    """
    Resolve a relative API base (e.g. "/api/arachne") against the configured
    origin of the dashboard server. Absolute bases are returned unchanged.
    """
    if base.startswith("/"):
        return origin.rstrip("/") + base
    return base

settings = Settings()
