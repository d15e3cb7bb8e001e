import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


@dataclass(frozen=True)
class Settings:
    database_url: str
    line_channel_secret: str | None
    line_channel_access_token: str | None
    line_api_base: str
    line_reply_timeout: float
    driver_app_url: str
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment on every call.

    Values are not cached so tests can patch the environment.
    """
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./carrynote.db"),
        line_channel_secret=os.getenv("LINE_CHANNEL_SECRET") or None,
        line_channel_access_token=os.getenv("LINE_CHANNEL_ACCESS_TOKEN") or None,
        line_api_base=os.getenv("LINE_API_BASE", "https://api.line.me").rstrip("/"),
        line_reply_timeout=float(os.getenv("LINE_REPLY_TIMEOUT", "10")),
        driver_app_url=os.getenv("DRIVER_APP_URL", "http://localhost:8000/driver_app.html"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
