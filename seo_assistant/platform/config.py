from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Daily SEO Assistant"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    # ── Browser ─────────────────────────────────
    CHROMEDRIVER_PATH: Optional[str] = None
    USE_WEBDRIVER_MANAGER: bool = False
    BOT_USER_AGENT: str = "Daily SEO Assistant Bot/1.0 (SEO Analysis)"

    RENDER_TIMEOUT_SECONDS: float = 30.0
    QUIET_WINDOW_MS: int = 500  # network must stay quiet this long
    MAX_INFLIGHT_REQUESTS: int = 2

    # ── Report ──────────────────────────────────
    REPORT_SCORE_GOOD: int = 80
    REPORT_SCORE_WARNING: int = 60
    DASHBOARD_URL: Optional[str] = None

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_USERNAME: str = "your-email-id"
    MAIL_PASSWORD: str = "your-password"
    MAIL_ENCRYPTION: str = "tls"
    MAIL_FROM_ADDRESS: str = "reports@dailyseoassistant.com"
    MAIL_FROM_NAME: str = "Daily SEO Assistant"

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""
    EMAIL_RELAY_TIMEOUT: int = 30

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
