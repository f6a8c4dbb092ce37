from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "development")
    app_name: str = os.getenv("APP_NAME", "mvp-submission-api")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "3000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # SendGrid; an empty key leaves the notifier disabled for the process lifetime
    sendgrid_api_key: str = os.getenv("SENDGRID_API_KEY", "")
    sendgrid_api_url: str = os.getenv("SENDGRID_API_URL", "https://api.sendgrid.com")
    mail_from: str = os.getenv("MAIL_FROM", "noreply@kbacomuniversity.ac.ug")
    admin_email: str = os.getenv("ADMIN_EMAIL", "cosaku10@gmail.com")
    notify_timeout_seconds: float = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "30"))

    # Submission rate limiting (per client address, fixed window)
    submit_rate_limit: int = int(os.getenv("SUBMIT_RATE_LIMIT", "5"))
    submit_rate_window_seconds: int = int(os.getenv("SUBMIT_RATE_WINDOW_SECONDS", "900"))  # 15 min
    max_body_bytes: int = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))  # 10 MB

    # Email template data
    submission_timezone: str = os.getenv("SUBMISSION_TIMEZONE", "Africa/Kampala")
    event_name: str = os.getenv("EVENT_NAME", "Future Tech Hackathon")
    organizer_name: str = os.getenv(
        "ORGANIZER_NAME", "FOCLIS - Faculty of Computing and Library Information Science"
    )
    university_name: str = os.getenv("UNIVERSITY_NAME", "Kabale University")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def email_configured(self) -> bool:
        return bool(self.sendgrid_api_key)

settings = Settings()
