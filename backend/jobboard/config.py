import secrets
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobBoard"
    session_ttl_seconds: int = 86400  # 24 hours
    max_resume_bytes: int = 5 * 1024 * 1024  # 5 MiB
    # Signed resume links handed to managers stay valid for a week.
    resume_link_ttl_seconds: int = 7 * 24 * 60 * 60
    signing_secret: str = Field(default_factory=lambda: secrets.token_hex(32))

    email_api_url: str = "https://api.resend.com/emails"
    email_api_key: str | None = None
    email_from_address: str = "onboarding@resend.dev"
    email_timeout_seconds: float = 10.0

    api_prefix: str = "/api/v1"
    public_base_url: str = "http://127.0.0.1:8000"
    cors_origins: list[str] = ["http://127.0.0.1:5173", "http://localhost:5173"]
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_path / "jobboard.sqlite"

    @property
    def resumes_dir(self) -> Path:
        return self.data_path / "resumes"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
