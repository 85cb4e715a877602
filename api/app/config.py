import tempfile
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_upload_dir() -> Path:
    return Path(tempfile.gettempdir()) / "spend-uploads"


class Settings(BaseSettings):
    app_env: str = "dev"
    log_level: str = "INFO"
    port: int = 8000

    upload_dir: Path = Field(default_factory=_default_upload_dir)
    upload_field: str = "uber"
    max_upload_bytes: int = 5_000_000
    allowed_mime_types: list[str] | str = ["text/csv"]
    csv_encoding: str = "utf-8-sig"

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def split_mime_types(cls, v):
        if v in (None, "", [], ()):
            return ["text/csv"]
        if isinstance(v, str):
            return [p.strip().lower() for p in v.split(",") if p.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
