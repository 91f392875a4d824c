# estate_photos/core/config.py
from __future__ import annotations
from typing import Annotated, Optional, List
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from starlette.middleware.cors import CORSMiddleware


class Settings(BaseSettings):
    # Pydantic Settings
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # ignore unknown env keys safely
        case_sensitive=False,
        populate_by_name=True,
    )

    # --- App ---
    app_name: str = "Estate Photos"
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # --- Directories / Paths ---
    # photos live under <storage_root>/photos/<property_id>/<filename>
    storage_root: str = Field("storage", alias="STORAGE_ROOT")

    # --- Database ---
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")  # full URL override
    db_user: str = Field("estate", alias="DB_USER")
    db_password: str = Field("estatepw1234", alias="DB_PASSWORD")
    db_host: str = Field("127.0.0.1", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_name: str = Field("estate_photos", alias="DB_NAME")

    # --- CORS ---
    # Comma-separated in .env or leave default list
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        alias="ALLOWED_ORIGINS",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, v):
        # Accept "a,b,c" or JSON array; pass lists through.
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            "postgresql+psycopg2://"
            f"{self.db_user}:{quote_plus(self.db_password)}@"
            f"{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()


def configure_cors(app):
    http_origins = [o for o in settings.allowed_origins if o.startswith("http")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=http_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
