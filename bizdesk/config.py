"""
BizDesk — Configuration via environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All settings read from env / .env file."""

    # Document store: "sql", "firestore" or "memory"
    store_backend: str = Field(
        default="sql",
        description="Which document store backs the API: 'sql', 'firestore' or 'memory'",
    )

    # SQL backend
    database_url: str = Field(
        default="sqlite+aiosqlite:///./bizdesk.db",
        description="Async SQLAlchemy DB URL",
    )
    database_echo: bool = Field(default=False, description="Log every SQL statement")
    database_pool_size: int = Field(default=5, description="Postgres connection pool size")
    database_max_overflow: int = Field(default=10)

    # Firestore backend
    firebase_cred_path: str = Field(
        default="", description="Path to Firebase service account key JSON"
    )
    firebase_project_id: str = Field(default="", description="Firebase / GCP project id")

    # Activity log
    activity_dedup_window_ms: int = Field(
        default=5000, description="Identical descriptions inside this window are logged once"
    )
    activity_feed_limit: int = Field(default=20, description="Entries shown on the dashboard feed")

    # Auth
    bcrypt_rounds: int = Field(default=12)

    # HTTP
    cors_origins: list[str] = Field(default=["*"])

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
