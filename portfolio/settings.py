from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Local content
    CONTENT_DIR: str = "content"
    SHOW_DRAFTS: bool = False
    FALLBACK_IMAGE: str = "/images/placeholder.jpg"

    # Upstream GraphQL API
    GRAPHQL_API_URL: str = ""
    GRAPHQL_API_KEY: str = ""
    GRAPHQL_ALLOWED_OPERATIONS: List[str] = [
        "ListBlogPosts",
        "GetBlogPost",
        "GetRecentBlogPosts",
    ]
    GRAPHQL_TIMEOUT: float = 10.0

    # Contact form notifications
    SENDER_EMAIL: str = "noreply@example.com"
    RECIPIENT_EMAIL: str = "admin@example.com"
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def recipient_list(self) -> List[str]:
        return [
            address.strip()
            for address in self.RECIPIENT_EMAIL.split(",")
            if address.strip()
        ]


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
