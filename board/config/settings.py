from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Database configuration"""

    path: str = "messages.db"
    echo: bool = Field(
        default=False,
        description="Log every SQL statement emitted by the engine.",
    )

    @property
    def url(self) -> str:
        """Get database URL"""
        return f"sqlite+aiosqlite:///{self.path}"

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class BoardConfig(BaseSettings):
    """Message board behaviour."""

    title: str = "Message Board"
    variant: Literal["featured", "plain"] = Field(
        default="featured",
        description="featured: paginated, sanitized, styled. plain: every row, verbatim.",
    )
    page_size: int = Field(default=100, ge=1, le=1000)
    sanitize_failure: Literal["empty", "reject"] = Field(
        default="empty",
        description="What to do with input the sanitizer cannot process.",
    )
    allow_empty: bool = Field(
        default=True,
        description="Accept submissions whose name or message is empty.",
    )

    @property
    def paginate(self) -> bool:
        return self.variant == "featured"

    @property
    def sanitize(self) -> bool:
        return self.variant == "featured"

    model_config = SettingsConfigDict(
        env_prefix="BOARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Message Board"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_file: str = "logs/app.log"
    log_format: Literal["console", "json"] = "console"

    # Database
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    # Board
    board: BoardConfig = Field(default_factory=BoardConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
