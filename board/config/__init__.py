"""Application configuration."""

from .settings import BoardConfig, DatabaseConfig, Settings, settings

__all__ = ["BoardConfig", "DatabaseConfig", "Settings", "settings"]
