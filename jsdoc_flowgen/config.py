"""
Application Configuration

Environment variables use the JSDOC_FLOWGEN_ prefix.
Example: JSDOC_FLOWGEN_LOG_LEVEL=DEBUG, JSDOC_FLOWGEN_INDENT_WIDTH=2

Usage:
    from jsdoc_flowgen.config import settings
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """jsdoc-flowgen settings"""

    model_config = SettingsConfigDict(
        env_prefix="JSDOC_FLOWGEN_",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Rendering
    indent_width: int = Field(default=4, ge=0)  # spaces per nesting depth

    # Input
    language: str = "javascript"
    declaration: bool = True  # False → inline rewrite mode

    @property
    def indent(self) -> str:
        """One indentation unit"""
        return " " * self.indent_width


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

__all__ = ["Settings", "settings", "get_settings"]
