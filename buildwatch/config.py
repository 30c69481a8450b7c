"""Reporter configuration — env-driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
BUILDWATCH_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ReporterSettings(BaseSettings):
    """Console reporter settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDWATCH_LOG_LEVEL=DEBUG
        export BUILDWATCH_NO_COLOR=true
        export BUILDWATCH_VERSION_PLACEHOLDER=n/a
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDWATCH_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Rendering
    version_placeholder: str = "unknown"
    column_padding: int = 2
    show_icons: bool = True

    # Default console (ignored when a Console is injected)
    force_terminal: bool | None = None
    no_color: bool = False
    width: int | None = None


# Module-level singleton — import as `from buildwatch.config import config`
config = ReporterSettings()
