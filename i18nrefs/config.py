"""Runtime settings for i18nrefs.

Values come from environment variables (a ``.env`` file is loaded by the
package on import). CLI options take precedence over these.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_LOCALES_DIR = "locales"
DEFAULT_MAX_SUGGESTIONS = 3
DEFAULT_WORKERS = 1


class Settings(BaseModel):
    """Settings resolved from the environment."""

    locales_dir: Path = Field(
        default=Path(DEFAULT_LOCALES_DIR),
        description="Directory holding one sub-directory per locale",
    )
    max_suggestions: int = Field(
        default=DEFAULT_MAX_SUGGESTIONS,
        ge=0,
        description="Similar paths suggested for a missing reference target",
    )
    workers: int = Field(
        default=DEFAULT_WORKERS,
        ge=1,
        description="Threads used to validate locales concurrently",
    )
    disable_progress: bool = Field(default=False, description="Never show progress bars")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from I18NREFS_* environment variables."""
        return cls(
            locales_dir=Path(os.getenv("I18NREFS_LOCALES_DIR", DEFAULT_LOCALES_DIR)),
            max_suggestions=int(
                os.getenv("I18NREFS_MAX_SUGGESTIONS", str(DEFAULT_MAX_SUGGESTIONS))
            ),
            workers=int(os.getenv("I18NREFS_WORKERS", str(DEFAULT_WORKERS))),
            disable_progress=os.getenv("I18NREFS_DISABLE_PROGRESS", "").lower()
            in ("1", "true", "yes"),
        )


def get_settings() -> Settings:
    """Return settings for the current environment.

    Read fresh from the environment on every call.
    """
    return Settings.from_env()
