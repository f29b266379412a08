import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .config import DEFAULT_LOG_LEVEL, DEFAULT_MIN_PERCENTAGE
from .models import Settings


def load_environment(env_path: Optional[Path] = None) -> None:
    """Load .env from the working directory (or env_path) without overriding real env vars."""
    load_dotenv(dotenv_path=env_path or Path.cwd() / ".env", override=False)


def get_settings() -> Settings:
    # Values stay strings here; pydantic coerces and validates them
    return Settings.model_validate({
        "log_level": os.getenv("MATCH_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        "min_percentage": os.getenv("MATCH_MIN_PERCENTAGE", DEFAULT_MIN_PERCENTAGE),
        "max_results": os.getenv("MATCH_MAX_RESULTS") or None,
    })
