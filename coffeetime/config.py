"""Configuration settings for Coffee Time."""

import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


def _get_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Session durations (minutes)
DEFAULT_WORK_MINUTES = _get_int("COFFEETIME_WORK_MINUTES", 25)
DEFAULT_REST_MINUTES = _get_int("COFFEETIME_REST_MINUTES", 5)

# Progression
XP_PER_MINUTE = 10

# Storage
DB_PATH = Path(os.getenv("COFFEETIME_DB_PATH", str(Path.cwd() / "coffeetime.db")))
SOUND_CACHE_DIR = Path(os.getenv("COFFEETIME_SOUND_DIR", str(Path.home() / ".cache" / "coffeetime" / "sounds")))

# Rest phrases
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("COFFEETIME_OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SECONDS = _get_int("COFFEETIME_OPENAI_TIMEOUT", 10)
FALLBACK_PHRASE = "Rest is part of the work. Step away, breathe, and come back sharper."

# Logging
LOG_LEVEL = os.getenv("COFFEETIME_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
