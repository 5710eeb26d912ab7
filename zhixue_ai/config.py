# zhixue_ai/config.py

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ENV_PATH = os.path.join(BASE_DIR, ".env")

BACKENDS = ("gemini", "openai")


@dataclass(frozen=True)
class Settings:
    backend: str = "gemini"
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    per_topic: int = 2
    training_size: int = 5
    log_level: str = "INFO"


def _int_env(name: str, default: int, allowed: tuple) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"❌ {name} must be an integer, got {raw!r}")
    if value not in allowed:
        raise ValueError(f"❌ {name} must be one of {allowed}, got {value}")
    return value


def load_settings(env_path: str = ENV_PATH) -> Settings:
    """Read .env (if present) then the process environment."""
    load_dotenv(dotenv_path=env_path)

    backend = os.getenv("AI_BACKEND", "gemini").strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"❌ AI_BACKEND must be one of {BACKENDS}, got {backend!r}")

    return Settings(
        backend=backend,
        google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        per_topic=_int_env("DIAGNOSTIC_PER_TOPIC", 2, (1, 2)),
        training_size=_int_env("TRAINING_SIZE", 5, (3, 5)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
