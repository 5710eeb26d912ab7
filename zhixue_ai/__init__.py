# zhixue_ai/__init__.py

"""
AI question provider for the diagnosis system.

Two interchangeable backends behind QuestionProvider:
    GeminiProvider (google-genai, default) and OpenAIProvider (openai).
make_provider() picks one from Settings (AI_BACKEND in .env).
"""

import random
from typing import Optional

from .config import Settings, load_settings
from .errors import ProviderError
from .gemini_provider import GeminiProvider
from .openai_provider import OpenAIProvider
from .provider import COMMENT_EMPTY, COMMENT_FAILED, QuestionProvider, parse_questions


def make_provider(settings: Settings, rng: Optional[random.Random] = None) -> QuestionProvider:
    if settings.backend == "openai":
        return OpenAIProvider(settings.openai_api_key, settings.openai_model, rng=rng)
    return GeminiProvider(settings.google_api_key, settings.gemini_model, rng=rng)


__all__ = [
    "Settings",
    "load_settings",
    "ProviderError",
    "QuestionProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "COMMENT_EMPTY",
    "COMMENT_FAILED",
    "parse_questions",
    "make_provider",
]
