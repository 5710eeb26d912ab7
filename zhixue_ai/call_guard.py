"""
zhixue_ai/call_guard.py
-----------------------------------
Single-shot wrapper around the Gemini / OpenAI SDK calls.

- No retry: each request is issued exactly once
- SDK errors are classified for the log (rate limit, timeout, server, client)
- Every failure surfaces as ProviderError carrying the original exception
"""

import logging
import time
from typing import Any, Callable, Optional, TypeVar

from google.genai import errors as genai_errors
from openai import APIError, APITimeoutError, RateLimitError

from .errors import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderCallGuard:
    def __init__(self, backend: str):
        self.backend = backend

    def invoke(self, operation: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Run `fn` once and return its result.
        Raises ProviderError if the SDK call raises anything.
        """
        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except ProviderError:
            raise
        except Exception as e:
            kind = self._classify(e)
            logger.error(f"🚫 {self.backend}/{operation} failed ({kind}): {e}")
            raise ProviderError(
                f"{self.backend} {operation} failed: {kind}",
                backend=self.backend,
                operation=operation,
                last_exception=e,
            ) from e

        logger.info(f"🤖 {self.backend}/{operation} done in {time.monotonic() - start:.1f}s")
        return result

    # ------------------------------
    # 🔍 Error classification
    # ------------------------------
    def _classify(self, exc: BaseException) -> str:
        if isinstance(exc, RateLimitError):
            return "rate limit (HTTP 429)"
        if isinstance(exc, APITimeoutError):
            return "timeout"
        if isinstance(exc, APIError):
            return self._by_status(getattr(exc, "status_code", None))
        if isinstance(exc, genai_errors.APIError):
            return self._by_status(getattr(exc, "code", None))
        return type(exc).__name__

    @staticmethod
    def _by_status(status: Optional[int]) -> str:
        if status == 429:
            return "rate limit (HTTP 429)"
        if status and 500 <= status < 600:
            return f"server error ({status})"
        if status:
            return f"client error ({status})"
        return "API error"
