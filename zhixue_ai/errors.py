# zhixue_ai/errors.py

from typing import Optional

from zhixue_core.errors import DiagnosisError


class ProviderError(DiagnosisError):
    """AI call failed (transport, quota, missing key or unreadable reply). Never retried."""

    def __init__(
        self,
        message: str,
        *,
        backend: str = "",
        operation: str = "",
        last_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.backend = backend
        self.operation = operation
        self.last_exception = last_exception
