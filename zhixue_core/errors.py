# zhixue_core/errors.py

from typing import Optional


class DiagnosisError(Exception):
    """Base class for every error raised by the diagnosis flow."""


class ValidationError(DiagnosisError):
    """Input from the user is incomplete; the triggering action is blocked."""


class ProfileValidationError(ValidationError):
    pass


class QuestionValidationError(ValidationError):
    pass


class CompositionError(DiagnosisError):
    """No question could be assembled for the diagnostic quiz."""


class InvalidTransitionError(DiagnosisError):
    """Action requested from a step that does not allow it."""

    def __init__(self, message: str, current: Optional[str] = None, target: Optional[str] = None):
        super().__init__(message)
        self.current = current
        self.target = target
