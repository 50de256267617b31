"""
Errors raised by CaptionKit.

Every error carries a severity and a category so the host can decide whether
playback continues without captions.
"""

from typing import Any, Optional


class Severity:
    RECOVERABLE = 1
    CRITICAL = 2


class Category:
    TEXT = 4


class Code:
    HTTP_ERROR = 1002


class CaptionError(Exception):
    """Base class for CaptionKit errors."""

    def __init__(
        self,
        message: str,
        severity: int = Severity.RECOVERABLE,
        category: int = Category.TEXT,
        code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.severity = severity
        self.category = category
        self.code = code
        self.payload = payload

    @property
    def recoverable(self) -> bool:
        return self.severity == Severity.RECOVERABLE


class CaptionFetchError(CaptionError):
    """A caption file could not be fetched. Fails the whole batch."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(
            message,
            severity=Severity.RECOVERABLE,
            category=Category.TEXT,
            code=Code.HTTP_ERROR,
            payload=payload,
        )
