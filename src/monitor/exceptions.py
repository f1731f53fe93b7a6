"""Alert delivery exceptions."""

from __future__ import annotations


class DispatchError(Exception):
    """The alert request failed (non-2xx status)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
