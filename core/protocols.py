"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_forward(self, method: str, path: str, target_url: str) -> None: ...
    def log_response(self, method: str, path: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
