"""Errors raised by the service layer before any upstream call is made."""
from __future__ import annotations

from typing import Any


class PageValidationError(ValueError):
    """Raised for a `page` value that is not a positive integer."""

    status_code = 400

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid page parameter: {value!r}. Expected a positive integer.")
        self.value = value
