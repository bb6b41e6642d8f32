"""Base exceptions for lean-identity.

All exceptions inherit from LeanIdentityError and carry an error code and
structured details for logging.
"""

from typing import Any, Dict, Optional


class LeanIdentityError(Exception):
    """Base exception for all lean-identity errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
