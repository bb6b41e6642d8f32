"""Value objects for lean-identity."""

from .identity_result import IdentityError, IdentityResult

__all__ = ["IdentityError", "IdentityResult"]
