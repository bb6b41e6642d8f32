"""Builds IdentityError values for failure results."""

from typing import Optional

from ....config.constants import ConstraintKind, ConstraintNames, IdentityErrorCode
from ....core.exceptions import ConstraintViolationError
from ....core.value_objects import IdentityError


class IdentityErrorDescriber:
    """Catalog of identity errors.

    Subclass and override a method to change a description, or call
    ``describe`` with a new code to introduce a new kind.
    """

    def describe(self, code: str, description: str) -> IdentityError:
        """Build an error of any kind."""
        return IdentityError(code=code, description=description)

    def concurrency_failure(self) -> IdentityError:
        return self.describe(
            IdentityErrorCode.CONCURRENCY_FAILURE.value,
            "Optimistic concurrency failure, object has been modified.",
        )

    def duplicate_user_name(self, user_name: Optional[str]) -> IdentityError:
        return self.describe(
            IdentityErrorCode.DUPLICATE_USER_NAME.value,
            f"Username '{user_name}' is already taken.",
        )

    def duplicate_email(self, email: Optional[str]) -> IdentityError:
        return self.describe(
            IdentityErrorCode.DUPLICATE_EMAIL.value,
            f"Email '{email}' is already taken.",
        )

    def duplicate_or_constraint(self, constraint_name: Optional[str]) -> IdentityError:
        return self.describe(
            IdentityErrorCode.DUPLICATE_OR_CONSTRAINT.value,
            f"The operation violated storage constraint '{constraint_name or 'unknown'}'.",
        )

    def from_constraint_violation(
        self,
        error: ConstraintViolationError,
        user_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> IdentityError:
        """Map a storage constraint violation to the most specific error."""
        if error.kind == ConstraintKind.UNIQUE:
            if error.constraint_name == ConstraintNames.UNIQUE_NORMALIZED_USER_NAME:
                return self.duplicate_user_name(user_name)
            if error.constraint_name == ConstraintNames.UNIQUE_NORMALIZED_EMAIL:
                return self.duplicate_email(email)
        return self.duplicate_or_constraint(error.constraint_name)
