"""Outcome types returned by mutating store operations."""

from dataclasses import dataclass, field
from typing import ClassVar, Tuple


@dataclass(frozen=True)
class IdentityError:
    """A single named failure carried by an IdentityResult.

    Codes are free-form strings so new kinds can be introduced without
    touching the stores.
    """

    code: str
    description: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Identity error code cannot be empty")

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


@dataclass(frozen=True)
class IdentityResult:
    """Success or failure outcome of a create, update or delete."""

    succeeded: bool
    errors: Tuple[IdentityError, ...] = field(default_factory=tuple)

    _SUCCESS: ClassVar["IdentityResult"]

    @classmethod
    def success(cls) -> "IdentityResult":
        """Get the shared success result."""
        return cls._SUCCESS

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        """Build a failure result from one or more errors."""
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def error_codes(self) -> Tuple[str, ...]:
        return tuple(error.code for error in self.errors)

    def has_error(self, code: str) -> bool:
        """Check whether the result carries an error with the given code."""
        return code in self.error_codes

    def __bool__(self) -> bool:
        return self.succeeded

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return "Failed : " + ",".join(self.error_codes)


IdentityResult._SUCCESS = IdentityResult(succeeded=True)
