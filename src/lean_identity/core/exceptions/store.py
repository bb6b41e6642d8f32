"""Store-level exceptions: programming errors and cancellation."""

from typing import Optional

from .base import LeanIdentityError


class InvalidArgumentError(LeanIdentityError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(self, argument_name: str, reason: str = ""):
        self.argument_name = argument_name
        message = f"Argument '{argument_name}' is required"
        if reason:
            message = f"Invalid argument '{argument_name}': {reason}"
        super().__init__(message, details={"argument": argument_name})


class StoreDisposedError(LeanIdentityError, RuntimeError):
    """Raised when a disposed store is used."""

    def __init__(self, store_name: str):
        self.store_name = store_name
        super().__init__(f"Cannot access a disposed store: {store_name}")


class KeyFormatError(LeanIdentityError, ValueError):
    """Raised when an external identifier cannot be parsed into the key type."""

    def __init__(self, value: str, key_type: str, reason: Optional[str] = None):
        self.value = value
        self.key_type = key_type
        message = f"'{value}' is not a valid {key_type} key"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"key_type": key_type})


class OperationCancelledError(LeanIdentityError):
    """Raised when cancellation was requested before the operation started."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation '{operation}' was cancelled")
