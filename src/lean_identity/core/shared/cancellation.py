"""Cooperative cancellation for store operations."""

import asyncio
from typing import Optional

from ..exceptions import OperationCancelledError


class CancellationToken:
    """One-way cancellation flag shared between a caller and a store call.

    The flag is backed by an ``asyncio.Event`` so callers can also await it.
    Stores only check it at operation entry, before any I/O.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancellation_requested(self, operation: str) -> None:
        if self._event.is_set():
            raise OperationCancelledError(operation)

    @classmethod
    def cancelled(cls) -> "CancellationToken":
        """Create a token that is already cancelled."""
        token = cls()
        token.cancel()
        return token


def raise_if_cancelled(token: Optional[CancellationToken], operation: str) -> None:
    """Raise OperationCancelledError when ``token`` has been cancelled."""
    if token is not None:
        token.raise_if_cancellation_requested(operation)
