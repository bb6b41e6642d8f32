"""Shared primitives used across lean-identity features."""

from .cancellation import CancellationToken, raise_if_cancelled

__all__ = ["CancellationToken", "raise_if_cancelled"]
