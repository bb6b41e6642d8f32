"""Utility helpers for lean-identity."""

from .uuid import generate_uuid_v7
from .masking import mask_identifier

__all__ = [
    "generate_uuid_v7",
    "mask_identifier",
]
