"""Helpers for keeping identifiers out of logs in readable form."""

import hashlib
from typing import Any


def mask_identifier(value: Any, *, prefix: str = "id") -> str:
    """Return a deterministic non-reversible token for log correlation."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"
