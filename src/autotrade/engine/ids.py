"""Identifier helpers."""

from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Return a process-unique id such as ``signal-3f9c2a1b7d4e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
