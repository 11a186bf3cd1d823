"""Cooperative wall-clock deadline for long routing runs."""

from __future__ import annotations

import time
from typing import Optional


class RoutingDeadlineExceeded(TimeoutError):
    """Raised when a routing run passes its deadline."""


def deadline_after(seconds: float) -> Optional[float]:
    """Return a ``time.monotonic`` deadline, or None when ``seconds`` is 0."""
    if seconds <= 0:
        return None
    return time.monotonic() + seconds


def check_deadline(deadline: Optional[float], stage: str) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise RoutingDeadlineExceeded(f"Routing deadline exceeded during {stage}.")
