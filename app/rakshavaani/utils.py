"""Common utility helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> float:
    return perf_counter() * 1000.0


def elapsed_ms(start_ms: float) -> int:
    return int(perf_counter() * 1000.0 - start_ms)
