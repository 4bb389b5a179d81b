"""Sequential model fallback with bounded per-model retry."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from rakshavaani.errors import ExhaustionError, is_permanent_failure

T = TypeVar("T")

CallFn = Callable[[str], Awaitable[str]]
SleepFn = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class FallbackOutcome(Generic[T]):
    value: T
    model: str
    attempts: int


class ModelFallbackOrchestrator:
    """Try candidates strictly in order until one yields a usable value.

    Candidates are never called concurrently: the upstream is rate limited
    and the first success wins anyway. A failure tagged as an unknown model
    skips the remaining attempts for that candidate.
    """

    def __init__(self, *, sleep: SleepFn = asyncio.sleep):
        self._sleep = sleep

    async def run(
        self,
        candidates: Sequence[str],
        call: CallFn,
        parse: Callable[[str], T] | None = None,
        *,
        max_attempts: int = 1,
        retry_pause_sec: float = 0.0,
        label: str = "model",
    ) -> FallbackOutcome[T]:
        tried: list[str] = []
        last_error: BaseException | None = None
        attempts = 0

        for model in candidates:
            tried.append(model)
            for attempt in range(1, max(max_attempts, 1) + 1):
                if attempt > 1:
                    await self._sleep(retry_pause_sec)
                attempts += 1
                print(f"[rakshavaani] {label}_attempt: model={model} attempt={attempt}")
                try:
                    raw = await call(model)
                    value = parse(raw) if parse is not None else raw
                except Exception as exc:
                    last_error = exc
                    print(f"[rakshavaani] {label}_failed: model={model} {type(exc).__name__}: {exc}")
                    if is_permanent_failure(exc):
                        print(f"[rakshavaani] {label}_skip_retry: model={model} is not available")
                        break
                    continue
                return FallbackOutcome(value=value, model=model, attempts=attempts)

        raise ExhaustionError(tried, last_error)
