from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one fan-out task: success(value) or failure(reason)."""

    value: Optional[T] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "Outcome[T]":
        return cls(reason=reason or "unknown error")


async def capture(awaitable: Awaitable[T], *, timeout: float, label: str) -> Outcome[T]:
    """Await with a deadline, turning any error into a failed Outcome."""

    try:
        return Outcome.success(await asyncio.wait_for(awaitable, timeout=timeout))
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %.1fs", label, timeout)
        return Outcome.failure(f"timed out after {timeout:g}s")
    except Exception as e:
        logger.warning("%s failed: %s", label, e)
        return Outcome.failure(str(e) or type(e).__name__)
