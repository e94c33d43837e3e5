"""Bounded awaits for store and network round-trips."""
import asyncio
from typing import Awaitable, Optional, TypeVar

from ..agents.exceptions import DatabaseTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_seconds: Optional[float], operation: str) -> T:
    """
    Await `awaitable`, raising DatabaseTimeoutError after `timeout_seconds`.
    A timeout of None or <= 0 waits indefinitely.
    """
    if not timeout_seconds or timeout_seconds <= 0:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise DatabaseTimeoutError(
            f"{operation} timed out after {timeout_seconds}s",
            operation=operation,
        ) from e
