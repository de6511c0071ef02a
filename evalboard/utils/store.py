"""Timeout and bounded-retry policy for data store calls."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.core.config import settings
from evalboard.core.exceptions import BackendUnavailable
from evalboard.utils.messages import get_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS = (OperationalError, asyncio.TimeoutError)


def _is_transient(error: Exception) -> bool:
    if isinstance(error, TRANSIENT_ERRORS):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    description: str = "store call",
    timeout: Optional[float] = None,
    max_retries: Optional[int] = None,
    backoff: Optional[float] = None,
    on_retry: Optional[Callable[[], Awaitable[None]]] = None,
) -> T:
    """Run a read against the store with a hard timeout and backoff retries.

    `operation` is a zero-argument coroutine factory so every attempt gets a
    fresh awaitable. Non-transient errors propagate unchanged; transient ones
    are retried and, once retries are exhausted, surface as BackendUnavailable.
    """
    timeout = settings.STORE_TIMEOUT_SECONDS if timeout is None else timeout
    max_retries = settings.STORE_MAX_RETRIES if max_retries is None else max_retries
    backoff = settings.STORE_RETRY_BACKOFF_SECONDS if backoff is None else backoff

    attempt = 0
    while True:
        try:
            return await asyncio.wait_for(operation(), timeout=timeout)
        except Exception as e:
            if not _is_transient(e):
                raise
            if attempt >= max_retries:
                logger.error(f"{description} failed after {attempt + 1} attempts: {e!r}")
                key = "timeout" if isinstance(e, asyncio.TimeoutError) else "unavailable"
                raise BackendUnavailable(get_message("store", key)) from e

            delay = backoff * (2 ** attempt)
            logger.warning(f"{description} attempt {attempt + 1} failed ({e!r}), retrying in {delay:.2f}s")
            attempt += 1
            if on_retry is not None:
                await on_retry()
            await asyncio.sleep(delay)


async def execute_read(session: AsyncSession, statement: Any, description: str = "store read") -> Result:
    """Execute a read statement on `session` under the retry policy."""
    return await run_with_retry(
        lambda: session.execute(statement),
        description=description,
        on_retry=session.rollback,
    )
