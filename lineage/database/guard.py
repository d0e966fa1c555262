"""Timeout and error guard for store I/O."""

import asyncio
import time
from typing import Awaitable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from lineage.errors import StorageUnavailableError
from lineage.observability import get_logger, record_store_operation

logger = get_logger(__name__)

T = TypeVar('T')


async def guarded(operation: str, awaitable: Awaitable[T], timeout: float) -> T:
    """
    Await a store operation with a timeout, translating storage failures.

    Wraps the awaitable with asyncio.wait_for so no query can hang a request
    indefinitely. Timeouts, driver errors and connection errors become
    StorageUnavailableError. IntegrityError is re-raised untouched so the
    caller can map it to a domain conflict.

    Args:
        operation: Operation name for logs and metrics (e.g. "get_by_name")
        awaitable: Coroutine performing the database work
        timeout: Maximum execution time in seconds

    Returns:
        The awaitable's result

    Raises:
        StorageUnavailableError: On timeout or any storage-level failure
        IntegrityError: On constraint violations
    """
    start_time = time.monotonic()
    try:
        result = await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        record_store_operation(operation, "timeout", time.monotonic() - start_time)
        logger.error(
            f"Store operation timed out after {timeout}s",
            extra={"operation": operation, "timeout": timeout},
        )
        raise StorageUnavailableError(operation, f"timed out after {timeout}s") from None
    except IntegrityError:
        record_store_operation(operation, "conflict", time.monotonic() - start_time)
        raise
    except (SQLAlchemyError, OSError) as e:
        record_store_operation(operation, "error", time.monotonic() - start_time)
        logger.error(
            f"Store operation failed: {e}",
            extra={"operation": operation, "error_type": type(e).__name__},
        )
        raise StorageUnavailableError(operation, str(e)) from e

    record_store_operation(operation, "ok", time.monotonic() - start_time)
    return result
