"""Store Call Guard — keeps the failure kind intact across the store boundary.

Invariants:
    - GatewayError from the store propagates untouched
    - Builtin TimeoutError (asyncio.wait_for, socket deadlines) → StoreTimeoutError
    - Any other Exception → BackendError; cause always chained
    - CancelledError is a BaseException and passes through uncaught
"""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from retrieval_gateway.core.errors import (
    BackendError, ErrorContext, GatewayError, StoreTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def guard_store_call(
    call: Awaitable[T], operation: str, context: ErrorContext,
) -> T:
    """Await a store call, mapping unexpected failures to the error taxonomy."""
    try:
        return await call
    except GatewayError:
        raise
    except TimeoutError as e:
        raise StoreTimeoutError(operation, context) from e
    except Exception as e:
        logger.error(
            f"Unexpected store error during {operation}: {e}", exc_info=True,
        )
        raise BackendError(str(e), operation, context) from e
