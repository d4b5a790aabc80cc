"""
Timeout wrapper for solver calls.

The solver is pure computation with no suspension points, so it cannot be
interrupted from outside. apply_timeout() runs it on a worker thread and stops
waiting once the deadline passes. When given a cancel_event it also sets that
event, and a cooperating callable (BFSSolver.solve checks it once per level)
returns its worker thread to the pool instead of exploring to the end.
"""

from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from datetime import timedelta
from typing import Callable, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar('T')

_MAX_WORKERS = 4
_executor = ThreadPoolExecutor(max_workers=_MAX_WORKERS, thread_name_prefix='solver')


class SolveTimeout(TimeoutError):
    """Raised when a wrapped call does not complete within its timeout."""
    pass


def apply_timeout(func: Callable[..., T], timeout: Union[timedelta, float], *args,
                  cancel_event: Optional[threading.Event] = None, **kwargs) -> T:
    """
    Call func(*args, **kwargs) and wait at most timeout for its result.

    Args:
        func: Callable to run on a worker thread
        timeout: timedelta or seconds
        cancel_event: Set when the timeout expires; func is expected to watch it

    Returns:
        Whatever func returns

    Raises:
        SolveTimeout: If func has not completed in time
        Exception: Anything raised by func, unchanged
    """
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    future = _executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=seconds)
    except FuturesTimeoutError:
        # Completed after all, or func raised TimeoutError itself
        if future.done():
            return future.result()
        if cancel_event is not None:
            cancel_event.set()
        future.cancel()
        logger.warning("%s did not complete within %gs", getattr(func, '__qualname__', func), seconds)
        raise SolveTimeout(f"Solver did not complete within {seconds:g} second(s)") from None
