"""Mapping of solver exceptions to HTTP error responses."""

from typing import Callable, Optional, Tuple

from waterpouring.main.pouring_solver.solver.models import NoSolution

BAD_REQUEST = 400
REQUEST_TIMEOUT = 408


def exception_response_mapper() -> Callable[[BaseException], Optional[Tuple[int, str]]]:
    """
    Build the exception -> (status, message) mapper used by the routes.

    Mapping:
        NoSolution   -> 400 (expected state unreachable)
        TimeoutError -> 408 (solver took longer than the configured timeout)
        ValueError   -> 400 (malformed state, InvalidOperation included)

    Unmapped exceptions return None.
    """
    def mapper(error: BaseException) -> Optional[Tuple[int, str]]:
        if isinstance(error, NoSolution):
            return BAD_REQUEST, str(error)
        if isinstance(error, TimeoutError):
            return REQUEST_TIMEOUT, str(error)
        if isinstance(error, ValueError):
            return BAD_REQUEST, str(error)
        return None

    return mapper
