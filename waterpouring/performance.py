"""
Performance timing utilities for the solver.

Provides decorators and context managers for measuring execution time
of functions and code blocks with hierarchical output.
"""

import time
import functools
import logging
from typing import Optional, List, Dict, Any
from contextlib import contextmanager
import threading

logger = logging.getLogger(__name__)


class PerformanceTimer:
    """Thread-safe performance timer with hierarchical timing support."""

    def __init__(self):
        self._local = threading.local()

    def _get_stack(self) -> List[Dict[str, Any]]:
        """Get the current thread's timing stack."""
        if not hasattr(self._local, 'stack'):
            self._local.stack = []
        return self._local.stack

    def _get_results(self) -> List[Dict[str, Any]]:
        """Get the current thread's timing results."""
        if not hasattr(self._local, 'results'):
            self._local.results = []
        return self._local.results

    def _clear_results(self):
        self._local.results = []

    @contextmanager
    def time_block(self, name: str):
        """Context manager for timing a code block.

        Args:
            name: Name of the code block being timed
        """
        from waterpouring.config import ServerConfig

        if not ServerConfig.enable_performance_logging:
            yield
            return

        stack = self._get_stack()
        results = self._get_results()

        timing_info = {
            'name': name,
            'depth': len(stack),
            'children': []
        }
        stack.append(timing_info)
        start_time = time.perf_counter()

        try:
            yield
        finally:
            timing_info['elapsed'] = time.perf_counter() - start_time
            stack.pop()

            # Nested blocks attach to their parent, top-level blocks are results
            if stack:
                stack[-1]['children'].append(timing_info)
            else:
                results.append(timing_info)

    def report_lines(self) -> List[str]:
        """Formatted timing lines for the current thread, then clear them."""
        results = self._get_results()
        if not results:
            return []

        total_time = sum(r['elapsed'] for r in results)
        lines = []

        def add_timing(timing: Dict[str, Any], parent_time: Optional[float] = None):
            indent = "  " * timing['depth']
            elapsed = timing['elapsed']
            if parent_time:
                percentage = (elapsed / parent_time) * 100
                lines.append(f"{indent}{timing['name']}: {elapsed:.3f}s ({percentage:.1f}%)")
            else:
                lines.append(f"{indent}{timing['name']}: {elapsed:.3f}s")
            for child in timing['children']:
                add_timing(child, elapsed)

        for result in results:
            add_timing(result, total_time)
        lines.append(f"TOTAL: {total_time:.3f}s")

        self._clear_results()
        return lines

    def log_results(self):
        """Log formatted timing results with hierarchy."""
        from waterpouring.config import ServerConfig

        if not ServerConfig.enable_performance_logging:
            return

        for line in self.report_lines():
            logger.info("PERF %s", line)


# Global timer instance
_timer = PerformanceTimer()


def timed(func):
    """Decorator to time function execution.

    Measures execution time when performance logging is enabled.
    Supports hierarchical timing for nested calls.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from waterpouring.config import ServerConfig

        if not ServerConfig.enable_performance_logging:
            return func(*args, **kwargs)

        with _timer.time_block(f"{func.__module__}.{func.__qualname__}"):
            return func(*args, **kwargs)

    return wrapper


def log_performance_report():
    """Log the timing report accumulated on the current thread."""
    _timer.log_results()

