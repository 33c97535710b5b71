"""Timing utilities for performance monitoring and bounded external reads."""
import time
from concurrent.futures import ThreadPoolExecutor
from functools import wraps
from typing import Callable, Any, Optional
from doorcode.utils.logging import log_structured


def time_function(func: Callable) -> Callable:
    """Decorator to time function execution."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start

        log_structured(
            "debug",
            f"Function {func.__name__} executed",
            function=func.__name__,
            elapsed_seconds=elapsed
        )

        return result
    return wrapper


class Timer:
    """Context manager for timing code blocks."""

    def __init__(self, operation: str):
        """
        Initialize timer.

        Args:
            operation: Name of the operation being timed
        """
        self.operation = operation
        self.start = None
        self.elapsed = None

    def __enter__(self):
        self.start = time.time()
        return self

    def __exit__(self, *args):
        self.elapsed = time.time() - self.start
        log_structured(
            "debug",
            f"Operation {self.operation} completed",
            operation=self.operation,
            elapsed_seconds=self.elapsed
        )


def call_with_timeout(func: Callable, timeout: Optional[float], *args, **kwargs) -> Any:
    """
    Run ``func`` and wait at most ``timeout`` seconds for its result.

    Raises concurrent.futures.TimeoutError when the deadline passes. The worker
    thread is left to finish on its own; its result is discarded.

    Args:
        func: Callable performing the external read
        timeout: Seconds to wait, or None to call inline without a deadline
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Whatever func returns
    """
    if timeout is None:
        return func(*args, **kwargs)

    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(func, *args, **kwargs)
        return future.result(timeout=timeout)
    finally:
        executor.shutdown(wait=False)
