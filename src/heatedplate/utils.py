import functools
import logging
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def cpu_time() -> float:
    """Current reading of the process CPU clock, in seconds."""
    return time.process_time()


def timer(func: F) -> F:
    """Log the wall-clock and CPU time spent in ``func``."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        wall_start = time.perf_counter()
        cpu_start = cpu_time()
        try:
            return func(*args, **kwargs)
        finally:
            logger.debug(
                f"{func.__qualname__} took {time.perf_counter() - wall_start:.3f} s "
                f"(CPU {cpu_time() - cpu_start:.3f} s)"
            )
    return wrapper  # type: ignore[return-value]
