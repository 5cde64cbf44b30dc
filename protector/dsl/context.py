"""
Restriction context management for Protector.
Tracks the insecure mode that suppresses restriction checks.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator, TypeVar


T = TypeVar('T')


# Depth of nested insecure blocks for the current thread or task
_insecure_depth: ContextVar[int] = ContextVar('protector_insecure_depth', default=0)


def insecure_depth() -> int:
    """Get the number of insecure blocks currently entered."""
    return _insecure_depth.get()


def is_insecure() -> bool:
    """Check whether restriction checks are currently suppressed."""
    return _insecure_depth.get() > 0


@contextmanager
def insecurely() -> Iterator[None]:
    """
    Suppress restriction checks for the duration of the block.

    Blocks nest: suppression ends when the outermost block exits,
    including when the block raises.
    """
    token = _insecure_depth.set(_insecure_depth.get() + 1)
    try:
        yield
    finally:
        _insecure_depth.reset(token)


def run_insecurely(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Execute a function with restriction checks suppressed.

    Args:
        func: Function to execute
        *args: Arguments for the function
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function execution
    """
    with insecurely():
        return func(*args, **kwargs)
