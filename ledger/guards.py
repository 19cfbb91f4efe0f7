"""
Per-operation reentrancy guard.

Asset transfers are calls into code that is not necessarily trusted. While a
guarded operation runs on a thread, any attempt to enter another guarded
operation on that same thread (typically from inside a transfer hook) fails
instead of observing half-written bookkeeping.
"""

import functools
import logging
import threading

from ledger.exceptions import ReentrancyError

logger = logging.getLogger(__name__)

_state = threading.local()


def operation_in_progress() -> bool:
    return getattr(_state, 'active', None) is not None


def non_reentrant(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        active = getattr(_state, 'active', None)
        if active is not None:
            logger.warning("Blocked re-entry into %s while %s is running", func.__qualname__, active)
            raise ReentrancyError(f"Ledger: reentrant call to {func.__name__}")
        _state.active = func.__qualname__
        try:
            return func(*args, **kwargs)
        finally:
            _state.active = None
    return wrapper
