"""
Time source for every time-dependent rule.

Services never read the wall clock directly: they receive a ``clock`` callable
returning unix seconds, so sale phases, vesting periods and timelocks are pure
functions of the value it returns.
"""

from typing import Callable

from django.utils import timezone

Clock = Callable[[], int]


def chain_time() -> int:
    """Current UTC time in whole unix seconds."""
    return int(timezone.now().timestamp())
