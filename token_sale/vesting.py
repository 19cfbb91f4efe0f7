"""
Linear unlocking of purchased tokens.

Entitlement unlocks in equal discrete steps, one per elapsed period after the
cliff (``withdrawal_start``), and is complete once ``period_number`` periods
have elapsed. Integer division truncates, so intermediate steps may release up
to ``period_number - 1`` smallest units less than the exact fraction; the
final step always releases the full claimable amount.
"""

from typing import NamedTuple


class VestingTerms(NamedTuple):
    withdrawal_start: int
    period_duration: int
    period_number: int

    @classmethod
    def from_configuration(cls, configuration) -> "VestingTerms":
        return cls(
            withdrawal_start=configuration.withdrawal_start,
            period_duration=configuration.withdraw_period_duration,
            period_number=configuration.withdraw_period_number,
        )


def elapsed_periods(now: int, withdrawal_start: int, period_duration: int, period_number: int) -> int:
    if period_duration <= 0 or period_number <= 0:
        raise ValueError("Vesting period duration and number must be positive")
    if now < withdrawal_start:
        return 0
    return min((now - withdrawal_start) // period_duration, period_number)


def withdrawable_amount(
    now: int,
    claimable: int,
    withdrawal_start: int,
    period_duration: int,
    period_number: int,
) -> int:
    """Total amount unlocked at ``now`` out of ``claimable`` (before subtracting withdrawals)."""
    periods = elapsed_periods(now, withdrawal_start, period_duration, period_number)
    if periods >= period_number:
        return claimable
    return claimable * periods // period_number


def vested_amount(now: int, claimable: int, terms: VestingTerms) -> int:
    return withdrawable_amount(now, claimable, *terms)
