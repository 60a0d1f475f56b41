"""Bounded polling for transaction settlement.

The ledger gives no synchronous acknowledgment that a submitted request was
processed. After a submission the console polls the contract's last
transaction position until it moves past the baseline captured before the
submission, or until the attempt budget runs out. Whether the new
transaction did what was intended is judged by the caller.
"""

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.enums import SettlementStatus
from jetton_minter_console.models.ledger import CausalPosition
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.ledger import LedgerClient

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_INTERVAL = 2.0


@dataclass
class PollResult(Generic[T]):
    satisfied: bool
    attempts: int
    last_value: Optional[T]


def poll_until(
    read: Callable[[], T],
    predicate: Callable[[T], bool],
    *,
    max_attempts: int,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> PollResult[T]:
    """Calls ``read`` until ``predicate`` holds or attempts run out.

    Each attempt waits ``interval`` seconds and then performs exactly one
    read. Polling stops at the first read that satisfies the predicate.

    Args:
        read: Callable performing one read.
        predicate: Returns True when the read value is the awaited one.
        max_attempts: Maximum number of reads (at least 1).
        interval: Delay before each read in seconds.
        sleep: Sleep function, injectable for tests.

    Returns:
        Whether the predicate was satisfied, the number of reads performed
        and the last value read.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    value: Optional[T] = None
    for attempt in range(1, max_attempts + 1):
        sleep(interval)
        value = read()
        if predicate(value):
            return PollResult(satisfied=True, attempts=attempt, last_value=value)
        logger.debug(
            f"Poll attempt {attempt}/{max_attempts} not satisfied",
            extra={"extra_fields": {"event": "poll_attempt", "attempt": attempt}},
        )
    return PollResult(satisfied=False, attempts=max_attempts, last_value=value)


@dataclass
class Settlement:
    status: SettlementStatus
    attempts: int
    position: Optional[CausalPosition]


def await_settlement(
    ledger: LedgerClient,
    address: Address,
    baseline: CausalPosition,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval: float = DEFAULT_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
) -> Settlement:
    """Waits for a transaction newer than ``baseline`` on ``address``.

    Args:
        ledger: Client used to read the contract state.
        address: Contract being watched.
        baseline: Last position captured right before the submission.
        max_attempts: Maximum number of state reads.
        interval: Delay before each read in seconds.
        sleep: Sleep function, injectable for tests.

    Returns:
        CONFIRMED with the new position once a newer transaction is seen,
        EXHAUSTED when none was seen within ``max_attempts`` reads.

    Raises:
        ValueError: If no baseline is given.
    """
    if baseline is None:
        raise ValueError("await_settlement requires a baseline position")

    def has_advanced(position: Optional[CausalPosition]) -> bool:
        return position is not None and position.is_newer_than(baseline)

    result = poll_until(
        lambda: ledger.get_contract_state(address).last_position,
        has_advanced,
        max_attempts=max_attempts,
        interval=interval,
        sleep=sleep,
    )

    status = (
        SettlementStatus.CONFIRMED if result.satisfied else SettlementStatus.EXHAUSTED
    )
    logger.info(
        f"Settlement of {address} after lt {baseline.lt}: {status.value}",
        extra={
            "extra_fields": {
                "event": "settlement",
                "status": status.value,
                "attempts": result.attempts,
                "baseline_lt": baseline.lt,
            }
        },
    )
    return Settlement(
        status=status,
        attempts=result.attempts,
        position=result.last_value if result.satisfied else None,
    )
