"""Prompt loops that turn operator input into a confirmed intent."""

from typing import Callable, TypeVar

from jetton_minter_console.errors import IntentNotDistinctError
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.ui import ConsoleUI

logger = get_logger(__name__)

ValueT = TypeVar("ValueT")
CandidateT = TypeVar("CandidateT")
IntentT = TypeVar("IntentT")


def collect_distinct_intent(
    current_value_fetcher: Callable[[], ValueT],
    prompt_fn: Callable[[], CandidateT],
    confirm_fn: Callable[[IntentT], bool],
    build_intent: Callable[[ValueT, CandidateT], IntentT],
    ui: ConsoleUI,
    same_value_message: str,
) -> IntentT:
    """Loops until the operator approves a candidate that differs from state.

    The current value is re-fetched on every iteration.

    Args:
        current_value_fetcher: Reads the live value the intent would replace.
        prompt_fn: Reads a candidate value from the operator.
        confirm_fn: Shows the intent and returns the operator's yes/no.
        build_intent: Builds the intent, raising IntentNotDistinctError when
            the candidate equals the current value.
        ui: Used to report rejected candidates.
        same_value_message: Shown when the candidate equals the current value.

    Returns:
        The approved intent.
    """
    while True:
        candidate = prompt_fn()
        current = current_value_fetcher()
        try:
            intent = build_intent(current, candidate)
        except IntentNotDistinctError as e:
            logger.info(
                f"Rejected candidate: {e}",
                extra={"extra_fields": {"event": "intent_not_distinct", "field": e.field}},
            )
            ui.write(same_value_message)
            continue
        if confirm_fn(intent):
            return intent


def collect_confirmed_intent(
    prompt_fn: Callable[[], IntentT],
    confirm_fn: Callable[[IntentT], bool],
) -> IntentT:
    """Loops until the operator approves a prompted intent."""
    while True:
        intent = prompt_fn()
        if confirm_fn(intent):
            return intent
