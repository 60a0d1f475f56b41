"""Enumeration definitions for the minter console.

This module contains the standard Enum classes used across the console to
keep outcome, role and status values consistent.
"""

from enum import Enum


class ActionOutcome(str, Enum):
    """Defines the result of a mutating action.

    Attributes:
        APPLIED: A new transaction was observed and the post-state matches.
        NO_VISIBLE_CHANGE: A new transaction was observed but the state did
            not change as expected.
        UNCONFIRMED: No new transaction was observed within the polling
            budget; the actual result is unknown.
    """

    APPLIED = "applied"
    NO_VISIBLE_CHANGE = "no_visible_change"
    UNCONFIRMED = "unconfirmed"


class SettlementStatus(str, Enum):
    """Defines the result of waiting for a new transaction.

    Attributes:
        CONFIRMED: A newer transaction was observed.
        EXHAUSTED: The attempt budget ran out without observing one.
    """

    CONFIRMED = "confirmed"
    EXHAUSTED = "exhausted"


class Role(str, Enum):
    """Defines the caller's authority over the minter.

    Attributes:
        ADMIN: May mint, change admin and change content.
        VIEWER: May only inspect state.
    """

    ADMIN = "admin"
    VIEWER = "viewer"


class ContractStatus(str, Enum):
    """Defines the lifecycle state of an on-ledger account."""

    ACTIVE = "active"
    UNINIT = "uninit"
    FROZEN = "frozen"
    NONEXIST = "nonexist"


class MenuAction(str, Enum):
    """Defines the labels of the actions offered in the session menu."""

    MINT = "Mint"
    CHANGE_ADMIN = "Change admin"
    CHANGE_CONTENT = "Change content"
    INFO = "Info"
    QUIT = "Quit"
