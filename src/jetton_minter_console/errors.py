"""Exception hierarchy for the minter console.

Fatal errors abort the operator session. Everything else is recoverable and
is converted into a reprompt or an operator-visible message at the
orchestration layer.
"""


class ConsoleError(Exception):
    """Base class for all console errors."""


class FatalConsoleError(ConsoleError):
    """A precondition violation that aborts the session."""


class NoHistoryError(FatalConsoleError):
    """Raised when an administered contract reports no last transaction."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(
            f"Last transaction can't be null on deployed contract {address}: no prior history"
        )


class SessionConfigError(FatalConsoleError):
    """Raised when the session context is malformed."""


class IntentNotDistinctError(ConsoleError):
    """Raised when an intent's target equals the currently observed value."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} already equals {value}")


class AddressParseError(ValueError):
    """Raised when a string is not a valid ledger address."""


class LedgerClientError(ConsoleError):
    """Raised when the ledger transport fails or returns an error payload."""

    def __init__(self, code: str, detail: str):
        self.code = code
        self.detail = detail
        super().__init__(detail)
