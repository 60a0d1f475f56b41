"""Abstract base class for the operator prompt layer.

Implementations render prompts and menus and return syntactically valid
values. Semantic checks (distinct from current state, operator approval)
are performed by the console core, not here.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.base import NanoAmount


class ConsoleUI(ABC):
    """Interface for reading operator input and writing messages."""

    @abstractmethod
    def prompt_address(
        self, message: str, default: Optional[Address] = None
    ) -> Address:
        """Prompts until the operator enters a valid address.

        Args:
            message: The prompt text.
            default: Address used when the operator enters nothing.

        Returns:
            The parsed address.
        """
        pass  # pragma: no cover

    @abstractmethod
    def prompt_amount(self, message: str) -> NanoAmount:
        """Prompts until the operator enters a positive decimal amount.

        Returns:
            The amount converted to nano units.
        """
        pass  # pragma: no cover

    @abstractmethod
    def prompt_url(self, message: str) -> str:
        """Prompts until the operator enters an http(s) URL."""
        pass  # pragma: no cover

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Asks a yes/no question."""
        pass  # pragma: no cover

    @abstractmethod
    def choose(self, message: str, options: Sequence[str]) -> str:
        """Blocks until the operator picks one of the options.

        Returns:
            The chosen option.
        """
        pass  # pragma: no cover

    @abstractmethod
    def write(self, message: str) -> None:
        """Writes a message to the operator."""
        pass  # pragma: no cover
