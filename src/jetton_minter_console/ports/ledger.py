"""Abstract base class for the ledger client."""

from abc import ABC, abstractmethod

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.ledger import ContractState


class LedgerClient(ABC):
    """Interface for looking up account state on the ledger."""

    @abstractmethod
    def get_contract_state(self, address: Address) -> ContractState:
        """Retrieves the current state of an account.

        Args:
            address: The account to look up.

        Returns:
            Status, deployed code and last transaction position.
        """
        pass  # pragma: no cover
