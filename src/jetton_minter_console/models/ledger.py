"""Data models for on-ledger contract state.

This module defines the views of a contract that the console reads from the
ledger client: its lifecycle status, deployed code and the position of its
most recent transaction.
"""

import hashlib
from typing import Optional

from pydantic import Field

from jetton_minter_console.errors import NoHistoryError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.base import ModelBase
from jetton_minter_console.models.enums import ContractStatus


class CausalPosition(ModelBase):
    """Marker of a contract's last transaction in the ledger's causal order.

    Attributes:
        lt: Logical time of the transaction. Positions are ordered by it.
        tx_hash: Optional transaction hash, informational only.
    """

    lt: int = Field(..., ge=1, description="Logical time of the transaction.")
    tx_hash: Optional[str] = Field(
        default=None, description="Transaction hash, informational only."
    )

    def is_newer_than(self, other: "CausalPosition") -> bool:
        return self.lt > other.lt


class ContractState(ModelBase):
    """Snapshot of an account as reported by the ledger client.

    Attributes:
        address: The account address.
        status: Lifecycle status of the account.
        code: Deployed code image, or None when the account has no code.
        last_position: Position of the last transaction, or None when the
            account has no recorded history.
    """

    address: Address
    status: ContractStatus
    code: Optional[bytes] = None
    last_position: Optional[CausalPosition] = None

    @property
    def is_active(self) -> bool:
        return self.status == ContractStatus.ACTIVE and self.code is not None

    @property
    def code_hash(self) -> Optional[str]:
        if self.code is None:
            return None
        return hash_code(self.code)

    def require_history(self) -> CausalPosition:
        """Returns the last position, failing if the contract has no history.

        Raises:
            NoHistoryError: If no last transaction is recorded.
        """
        if self.last_position is None:
            raise NoHistoryError(str(self.address))
        return self.last_position


class ContractRef(ModelBase):
    """The contract a session administers.

    Attributes:
        address: Address of the minter.
        expected_code: Locally built code image the deployed code is checked
            against, or None when no build is available.
    """

    address: Address
    expected_code: Optional[bytes] = None

    def code_matches(self, state: ContractState) -> Optional[bool]:
        """Compares deployed and expected code; None when nothing to compare."""
        if self.expected_code is None:
            return None
        return state.code == self.expected_code


def hash_code(code: bytes) -> str:
    return hashlib.sha256(code).hexdigest()


class Sender(ModelBase):
    """Identity that signs outgoing requests.

    Attributes:
        address: Wallet address of the caller, or None for an
            unauthenticated (dry-run) session.
    """

    address: Optional[Address] = None

    @property
    def is_authenticated(self) -> bool:
        return self.address is not None
