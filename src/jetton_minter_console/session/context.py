"""Session context passed explicitly into every console action."""

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.ledger import ContractRef, Sender
from jetton_minter_console.ports.binding import JettonMinterBinding
from jetton_minter_console.ports.ledger import LedgerClient

BindingFactory = Callable[[Address], JettonMinterBinding]


class SessionContext(BaseModel):
    """
    Pre-configured collaborators for one operator session.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    ledger: LedgerClient = Field(..., description="Ledger state lookups.")
    binding_factory: BindingFactory = Field(
        ..., description="Opens a minter binding for an address."
    )
    sender: Sender = Field(
        default_factory=Sender, description="Caller identity signing requests."
    )
    expected_code: Optional[bytes] = Field(
        default=None, description="Locally built minter code image."
    )

    def contract_ref(self, address: Address) -> ContractRef:
        return ContractRef(address=address, expected_code=self.expected_code)

    def bind(self, ref: ContractRef) -> "BoundSession":
        return BoundSession(
            ref=ref,
            ledger=self.ledger,
            binding=self.binding_factory(ref.address),
            sender=self.sender,
        )


class BoundSession(BaseModel):
    """
    A session fixed to one minter contract.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    ref: ContractRef
    ledger: LedgerClient
    binding: JettonMinterBinding
    sender: Sender

    @property
    def address(self) -> Address:
        return self.ref.address
