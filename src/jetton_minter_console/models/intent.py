"""Mutations an operator wants applied to the minter.

Admin and content intents are built through ``against``, which refuses a
target equal to the value currently observed on the ledger.
"""

from typing import Literal, Optional, Union

from pydantic import Field

from jetton_minter_console.errors import IntentNotDistinctError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import from_nano
from jetton_minter_console.models.base import ModelBase, NanoAmount
from jetton_minter_console.models.jetton import JettonContent


class MintIntent(ModelBase):
    kind: Literal["mint"] = "mint"
    to_address: Address = Field(..., description="Recipient of the minted tokens.")
    amount: NanoAmount = Field(..., gt=0, description="Amount to mint in nano units.")

    def describe(self) -> str:
        return f"Mint {from_nano(self.amount)} tokens to {self.to_address}"


class AdminChangeIntent(ModelBase):
    kind: Literal["change_admin"] = "change_admin"
    new_admin: Address = Field(..., description="Address that becomes admin.")

    @classmethod
    def against(
        cls, current: Optional[Address], new_admin: Address
    ) -> "AdminChangeIntent":
        if current is not None and new_admin == current:
            raise IntentNotDistinctError("admin address", new_admin)
        return cls(new_admin=new_admin)

    def describe(self) -> str:
        return f"New admin address is going to be:{self.new_admin}"


class ContentChangeIntent(ModelBase):
    kind: Literal["change_content"] = "change_content"
    new_content: JettonContent = Field(..., description="Replacement content.")

    @classmethod
    def against(
        cls, current: JettonContent, new_content: JettonContent
    ) -> "ContentChangeIntent":
        if new_content == current:
            raise IntentNotDistinctError("content", new_content)
        return cls(new_content=new_content)

    def describe(self) -> str:
        return f"New content url is going to be:{self.new_content}"


Intent = Union[MintIntent, AdminChangeIntent, ContentChangeIntent]
