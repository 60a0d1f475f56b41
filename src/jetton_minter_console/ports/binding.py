"""Abstract base class for the jetton minter contract binding.

The binding encodes requests and decodes getter results. Every ``send_*``
method is fire-and-forget: returning normally means the request was accepted
for submission, not that it was applied.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.base import NanoAmount
from jetton_minter_console.models.jetton import JettonContent, JettonData
from jetton_minter_console.models.ledger import Sender


class JettonMinterBinding(ABC):
    """Typed access to one jetton minter contract."""

    @property
    @abstractmethod
    def address(self) -> Address:
        """Address of the bound minter."""
        pass  # pragma: no cover

    @abstractmethod
    def get_admin_address(self) -> Optional[Address]:
        pass  # pragma: no cover

    @abstractmethod
    def get_total_supply(self) -> NanoAmount:
        pass  # pragma: no cover

    @abstractmethod
    def get_content(self) -> JettonContent:
        pass  # pragma: no cover

    @abstractmethod
    def get_jetton_data(self) -> JettonData:
        """Reads supply, mintable flag, admin and content in one call."""
        pass  # pragma: no cover

    @abstractmethod
    def send_mint(
        self,
        sender: Sender,
        to: Address,
        amount: NanoAmount,
        forward_ton_amount: NanoAmount,
        total_ton_amount: NanoAmount,
    ) -> None:
        """Submits a mint request.

        Args:
            sender: Identity signing the request.
            to: Owner of the jetton wallet receiving the tokens.
            amount: Jetton amount in nano units.
            forward_ton_amount: Native coins forwarded with the notification.
            total_ton_amount: Native coins attached to the internal transfer.
        """
        pass  # pragma: no cover

    @abstractmethod
    def send_change_admin(self, sender: Sender, new_admin: Address) -> None:
        pass  # pragma: no cover

    @abstractmethod
    def send_change_content(
        self, sender: Sender, new_content: JettonContent
    ) -> None:
        pass  # pragma: no cover
