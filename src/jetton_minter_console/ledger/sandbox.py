"""In-memory sandbox ledger for dry runs and tests.

The sandbox emulates jetton minter contracts with the settlement lag of a
real ledger: a submitted message is only processed after a configurable
number of state reads of the target account. Processing a message always
records a new transaction (the logical time advances), but the minter
state only changes when the message is valid. Messages signed by a wallet
other than the admin, and mints on a non-mintable minter, are processed
without effect, the same way a deployed minter rejects them.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from jetton_minter_console.config import SessionFile
from jetton_minter_console.errors import SessionConfigError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import to_nano
from jetton_minter_console.models.base import NanoAmount
from jetton_minter_console.models.enums import ContractStatus
from jetton_minter_console.models.jetton import JettonContent, JettonData
from jetton_minter_console.models.ledger import CausalPosition, ContractState, Sender
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.binding import JettonMinterBinding
from jetton_minter_console.ports.ledger import LedgerClient

logger = get_logger(__name__)


@dataclass
class SandboxMinter:
    """Mutable state of an emulated minter."""

    admin: Optional[Address]
    total_supply: NanoAmount = 0
    mintable: bool = True
    content: JettonContent = field(default_factory=lambda: JettonContent.offchain(""))
    code: Optional[bytes] = b"jetton-minter"
    status: ContractStatus = ContractStatus.ACTIVE
    last_lt: Optional[int] = 1
    balances: dict[Address, NanoAmount] = field(default_factory=dict)


@dataclass
class SandboxMessage:
    """A submitted request waiting to be processed."""

    kind: str
    sender: Sender
    apply: Callable[[SandboxMinter], None]
    reads_left: int
    requires_mintable: bool = False


class SandboxLedger(LedgerClient):
    """In-memory implementation of the LedgerClient.

    Useful for dry runs and tests where no network is involved.
    """

    def __init__(self, settle_after_reads: Optional[int] = 1):
        """Initializes an empty sandbox.

        Args:
            settle_after_reads: State reads of the target account before a
                submitted message is processed. None never processes messages.
        """
        self.settle_after_reads = settle_after_reads
        self._minters: dict[Address, SandboxMinter] = {}
        self._pending: dict[Address, list[SandboxMessage]] = {}
        self.submitted: list[tuple[Address, str]] = []

    @classmethod
    def from_session_file(cls, session_file: SessionFile) -> "SandboxLedger":
        ledger = cls(settle_after_reads=session_file.settle_after_reads)
        for contract in session_file.contracts:
            ledger.deploy(
                contract.address,
                SandboxMinter(
                    admin=contract.admin,
                    total_supply=to_nano(contract.total_supply),
                    mintable=contract.mintable,
                    content=JettonContent.offchain(contract.content_uri),
                    code=contract.code,
                    status=contract.status,
                    last_lt=contract.last_lt,
                ),
            )
        return ledger

    def deploy(self, address: Address, minter: SandboxMinter) -> SandboxMinter:
        self._minters[address] = minter
        self._pending[address] = []
        return minter

    def minter(self, address: Address) -> SandboxMinter:
        try:
            return self._minters[address]
        except KeyError:
            raise SessionConfigError(f"No sandbox contract at {address}") from None

    def get_contract_state(self, address: Address) -> ContractState:
        minter = self._minters.get(address)
        if minter is None:
            return ContractState(address=address, status=ContractStatus.NONEXIST)

        self._advance(address, minter)
        position = (
            CausalPosition(lt=minter.last_lt) if minter.last_lt is not None else None
        )
        return ContractState(
            address=address,
            status=minter.status,
            code=minter.code,
            last_position=position,
        )

    def submit(self, address: Address, message: SandboxMessage) -> None:
        minter = self.minter(address)
        self.submitted.append((address, message.kind))
        if self.settle_after_reads is None:
            message.reads_left = -1
        self._pending[address].append(message)
        if message.reads_left == 0:
            self._advance(address, minter, count_read=False)

    def _advance(self, address: Address, minter: SandboxMinter, count_read: bool = True) -> None:
        remaining = []
        for message in self._pending[address]:
            if message.reads_left < 0:
                remaining.append(message)
                continue
            if count_read and message.reads_left > 0:
                message.reads_left -= 1
            if message.reads_left == 0:
                self._process(address, minter, message)
            else:
                remaining.append(message)
        self._pending[address] = remaining

    def _process(self, address: Address, minter: SandboxMinter, message: SandboxMessage) -> None:
        minter.last_lt = (minter.last_lt or 0) + 1
        authorized = (
            not message.sender.is_authenticated
            or (minter.admin is not None and message.sender.address == minter.admin)
        )
        if not authorized:
            logger.info(
                f"Sandbox rejected {message.kind} on {address}: sender is not admin",
                extra={"extra_fields": {"event": "sandbox_rejected", "reason": "not_admin"}},
            )
            return
        if message.requires_mintable and not minter.mintable:
            logger.info(
                f"Sandbox rejected {message.kind} on {address}: minter is not mintable",
                extra={"extra_fields": {"event": "sandbox_rejected", "reason": "not_mintable"}},
            )
            return
        message.apply(minter)


class SandboxMinterBinding(JettonMinterBinding):
    """JettonMinterBinding over a SandboxLedger contract."""

    def __init__(self, ledger: SandboxLedger, address: Address):
        self._ledger = ledger
        self._address = address

    @property
    def address(self) -> Address:
        return self._address

    @property
    def _minter(self) -> SandboxMinter:
        return self._ledger.minter(self._address)

    def get_admin_address(self) -> Optional[Address]:
        return self._minter.admin

    def get_total_supply(self) -> NanoAmount:
        return self._minter.total_supply

    def get_content(self) -> JettonContent:
        return self._minter.content

    def get_jetton_data(self) -> JettonData:
        minter = self._minter
        return JettonData(
            total_supply=minter.total_supply,
            mintable=minter.mintable,
            admin_address=minter.admin,
            content=minter.content,
        )

    def _send(self, kind: str, sender: Sender, apply, requires_mintable: bool = False) -> None:
        self._ledger.submit(
            self._address,
            SandboxMessage(
                kind=kind,
                sender=sender,
                apply=apply,
                reads_left=self._ledger.settle_after_reads or 0,
                requires_mintable=requires_mintable,
            ),
        )

    def send_mint(
        self,
        sender: Sender,
        to: Address,
        amount: NanoAmount,
        forward_ton_amount: NanoAmount,
        total_ton_amount: NanoAmount,
    ) -> None:
        def apply(minter: SandboxMinter) -> None:
            minter.total_supply += amount
            minter.balances[to] = minter.balances.get(to, 0) + amount

        self._send("mint", sender, apply, requires_mintable=True)

    def send_change_admin(self, sender: Sender, new_admin: Address) -> None:
        def apply(minter: SandboxMinter) -> None:
            minter.admin = new_admin

        self._send("change_admin", sender, apply)

    def send_change_content(self, sender: Sender, new_content: JettonContent) -> None:
        def apply(minter: SandboxMinter) -> None:
            minter.content = new_content

        self._send("change_content", sender, apply)
