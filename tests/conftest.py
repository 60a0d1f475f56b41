import pytest

from jetton_minter_console.ledger.sandbox import (
    SandboxLedger,
    SandboxMinter,
    SandboxMinterBinding,
)
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import to_nano
from jetton_minter_console.models.enums import ContractStatus
from jetton_minter_console.models.jetton import JettonContent
from jetton_minter_console.models.ledger import CausalPosition, ContractState, Sender
from jetton_minter_console.ports.ledger import LedgerClient
from jetton_minter_console.session.context import SessionContext

MINTER = Address.parse("0:" + "aa" * 32)
ADMIN = Address.parse("0:" + "11" * 32)
OTHER = Address.parse("0:" + "22" * 32)
MINTER_CODE = b"jetton-minter"
CONTENT_URI = "https://example.com/jetton.json"


class ScriptedLedger(LedgerClient):
    """Ledger returning a prepared sequence of last-transaction positions."""

    def __init__(self, lts, status=ContractStatus.ACTIVE, code=MINTER_CODE):
        self._lts = list(lts)
        self.status = status
        self.code = code
        self.reads = 0

    def get_contract_state(self, address):
        index = min(self.reads, len(self._lts) - 1)
        self.reads += 1
        lt = self._lts[index]
        return ContractState(
            address=address,
            status=self.status,
            code=self.code,
            last_position=CausalPosition(lt=lt) if lt is not None else None,
        )


@pytest.fixture
def sandbox():
    ledger = SandboxLedger(settle_after_reads=2)
    ledger.deploy(
        MINTER,
        SandboxMinter(
            admin=ADMIN,
            total_supply=to_nano("1000"),
            content=JettonContent.offchain(CONTENT_URI),
            code=MINTER_CODE,
            last_lt=42,
        ),
    )
    return ledger


@pytest.fixture
def make_context(sandbox):
    def factory(sender_address=ADMIN, expected_code=MINTER_CODE, ledger=None):
        ledger = ledger or sandbox
        return SessionContext(
            ledger=ledger,
            binding_factory=lambda address: SandboxMinterBinding(ledger, address),
            sender=Sender(address=sender_address),
            expected_code=expected_code,
        )

    return factory


@pytest.fixture
def bound_session(make_context):
    context = make_context()
    return context.bind(context.contract_ref(MINTER))
