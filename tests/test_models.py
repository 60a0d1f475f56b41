import pytest
from pydantic import ValidationError

from conftest import ADMIN, OTHER
from jetton_minter_console.errors import (
    AddressParseError,
    IntentNotDistinctError,
    NoHistoryError,
)
from jetton_minter_console.models.address import Address, crc16_xmodem
from jetton_minter_console.models.amounts import from_nano, to_nano
from jetton_minter_console.models.enums import ContractStatus
from jetton_minter_console.models.intent import (
    AdminChangeIntent,
    ContentChangeIntent,
    MintIntent,
)
from jetton_minter_console.models.jetton import JettonContent
from jetton_minter_console.models.ledger import (
    CausalPosition,
    ContractRef,
    ContractState,
)


class TestAddress:
    def test_raw_and_friendly_forms_are_equal(self):
        friendly = ADMIN.to_friendly()
        non_bounceable = ADMIN.to_friendly(bounceable=False, url_safe=False)

        assert len(friendly) == 48
        assert Address.parse(friendly) == ADMIN
        assert Address.parse(non_bounceable) == ADMIN
        assert Address.parse(ADMIN.to_friendly(testnet=True)) == ADMIN
        assert str(ADMIN) == friendly

    def test_masterchain_raw_address(self):
        address = Address.parse("-1:" + "ab" * 32)
        assert address.workchain == -1
        assert address.to_raw() == "-1:" + "ab" * 32
        assert Address.parse(address.to_friendly()) == address

    def test_checksum_mismatch(self):
        friendly = ADMIN.to_friendly()
        tampered = friendly[:10] + ("A" if friendly[10] != "A" else "B") + friendly[11:]
        with pytest.raises(AddressParseError):
            Address.parse(tampered)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "0:abcd",
            "zz:" + "00" * 32,
            "0:" + "g0" * 32,
            "300:" + "aa" * 32,
            "-129:" + "aa" * 32,
            "EQ" * 10,
            "!" * 48,
        ],
    )
    def test_invalid_addresses(self, text):
        with pytest.raises(AddressParseError):
            Address.parse(text)

    def test_address_validates_from_text_in_models(self):
        assert ContractRef(address=ADMIN.to_raw()).address == ADMIN
        with pytest.raises(ValidationError):
            ContractRef(address="not-an-address")

    def test_crc16_xmodem_check_value(self):
        assert crc16_xmodem(b"123456789") == 0x31C3


class TestAmounts:
    def test_to_nano(self):
        assert to_nano("1") == 1_000_000_000
        assert to_nano("0.05") == 50_000_000
        assert to_nano("1050") == 1_050_000_000_000
        assert to_nano(" 0.000000001 ") == 1

    def test_to_nano_rejects_excess_precision(self):
        with pytest.raises(ValueError, match="decimals"):
            to_nano("0.0000000001")

    @pytest.mark.parametrize("text", ["abc", "", "NaN", "Infinity"])
    def test_to_nano_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            to_nano(text)

    def test_from_nano(self):
        assert from_nano(1_050_000_000_000) == "1050"
        assert from_nano(50_000_000) == "0.05"
        assert from_nano(1) == "0.000000001"
        assert from_nano(0) == "0"


class TestIntents:
    def test_admin_change_must_differ(self):
        with pytest.raises(IntentNotDistinctError):
            AdminChangeIntent.against(ADMIN, Address.parse(ADMIN.to_friendly()))
        assert AdminChangeIntent.against(ADMIN, OTHER).new_admin == OTHER

    def test_admin_change_from_dropped_admin(self):
        assert AdminChangeIntent.against(None, OTHER).new_admin == OTHER

    def test_content_change_must_differ(self):
        current = JettonContent.offchain("https://a.example/x.json")
        with pytest.raises(IntentNotDistinctError):
            ContentChangeIntent.against(current, JettonContent.offchain("https://a.example/x.json"))
        intent = ContentChangeIntent.against(current, JettonContent.offchain("https://b.example/x.json"))
        assert intent.new_content.uri == "https://b.example/x.json"

    def test_mint_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            MintIntent(to_address=OTHER, amount=0)
        assert "Mint 1.5 tokens" in MintIntent(to_address=OTHER, amount=to_nano("1.5")).describe()


class TestJettonContent:
    def test_offchain_encoding(self):
        content = JettonContent.offchain("https://x.example/m.json")
        assert content.encode() == b"\x01https://x.example/m.json"
        assert JettonContent.decode(content.encode()) == content

    def test_onchain_content(self):
        content = JettonContent.decode(b"\x00\x01\x02")
        assert content.onchain == b"\x00\x01\x02"
        assert "On-chain content" in content.describe()

    def test_exactly_one_layout(self):
        with pytest.raises(ValidationError):
            JettonContent()
        with pytest.raises(ValidationError):
            JettonContent(uri="https://x", onchain=b"\x00")


class TestContractState:
    def test_require_history(self):
        state = ContractState(
            address=ADMIN,
            status=ContractStatus.ACTIVE,
            code=b"c",
            last_position=CausalPosition(lt=5),
        )
        assert state.require_history().lt == 5

    def test_missing_history_is_named_failure(self):
        state = ContractState(address=ADMIN, status=ContractStatus.ACTIVE, code=b"c")
        with pytest.raises(NoHistoryError, match="no prior history"):
            state.require_history()

    def test_active_requires_code(self):
        assert not ContractState(address=ADMIN, status=ContractStatus.ACTIVE).is_active

    def test_code_matches(self):
        state = ContractState(address=ADMIN, status=ContractStatus.ACTIVE, code=b"c")
        assert ContractRef(address=ADMIN, expected_code=b"c").code_matches(state) is True
        assert ContractRef(address=ADMIN, expected_code=b"d").code_matches(state) is False
        assert ContractRef(address=ADMIN).code_matches(state) is None

    def test_positions_are_ordered_by_lt(self):
        assert CausalPosition(lt=2).is_newer_than(CausalPosition(lt=1))
        assert not CausalPosition(lt=1).is_newer_than(CausalPosition(lt=1))
