import base64
from unittest.mock import MagicMock

import pytest
import requests

from conftest import MINTER
from jetton_minter_console.errors import LedgerClientError
from jetton_minter_console.ledger.toncenter import (
    ToncenterClient,
    parse_address_information,
)
from jetton_minter_console.models.enums import ContractStatus
from jetton_minter_console.models.ledger import CausalPosition


def make_response(payload, status_code=200):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.json.return_value = payload
    return response


def test_parse_active_contract():
    state = parse_address_information(
        MINTER,
        {
            "state": "active",
            "code": base64.b64encode(b"code").decode(),
            "last_transaction_id": {"lt": "1234", "hash": "abc="},
        },
    )

    assert state.status == ContractStatus.ACTIVE
    assert state.code == b"code"
    assert state.last_position == CausalPosition(lt=1234, tx_hash="abc=")
    assert state.is_active


def test_parse_uninitialized_contract_without_history():
    state = parse_address_information(
        MINTER,
        {"state": "uninitialized", "code": "", "last_transaction_id": {"lt": "0", "hash": ""}},
    )

    assert state.status == ContractStatus.UNINIT
    assert state.code is None
    assert state.last_position is None
    assert not state.is_active


def test_parse_unknown_state():
    with pytest.raises(LedgerClientError):
        parse_address_information(MINTER, {"state": "weird"})


@pytest.mark.parametrize(
    "result",
    [
        {"state": "active", "code": "not base64!", "last_transaction_id": {"lt": "5"}},
        {"state": "active", "code": "", "last_transaction_id": {"lt": "abc"}},
    ],
)
def test_parse_malformed_result(result):
    with pytest.raises(LedgerClientError) as exc_info:
        parse_address_information(MINTER, result)

    assert exc_info.value.code == "response.invalid"


def test_get_contract_state_calls_api():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response(
        {"ok": True, "result": {"state": "active", "code": "", "last_transaction_id": {"lt": "7"}}}
    )
    client = ToncenterClient("https://api.example/v2/", api_key="k", timeout=3, session=session)

    state = client.get_contract_state(MINTER)

    assert state.last_position.lt == 7
    assert session.headers["X-API-Key"] == "k"
    session.get.assert_called_once_with(
        "https://api.example/v2/getAddressInformation",
        params={"address": MINTER.to_raw()},
        timeout=3,
    )


def test_api_error_payload():
    session = MagicMock()
    session.headers = {}
    session.get.return_value = make_response({"ok": False, "error": "rate limit"}, 429)
    client = ToncenterClient(session=session)

    with pytest.raises(LedgerClientError, match="rate limit") as exc:
        client.get_contract_state(MINTER)
    assert exc.value.code == "api.error"


def test_transport_error():
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = requests.ConnectionError("down")
    client = ToncenterClient(session=session)

    with pytest.raises(LedgerClientError) as exc:
        client.get_contract_state(MINTER)
    assert exc.value.code == "transport.error"


def test_non_json_response():
    session = MagicMock()
    session.headers = {}
    response = make_response(None, 502)
    response.json.side_effect = ValueError("no json")
    session.get.return_value = response
    client = ToncenterClient(session=session)

    with pytest.raises(LedgerClientError, match="HTTP 502"):
        client.get_contract_state(MINTER)
