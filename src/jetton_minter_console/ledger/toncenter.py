"""Ledger client backed by the toncenter HTTP API."""

import base64
import binascii
from typing import Any, Optional

import requests

from jetton_minter_console.errors import LedgerClientError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.enums import ContractStatus
from jetton_minter_console.models.ledger import CausalPosition, ContractState
from jetton_minter_console.observability.logging import get_logger
from jetton_minter_console.ports.ledger import LedgerClient

logger = get_logger(__name__)

_STATUS_MAP = {
    "active": ContractStatus.ACTIVE,
    "uninitialized": ContractStatus.UNINIT,
    "uninit": ContractStatus.UNINIT,
    "frozen": ContractStatus.FROZEN,
    "nonexist": ContractStatus.NONEXIST,
}


class ToncenterClient(LedgerClient):
    """Reads account state through ``getAddressInformation``."""

    def __init__(
        self,
        base_url: str = "https://toncenter.com/api/v2",
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initializes the client.

        Args:
            base_url: Root of the toncenter v2 API.
            api_key: Optional API key sent as X-API-Key.
            timeout: Request timeout in seconds.
            session: Optional requests session to reuse connections.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        if api_key:
            self._session.headers["X-API-Key"] = api_key

    def _get(self, method: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}/{method}"
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise LedgerClientError("transport.error", f"{method} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise LedgerClientError(
                "response.invalid",
                f"{method} returned non-JSON response (HTTP {response.status_code})",
            ) from e

        if not response.ok or not payload.get("ok", False):
            detail = payload.get("error") or f"HTTP {response.status_code}"
            raise LedgerClientError("api.error", f"{method} failed: {detail}")
        return payload["result"]

    def get_contract_state(self, address: Address) -> ContractState:
        result = self._get("getAddressInformation", {"address": address.to_raw()})
        logger.debug(
            f"Fetched state of {address}",
            extra={"extra_fields": {"event": "ledger_state", "state": result.get("state")}},
        )
        return parse_address_information(address, result)


def parse_address_information(address: Address, result: dict[str, Any]) -> ContractState:
    """Maps a ``getAddressInformation`` result onto a ContractState."""
    raw_status = result.get("state", "nonexist")
    status = _STATUS_MAP.get(raw_status)
    if status is None:
        raise LedgerClientError("response.invalid", f"Unknown account state: {raw_status}")

    code_b64 = result.get("code") or ""
    last_tx = result.get("last_transaction_id") or {}
    try:
        code = base64.b64decode(code_b64, validate=True) if code_b64 else None
        lt = int(last_tx.get("lt") or 0)
    except (binascii.Error, TypeError, ValueError) as e:
        raise LedgerClientError(
            "response.invalid", f"Malformed account information: {e}"
        ) from e
    position = CausalPosition(lt=lt, tx_hash=last_tx.get("hash")) if lt > 0 else None

    return ContractState(
        address=address, status=status, code=code, last_position=position
    )
