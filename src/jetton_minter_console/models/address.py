"""Ledger account addresses.

An address is a workchain id plus a 32-byte account hash. It can be written
in raw form (``0:9a3f...``) or in the 48-character user-friendly form, which
is base64 (standard or url-safe) of 36 bytes: a tag byte, the workchain, the
hash and a CRC16-XMODEM checksum. Two addresses are equal when workchain and
hash match, whatever form they were parsed from.
"""

import base64
import binascii
from typing import Any

from pydantic import Field, ValidationError, model_validator

from jetton_minter_console.errors import AddressParseError
from jetton_minter_console.models.base import ModelBase

BOUNCEABLE_TAG = 0x11
NON_BOUNCEABLE_TAG = 0x51
TEST_FLAG = 0x80


def crc16_xmodem(data: bytes) -> int:
    return binascii.crc_hqx(data, 0)


def _parse_raw(text: str) -> tuple[int, bytes]:
    wc_part, _, hash_part = text.partition(":")
    try:
        workchain = int(wc_part)
        account = bytes.fromhex(hash_part)
    except ValueError as e:
        raise AddressParseError(f"Invalid raw address: {text}") from e
    if not -128 <= workchain <= 127:
        raise AddressParseError(f"Workchain out of range: {text}")
    if len(account) != 32:
        raise AddressParseError(f"Raw address hash must be 32 bytes: {text}")
    return workchain, account


def _parse_friendly(text: str) -> tuple[int, bytes]:
    if len(text) != 48:
        raise AddressParseError(f"Friendly address must be 48 characters: {text}")
    normalized = text.replace("-", "+").replace("_", "/")
    try:
        data = base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AddressParseError(f"Invalid base64 address: {text}") from e

    tag = data[0] & ~TEST_FLAG
    if tag not in (BOUNCEABLE_TAG, NON_BOUNCEABLE_TAG):
        raise AddressParseError(f"Unknown address tag {data[0]:#x}: {text}")
    if crc16_xmodem(data[:34]) != int.from_bytes(data[34:], "big"):
        raise AddressParseError(f"Address checksum mismatch: {text}")

    workchain = int.from_bytes(data[1:2], "big", signed=True)
    return workchain, data[2:34]


class Address(ModelBase):
    """A ledger account address."""

    workchain: int = Field(..., ge=-128, le=127)
    account: bytes = Field(..., min_length=32, max_length=32)

    @model_validator(mode="before")
    @classmethod
    def accept_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            workchain, account = cls._split(value)
            return {"workchain": workchain, "account": account}
        return value

    @staticmethod
    def _split(text: str) -> tuple[int, bytes]:
        text = text.strip()
        if not text:
            raise AddressParseError("Address is empty")
        if ":" in text:
            return _parse_raw(text)
        return _parse_friendly(text)

    @classmethod
    def parse(cls, text: str) -> "Address":
        workchain, account = cls._split(text)
        try:
            return cls(workchain=workchain, account=account)
        except ValidationError as e:
            raise AddressParseError(f"Invalid address: {text}") from e

    def to_raw(self) -> str:
        return f"{self.workchain}:{self.account.hex()}"

    def to_friendly(
        self, *, bounceable: bool = True, testnet: bool = False, url_safe: bool = True
    ) -> str:
        tag = BOUNCEABLE_TAG if bounceable else NON_BOUNCEABLE_TAG
        if testnet:
            tag |= TEST_FLAG
        body = bytes([tag]) + self.workchain.to_bytes(1, "big", signed=True) + self.account
        data = body + crc16_xmodem(body).to_bytes(2, "big")
        if url_safe:
            return base64.urlsafe_b64encode(data).decode("ascii")
        return base64.b64encode(data).decode("ascii")

    def __str__(self) -> str:
        return self.to_friendly()
