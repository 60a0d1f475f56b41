"""Data models for jetton minter state."""

from typing import Optional

from pydantic import Field, model_validator

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.base import ModelBase, NanoAmount

OFFCHAIN_CONTENT_PREFIX = 0x01
ONCHAIN_CONTENT_PREFIX = 0x00


class JettonContent(ModelBase):
    """Jetton metadata content.

    Off-chain content points at a JSON metadata document by URI. On-chain
    content is kept as its raw encoding. Exactly one of the two is set.
    """

    uri: Optional[str] = Field(
        default=None, description="URL of the off-chain metadata JSON."
    )
    onchain: Optional[bytes] = Field(
        default=None, description="Raw encoding of on-chain metadata."
    )

    @model_validator(mode="after")
    def validate_layout(self) -> "JettonContent":
        if (self.uri is None) == (self.onchain is None):
            raise ValueError("content must be either off-chain (uri) or on-chain")
        return self

    @classmethod
    def offchain(cls, uri: str) -> "JettonContent":
        return cls(uri=uri)

    @classmethod
    def decode(cls, data: bytes) -> "JettonContent":
        if data[:1] == bytes([OFFCHAIN_CONTENT_PREFIX]):
            return cls(uri=data[1:].decode("utf-8"))
        return cls(onchain=data)

    def encode(self) -> bytes:
        if self.uri is not None:
            return bytes([OFFCHAIN_CONTENT_PREFIX]) + self.uri.encode("utf-8")
        return self.onchain

    def describe(self) -> str:
        if self.uri is not None:
            return f"Off-chain content:\nURI:{self.uri}\n"
        return f"On-chain content:\n{self.onchain.hex()}\n"

    def __str__(self) -> str:
        return self.uri if self.uri is not None else f"0x{self.onchain.hex()}"


class JettonData(ModelBase):
    """Bundled state of a jetton minter.

    Attributes:
        total_supply: Total minted amount in nano units.
        mintable: Whether the minter still accepts mint requests.
        admin_address: Current administrator, None once admin rights are dropped.
        content: Current metadata content.
    """

    total_supply: NanoAmount = Field(..., ge=0)
    mintable: bool = True
    admin_address: Optional[Address] = None
    content: JettonContent
