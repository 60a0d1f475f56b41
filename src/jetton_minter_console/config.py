"""Configuration for the minter console.

``ConsoleSettings`` holds the tunables of the confirmation workflow and the
ledger transport and is read from environment variables. ``SessionFile`` is
the YAML document describing a sandbox session: the caller identity, the
expected code image and the contracts seeded into the sandbox ledger.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jetton_minter_console.errors import SessionConfigError
from jetton_minter_console.models.address import Address
from jetton_minter_console.models.amounts import to_nano
from jetton_minter_console.models.base import NanoAmount
from jetton_minter_console.models.enums import ContractStatus

_ENV_FIELDS = {
    "poll_attempts": "MINTER_CONSOLE_POLL_ATTEMPTS",
    "poll_interval": "MINTER_CONSOLE_POLL_INTERVAL",
    "forward_ton_amount": "MINTER_CONSOLE_FORWARD_TON",
    "total_ton_amount": "MINTER_CONSOLE_TOTAL_TON",
    "toncenter_url": "TONCENTER_URL",
    "toncenter_api_key": "TONCENTER_API_KEY",
    "request_timeout": "MINTER_CONSOLE_REQUEST_TIMEOUT",
}


def _validate_hex(value: Optional[str]) -> Optional[str]:
    if value:
        bytes.fromhex(value)
    return value


class ConsoleSettings(BaseModel):
    """
    Static configuration for the console.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    poll_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum state reads while waiting for a new transaction.",
    )
    poll_interval: float = Field(
        default=2.0,
        ge=0,
        description="Seconds to wait before each state read.",
    )
    forward_ton_amount: str = Field(
        default="0.05",
        description="Native coins forwarded with the mint notification.",
    )
    total_ton_amount: str = Field(
        default="0.1",
        description="Native coins attached to the mint request.",
    )
    toncenter_url: str = Field(
        default="https://toncenter.com/api/v2",
        description="Base URL of the toncenter HTTP API.",
    )
    toncenter_api_key: Optional[str] = Field(
        default=None,
        description="Optional toncenter API key.",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for ledger requests in seconds.",
    )

    @field_validator("forward_ton_amount", "total_ton_amount")
    @classmethod
    def validate_ton_amount(cls, value: str) -> str:
        to_nano(value)
        return value

    @property
    def forward_ton_nano(self) -> NanoAmount:
        return to_nano(self.forward_ton_amount)

    @property
    def total_ton_nano(self) -> NanoAmount:
        return to_nano(self.total_ton_amount)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "ConsoleSettings":
        env = os.environ if environ is None else environ
        values = {
            field: env[var] for field, var in _ENV_FIELDS.items() if env.get(var)
        }
        try:
            return cls(**values)
        except ValidationError as e:
            raise SessionConfigError(f"Invalid console settings: {e}") from e


class SandboxContract(BaseModel):
    """A minter seeded into the sandbox ledger."""

    model_config = ConfigDict(extra="forbid")

    address: Address
    admin: Optional[Address] = None
    total_supply: str = Field(default="0", description="Supply in token units.")
    mintable: bool = True
    content_uri: str = Field(default="", description="Off-chain metadata URL.")
    code_hex: Optional[str] = Field(default=None, description="Deployed code image.")
    status: ContractStatus = ContractStatus.ACTIVE
    last_lt: Optional[int] = Field(
        default=1, ge=1, description="Logical time of the last transaction."
    )

    @field_validator("total_supply")
    @classmethod
    def validate_supply(cls, value: str) -> str:
        to_nano(value)
        return value

    @field_validator("code_hex")
    @classmethod
    def validate_code_hex(cls, value: Optional[str]) -> Optional[str]:
        return _validate_hex(value)

    @property
    def code(self) -> Optional[bytes]:
        return bytes.fromhex(self.code_hex) if self.code_hex else None


class SessionFile(BaseModel):
    """The session context document loaded by the ``console`` command."""

    model_config = ConfigDict(extra="forbid")

    backend: str = Field(default="sandbox", pattern="^sandbox$")
    sender: Optional[Address] = Field(
        default=None, description="Caller wallet; omit for a dry-run session."
    )
    expected_code_hex: Optional[str] = Field(
        default=None, description="Locally built minter code image."
    )
    settle_after_reads: int = Field(
        default=1, ge=0, description="State reads before a sandbox send is applied."
    )
    contracts: list[SandboxContract] = Field(default_factory=list)

    @field_validator("expected_code_hex")
    @classmethod
    def validate_expected_code_hex(cls, value: Optional[str]) -> Optional[str]:
        return _validate_hex(value)

    @property
    def expected_code(self) -> Optional[bytes]:
        return bytes.fromhex(self.expected_code_hex) if self.expected_code_hex else None

    @classmethod
    def load(cls, path: Path) -> "SessionFile":
        """Loads and validates a session YAML file.

        Raises:
            SessionConfigError: If the file is missing, unparsable or invalid.
        """
        if not path.exists():
            raise SessionConfigError(f"Session file not found: {path}")
        try:
            with open(path, "r") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SessionConfigError(f"Error parsing YAML: {e}") from e
        try:
            return cls.model_validate(raw)
        except (ValidationError, ValueError) as e:
            raise SessionConfigError(f"Invalid session file {path}: {e}") from e
