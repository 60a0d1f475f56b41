"""Data model for reporting the outcome of a mutating action.

A report is created once per action invocation and shown to the operator.
It is never persisted.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from jetton_minter_console.models.enums import ActionOutcome


class ActionReport(BaseModel):
    """The result of a mutating action.

    Attributes:
        action: Name of the action (mint, change_admin, change_content).
        outcome: Applied, no visible change, or unconfirmed.
        message: A summary message suitable for display to the operator.
        expected: The post-value the action was expected to produce.
        observed: The post-value read back, None when it was not re-read.
        attempts: Number of state reads the confirmation poll performed.
        timestamp: When the outcome was classified.
    """

    model_config = ConfigDict(use_enum_values=True)

    action: str = Field(..., description="Name of the action.")
    outcome: ActionOutcome = Field(
        ..., description="Applied, no visible change, or unconfirmed."
    )
    message: str = Field(
        ..., description="A summary message suitable for display to the operator."
    )
    expected: Optional[Any] = Field(
        default=None,
        description="The post-value the action was expected to produce.",
    )
    observed: Optional[Any] = Field(
        default=None,
        description="The post-value read back after confirmation.",
    )
    attempts: int = Field(
        default=0, description="State reads performed while polling."
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the outcome was classified.",
    )
