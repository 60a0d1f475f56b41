from pydantic import BaseModel, ConfigDict


class ModelBase(BaseModel):
    """
    Base class for all jetton-minter-console models.

    Enforces strict validation, forbids unknown fields,
    and makes instances immutable value objects.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


NanoAmount = int
