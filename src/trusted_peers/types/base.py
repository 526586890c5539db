"""Reusable pydantic base models for the peer checker."""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """
    An immutable model that tolerates unknown input keys.

    Used for records read from third-party documents (peer listings),
    where extra keys should be dropped rather than rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_default=True,
        coerce_numbers_to_str=True,
    )


class StrictBaseModel(FrozenModel):
    """A strict, immutable pydantic base model that rejects unknown fields."""

    model_config = FrozenModel.model_config | {
        "extra": "forbid",
    }
