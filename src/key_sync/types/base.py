"""Reusable pydantic base models for configuration and wire envelopes."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )


class WireModel(BaseModel):
    """
    An immutable model for JSON bodies exchanged with remote APIs.

    Unknown fields are ignored rather than rejected.

    Remote services are free to extend their responses. Only the fields
    we actually consume are declared, so a richer response still parses.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
    )
