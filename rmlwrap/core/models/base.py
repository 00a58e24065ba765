"""
Base Pydantic models for rmlwrap.

Options handed to the wrapper are validated strictly: a typo in a field name
or a string where a flag belongs is an error, not a silent default.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RMLWrapBaseModel(BaseModel):
    """Base model for rmlwrap Pydantic models.

    Configuration:
        - strict: No implicit conversions
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
    )


class ImmutableModel(RMLWrapBaseModel):
    """Frozen variant for per-call options that are shared across threads."""

    model_config = ConfigDict(frozen=True)
