"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase keys with the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActionResult(CamelModel):
    """Acknowledgement returned by mutations that have no other payload."""

    success: bool = True
    message: str | None = None
