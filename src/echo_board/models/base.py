"""Shared base class for records persisted in the snapshot."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from echo_board.db.time import ensure_utc


class Record(BaseModel):
    """Base for every stored record.

    Field aliases carry the on-disk key names, which predate this package and
    must stay stable so existing snapshots keep loading.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="after")
    @classmethod
    def _timestamps_are_utc(cls, value: object) -> object:
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value

    def to_storage(self) -> dict[str, object]:
        """Return the JSON-ready mapping written to disk."""
        return self.model_dump(mode="json", by_alias=True)
