"""Records for posts and the media attached to them."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, ValidationError, ValidatorFunctionWrapHandler, field_validator

from echo_board.db.time import utcnow

from .base import Record

# Exclusive upper bound of the cosmetic card colour.
COLOR_HINT_COUNT = 5


class MediaType(str, Enum):
    """Coarse classification of an uploaded file."""

    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"


class MediaRef(Record):
    """Descriptor of a stored upload, embedded by value in its post."""

    file_url: str = Field(alias="fileUrl")
    file_name: str = Field(alias="fileName")
    file_type: MediaType = Field(default=MediaType.FILE, alias="fileType")
    file_size: int = Field(default=0, ge=0, alias="fileSize")


class Post(Record):
    """Primary content entity.

    Only `content` is user-authored; the rest is assigned at creation and
    never changes afterwards.
    """

    id: str
    content: str
    tags: list[str] = Field(default_factory=list)
    media: list[MediaRef] = Field(default_factory=list)
    owner_id: str = Field(alias="ownerId")
    created_at: datetime = Field(default_factory=utcnow, alias="timestamp")
    color_hint: int = Field(default=0, ge=0, lt=COLOR_HINT_COUNT, alias="color")

    # Older snapshots stored these fields exactly as the client sent them;
    # a bad value degrades to its default and the post is kept.

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_strings(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str)]

    @field_validator("media", mode="before")
    @classmethod
    def _usable_media(cls, value: Any) -> list[MediaRef]:
        if not isinstance(value, list):
            return []
        media: list[MediaRef] = []
        for item in value:
            try:
                media.append(MediaRef.model_validate(item))
            except ValidationError:
                continue
        return media

    @field_validator("created_at", mode="wrap")
    @classmethod
    def _created_at_or_now(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> datetime:
        try:
            return handler(value)
        except ValidationError:
            return utcnow()

    @field_validator("color_hint", mode="wrap")
    @classmethod
    def _color_hint_or_default(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> int:
        try:
            return handler(value)
        except ValidationError:
            return 0
