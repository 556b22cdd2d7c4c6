"""Schemas for the LinkedIn v2 API responses the strategy reads.

All fields are optional: LinkedIn omits anything the granted scopes don't
cover, and a missing field decodes as None instead of failing the model.
List containers keep their elements raw so each element is decoded on its
own and a malformed neighbour can't fail the document.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

STILL_IMAGE_KEY = "com.linkedin.digitalmedia.mediaartifact.StillImage"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def decode(model: type[SchemaT], raw: Any) -> SchemaT | None:
    """Validate raw against model, None if the shape doesn't match."""
    try:
        return model.model_validate(raw)
    except ValidationError:
        return None


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StorageSize(_Schema):
    width: int | None = None
    height: int | None = None


class StillImage(_Schema):
    storage_size: StorageSize | None = Field(default=None, alias="storageSize")


class ImageData(_Schema):
    still_image: StillImage | None = Field(default=None, alias=STILL_IMAGE_KEY)


class ImageIdentifier(_Schema):
    identifier: str | None = None


class SizedImage(_Schema):
    data: ImageData | None = None

    @property
    def width(self) -> int:
        """Reported storage width; 0 when absent."""
        try:
            return self.data.still_image.storage_size.width or 0
        except AttributeError:
            return 0


class ImageElement(SizedImage):
    identifiers: list[ImageIdentifier] | None = None


class DisplayImage(_Schema):
    elements: list[Any] = Field(default_factory=list)


class ProfilePicture(_Schema):
    display_image: DisplayImage | None = Field(default=None, alias="displayImage~")


class EmailHandle(_Schema):
    email_address: str | None = Field(default=None, alias="emailAddress")


class HandleKind(_Schema):
    type: str | None = None
    primary: bool | None = None

    @field_validator("primary", mode="before")
    @classmethod
    def _flag_only(cls, value: Any) -> bool | None:
        return value if isinstance(value, bool) else None


class MemberHandle(HandleKind):
    handle: EmailHandle | None = Field(default=None, alias="handle~")


class MemberHandles(_Schema):
    elements: list[Any] = Field(default_factory=list)
