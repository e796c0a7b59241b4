"""Asset reference and upload models."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from catalog_admin.config.constants import DEFAULT_CONTENT_TYPE


class AssetRef(BaseModel):
    """A blob object owned by an entity document."""

    key: str = Field(description="Object path in the bucket, e.g. 'products/1718-...-tee.png'")
    url: str = Field(description="Directly displayable URL for the object")


@dataclass(frozen=True)
class UploadFile:
    """A file attached to a form submission, not yet stored."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> "UploadFile":
        """Read a local file, guessing its content type from the suffix."""
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or guessed or DEFAULT_CONTENT_TYPE,
            data=path.read_bytes(),
        )
