from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Document(BaseModel):
    """Base model for application objects saved through a FileManager.

    ``storage_location`` is excluded from dumps, so the serialized payload never
    records where it was written; FileManager.load fills it in from the path.
    """

    storage_location: Optional[str] = Field(default=None, exclude=True)

    @property
    def is_saved(self) -> bool:
        return self.storage_location is not None
