# domain/payload.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class FileRef(Protocol):
    """
    Handle to an uploaded file.

    The caller owns the file; encoders only read its name, type and bytes.
    """

    def original_filename(self) -> str:
        ...

    def mime_type(self) -> str:
        ...

    def read_all_bytes(self) -> bytes:
        ...


@dataclass(frozen=True)
class FieldRecord:
    """One multipart form field."""

    name: str
    contents: Any
    filename: Optional[str] = None
    mime_type: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.filename is not None
