# infrastructure/files/local_file_ref.py
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class LocalFileRef:
    """
    File on the local filesystem, read lazily when the payload is encoded.
    """

    path: Union[str, Path]
    filename: Optional[str] = None
    content_type: Optional[str] = None

    def original_filename(self) -> str:
        return self.filename or Path(self.path).name

    def mime_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.original_filename())
        return guessed or DEFAULT_MIME_TYPE

    def read_all_bytes(self) -> bytes:
        return Path(self.path).read_bytes()


@dataclass(frozen=True)
class BytesFileRef:
    filename: str
    content: bytes
    content_type: str = DEFAULT_MIME_TYPE

    def original_filename(self) -> str:
        return self.filename

    def mime_type(self) -> str:
        return self.content_type

    def read_all_bytes(self) -> bytes:
        return bytes(self.content)
