# Turn finished output into a downloadable file or clipboard text.
# Content is passed through untouched: no reformatting, no validation.

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import pyperclip

from .types import DataFormat, MIME_TYPES

FILE_STEM = "dummy-data"
FALLBACK_MIME = "text/plain"


def mime_type_for(fmt) -> str:
    try:
        return MIME_TYPES[DataFormat(getattr(fmt, "value", fmt))]
    except (ValueError, KeyError):
        return FALLBACK_MIME


def export_filename(fmt: Union[DataFormat, str]) -> str:
    return f"{FILE_STEM}.{getattr(fmt, 'value', fmt).lower()}"


@dataclass
class DownloadFile:
    filename: str
    mime_type: str
    content: str

    @property
    def data(self) -> bytes:
        return self.content.encode("utf-8")

    def save(self, directory: Union[str, Path] = ".") -> Path:
        path = Path(directory) / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        return path


def build_download(content: str, fmt: Union[DataFormat, str]) -> Optional[DownloadFile]:
    """None for empty content, otherwise the file as the browser/CLI should save it."""
    if not content:
        return None
    return DownloadFile(filename=export_filename(fmt), mime_type=mime_type_for(fmt), content=content)


def copy_to_clipboard(content: str, copy: Optional[Callable[[str], None]] = None) -> bool:
    """Put the exact text on the system clipboard. Returns False (and does nothing) when empty."""
    if not content:
        return False
    (copy or pyperclip.copy)(content)
    return True
