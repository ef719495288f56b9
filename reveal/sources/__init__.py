"""
Share sources for reconstruction.
Each source yields one share document.
"""

from pathlib import Path

from reveal.errors import SourceError
from reveal.sources.base import ShareSource
from reveal.sources.encrypted import EncryptedFileSource
from reveal.sources.json_file import JsonFileSource

ENCRYPTED_SUFFIX = ".enc"


def open_source(path: str | Path, key: bytes = None) -> ShareSource:
    """Pick a source for a path: ".enc" files are encrypted, anything else is JSON."""
    path = Path(path)
    if path.suffix == ENCRYPTED_SUFFIX:
        if key is None:
            raise SourceError(f"{path} is encrypted but no key was given")
        return EncryptedFileSource(path, key)
    return JsonFileSource(path)


__all__ = [
    "ShareSource",
    "JsonFileSource",
    "EncryptedFileSource",
    "open_source",
]
