"""
Plain JSON share source.
One test-case file holding the "keys" entry and the share records.
"""

from pathlib import Path

from reveal.document import ShareDocument
from reveal.errors import SourceError
from reveal.sources.base import ShareSource


class JsonFileSource(ShareSource):
    """Share document stored as a JSON file on the local filesystem."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> ShareDocument:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise SourceError(f"{self.path} is not UTF-8 text: {e}") from e
        return ShareDocument.from_json(text)

    def save(self, document: ShareDocument) -> None:
        self.path.write_text(document.to_json(), encoding="utf-8")

    def describe(self) -> dict:
        return {
            "kind": "json",
            "location": str(self.path),
            "exists": self.path.exists(),
        }
