"""
Encrypted share source.
A share document sealed at rest with AES-256-GCM.

File layout: 12-byte nonce followed by the GCM ciphertext of the JSON
document. The key never touches disk; callers pass it in (the CLI reads
it from an environment variable).
"""

import os
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from reveal.document import ShareDocument
from reveal.errors import SourceError
from reveal.sources.base import ShareSource

NONCE_SIZE = 12  # AES-256-GCM standard
KEY_SIZE = 32    # 256 bits
TAG_SIZE = 16


class EncryptedFileSource(ShareSource):
    """
    Share document encrypted with AES-256-GCM.
    A wrong key or a tampered file fails authentication and raises SourceError.
    """

    def __init__(self, path: str | Path, key: bytes):
        """
        Args:
            path: Location of the encrypted document.
            key: 32-byte AES key.
        """
        if len(key) != KEY_SIZE:
            raise SourceError(f"Encryption key must be {KEY_SIZE} bytes, got {len(key)}")
        self.path = Path(path)
        self._key = key

    def seal(self, document: ShareDocument) -> dict:
        """Encrypt and write a document to this source's path."""
        nonce = os.urandom(NONCE_SIZE)
        aesgcm = AESGCM(self._key)
        ciphertext = aesgcm.encrypt(nonce, document.to_json().encode("utf-8"), None)
        self.path.write_bytes(nonce + ciphertext)

        return {
            "kind": "encrypted",
            "location": str(self.path),
            "shares": len(document.records),
            "success": True,
        }

    def load(self) -> ShareDocument:
        try:
            encrypted = self.path.read_bytes()
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e}") from e

        if len(encrypted) < NONCE_SIZE + TAG_SIZE:
            raise SourceError(
                f"{self.path} is too short to be a sealed document ({len(encrypted)} bytes)"
            )

        nonce = encrypted[:NONCE_SIZE]
        ciphertext = encrypted[NONCE_SIZE:]

        aesgcm = AESGCM(self._key)
        try:
            plaintext = aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise SourceError(f"Cannot decrypt {self.path}: wrong key or corrupted file") from e
        try:
            text = plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceError(f"{self.path} does not hold UTF-8 text: {e}") from e
        return ShareDocument.from_json(text)

    def describe(self) -> dict:
        return {
            "kind": "encrypted",
            "location": str(self.path),
            "exists": self.path.exists(),
        }
