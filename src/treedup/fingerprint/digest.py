"""Leaf and directory digest algorithms.

A file's fingerprint is the raw SHA-256 of its content. Symlinks and
directories prefix a fixed salt before hashing, so a symlink pointing at
``abc`` and a file containing ``abc`` get different fingerprints, as do a
directory and a symlink built from the same bytes. A file whose content
begins with one of the salts is still hashed as plain content.

The salt values are part of the fingerprint format; changing them changes
every directory and symlink fingerprint.
"""

import hashlib
from pathlib import Path
from typing import BinaryIO, Iterable

from .errors import DuplicateNameInvariantViolation, EncodeError

SALT_DIR = b'6aIecn4M7VoB'
SALT_SYMLINK = b'RXqENRdyGIpE'
FINGERPRINT_SIZE = 32
CHUNK_SIZE = 64 * 1024


def file_digest(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Hash a byte stream until a zero-length read.

    OSError from read() propagates unchanged; nothing is returned for a
    partially read stream.
    """
    hasher = hashlib.sha256()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        hasher.update(chunk)
    return hasher.digest()


def _encode(path: Path, text: str) -> bytes:
    try:
        return text.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodeError(path, f"not representable as text: {text!r} in {path}") from e


def symlink_digest(path: Path, target: str) -> bytes:
    """Fingerprint a symlink by the literal text of its target."""
    hasher = hashlib.sha256(SALT_SYMLINK)
    hasher.update(_encode(path, target))
    return hasher.digest()


def directory_digest(path: Path, entries: Iterable[tuple[str, bytes]]) -> bytes:
    """Fingerprint a directory from the (name, fingerprint) pairs of its children.

    Pairs are sorted by the UTF-8 bytes of the name, so listing order never
    affects the result. Only children that took part in the digest should be
    passed; an empty collection hashes the salt alone.

    Raises:
        DuplicateNameInvariantViolation: The same name appears twice
        EncodeError: A name cannot be encoded as UTF-8
    """
    seen: set[str] = set()
    encoded: list[tuple[bytes, bytes]] = []
    for name, fingerprint in entries:
        if name in seen:
            raise DuplicateNameInvariantViolation(path, name)
        seen.add(name)
        encoded.append((_encode(path, name), fingerprint))

    encoded.sort(key=lambda entry: entry[0])

    hasher = hashlib.sha256(SALT_DIR)
    for name, fingerprint in encoded:
        hasher.update(name)
        hasher.update(fingerprint)
    return hasher.digest()
