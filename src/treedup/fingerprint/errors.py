"""Failures raised while fingerprinting a filesystem tree."""

from pathlib import Path


class FingerprintError(Exception):
    """Base class for every failure the fingerprinter reports.

    Attributes:
        path: The node the failure was raised for
        kind: Short label used when printing the failure
    """
    kind = 'Error'

    def __init__(self, path: Path, message: str | None = None):
        self.path = path
        super().__init__(message if message is not None else f"{self.kind}: {path}")


class FingerprintIOError(FingerprintError):
    """Stat, listing, read or readlink failed for a node."""
    kind = 'IOError'

    def __init__(self, path: Path, error: OSError):
        self.error = error
        super().__init__(path, f"{error.strerror or error}: {path}")


class EncodeError(FingerprintError):
    """A child name or symlink target is not representable as text."""
    kind = 'EncodeError'


class Ignored(FingerprintError):
    """The node was excluded by the skip predicate."""
    kind = 'Ignore'


class UnsupportedKind(FingerprintError):
    """The node is neither a regular file, a directory nor a symlink."""
    kind = 'UnsupportedKind'

    def __init__(self, path: Path, mode: int):
        self.mode = mode
        super().__init__(path, f"unsupported node kind (mode {mode:o}): {path}")


class DuplicateNameInvariantViolation(FingerprintError):
    """A directory listing produced the same child name twice."""
    kind = 'DuplicateName'

    def __init__(self, path: Path, name: str):
        self.name = name
        super().__init__(path, f"duplicated entry name {name!r} in {path}")
