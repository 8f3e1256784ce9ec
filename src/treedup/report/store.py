"""Report storage for duplicate scan results."""

import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Iterable, Iterator

import mmh3
import msgpack
import plyvel

from .groups import DuplicateGroup
from ..utils.varint import encode_varint, decode_varint

# Key namespaces inside the report database
GROUP_PREFIX = b'g'
PATH_PREFIX = b'p'


def _pack(value: Any) -> bytes:
    result = msgpack.packb(value, unicode_errors='surrogateescape')
    assert isinstance(result, bytes)
    return result


def _unpack(data: bytes) -> Any:
    return msgpack.unpackb(data, unicode_errors='surrogateescape')


def _path_components(path: Path) -> list[str]:
    return [str(part) for part in path.parts]


@dataclass
class ReportManifest:
    """Summary of one scan, persisted as manifest.json in the report directory."""
    version: str = "1.0"
    """Report format version"""

    root: str = ""
    """Root path that was scanned, as given on the command line"""

    timestamp: str = ""
    """ISO format timestamp when the scan started"""

    ignore_patterns: list[str] = field(default_factory=list)
    """Glob patterns that were used to skip paths"""

    root_fingerprint: str | None = None
    """Uppercase hex fingerprint of the root, or None if the root could not be fingerprinted"""

    node_count: int = 0
    """Number of successfully fingerprinted nodes"""

    duplicate_groups: int = 0
    """Number of fingerprints shared by two or more paths"""

    failures: list[dict[str, str]] = field(default_factory=list)
    """One {path, kind, message} entry per failure reported during the scan"""

    def to_dict(self) -> dict[str, Any]:
        """Convert manifest to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportManifest":
        """Load manifest from dictionary."""
        return cls(**data)


def new_report_directory(base_dir: Path, timestamp: int) -> Path:
    """Choose an unused report directory path for a scan started at timestamp.

    Returns base_dir/<timestamp>.report, or base_dir/<timestamp>-N.report when
    earlier scans in the same second already used that name.
    """
    candidate = base_dir / f'{timestamp}.report'
    sequence = 0
    while candidate.exists():
        sequence += 1
        candidate = base_dir / f'{timestamp}-{sequence}.report'
    return candidate


class ReportStore:
    """Reads and writes a scan report directory.

    Layout:
        duplicates.txt: Human-readable listing of every duplicate group
        manifest.json: ReportManifest
        database/: LevelDB with two namespaces
            g<fingerprint> -> msgpack([path_components, ...]) for duplicate groups
            p<16-byte path hash><varint seq> -> msgpack([path_components, fingerprint]) for every node
    """

    def __init__(self, report_dir: Path) -> None:
        self.report_dir: Path = report_dir
        self.listing_path: Path = report_dir / 'duplicates.txt'
        self.manifest_path: Path = report_dir / 'manifest.json'
        self.database_path: Path = report_dir / 'database'
        self._database: plyvel.DB | None = None

    def create_report_directory(self) -> None:
        """Create the report directory and any missing parents."""
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def open_database(self, *, create_if_missing: bool = False) -> None:
        """Open the LevelDB database.

        Args:
            create_if_missing: If True, create the database if it doesn't exist.
                              If False, raise FileNotFoundError if database doesn't exist.
        """
        if create_if_missing:
            self.database_path.mkdir(parents=True, exist_ok=True)
        elif not self.database_path.exists():
            raise FileNotFoundError(f"Database directory not found: {self.database_path}")
        self._database = plyvel.DB(str(self.database_path), create_if_missing=create_if_missing)

    def close_database(self) -> None:
        if self._database is not None:
            self._database.close()
            self._database = None

    def __enter__(self) -> "ReportStore":
        self.open_database()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close_database()

    def _require_database(self) -> plyvel.DB:
        if self._database is None:
            raise RuntimeError("Database not opened. Use context manager or call open_database().")
        return self._database

    def write_fingerprint(self, path: Path, fingerprint: bytes) -> None:
        """Record the fingerprint of one node, replacing any earlier record for the same path.

        Paths whose hashes collide share a key prefix and are told apart by a
        varint sequence number appended to it.
        """
        prefixed_db = self._require_database().prefixed_db(PATH_PREFIX + self._compute_path_hash(path))
        components = _path_components(path)

        next_seq_num = 0
        for key, value in prefixed_db.iterator():
            seq_num, _ = decode_varint(key, 0)
            next_seq_num = max(next_seq_num, seq_num + 1)

            if _unpack(value)[0] == components:
                prefixed_db.put(key, _pack([components, fingerprint]))
                return

        prefixed_db.put(encode_varint(next_seq_num), _pack([components, fingerprint]))

    def lookup_fingerprint(self, path: Path) -> bytes | None:
        """Return the recorded fingerprint of path, or None if it was not fingerprinted."""
        prefixed_db = self._require_database().prefixed_db(PATH_PREFIX + self._compute_path_hash(path))
        components = _path_components(path)

        for _, value in prefixed_db.iterator():
            stored_components, fingerprint = _unpack(value)
            if stored_components == components:
                return fingerprint

        return None

    def write_group(self, group: DuplicateGroup) -> None:
        prefixed_db = self._require_database().prefixed_db(GROUP_PREFIX)
        prefixed_db.put(group.fingerprint, _pack([_path_components(path) for path in group.paths]))

    def read_group(self, fingerprint: bytes) -> DuplicateGroup | None:
        """Return the duplicate group for fingerprint, or None if fewer than two paths share it."""
        value = self._require_database().prefixed_db(GROUP_PREFIX).get(fingerprint)
        if value is None:
            return None
        return DuplicateGroup(fingerprint, [Path(*components) for components in _unpack(value)])

    def iter_groups(self) -> Iterator[DuplicateGroup]:
        """Every stored duplicate group, ordered by fingerprint."""
        for key, value in self._require_database().prefixed_db(GROUP_PREFIX).iterator():
            yield DuplicateGroup(key, [Path(*components) for components in _unpack(value)])

    def write_listing(self, groups: Iterable[DuplicateGroup]) -> None:
        """Write duplicates.txt: each fingerprint in hex, then its paths indented by four spaces."""
        with open(self.listing_path, 'w', encoding='utf-8', errors='surrogateescape') as f:
            for group in groups:
                f.write(f"{group.hex}\n")
                for path in group.paths:
                    f.write(f"    {path}\n")

    def write_manifest(self, manifest: ReportManifest) -> None:
        with open(self.manifest_path, 'w') as f:
            json.dump(manifest.to_dict(), f, indent=2)

    def read_manifest(self) -> ReportManifest:
        """Read existing report manifest.

        Raises:
            FileNotFoundError: If manifest.json doesn't exist
        """
        with open(self.manifest_path, 'r') as f:
            data = json.load(f)
        return ReportManifest.from_dict(data)

    @staticmethod
    def _compute_path_hash(path: Path) -> bytes:
        """Compute 128-bit Murmur3 hash for a path.

        Returns:
            16 bytes representing the 128-bit hash value
        """
        path_str = '\0'.join(str(part) for part in path.parts)
        hash_value = mmh3.hash128(path_str.encode('utf-8', 'surrogateescape'), signed=False)
        return hash_value.to_bytes(16, byteorder='big')
