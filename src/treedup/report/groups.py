from pathlib import Path
from typing import Iterator, NamedTuple


class DuplicateGroup(NamedTuple):
    """Paths that share one fingerprint."""
    fingerprint: bytes
    paths: list[Path]

    @property
    def hex(self) -> str:
        return self.fingerprint.hex().upper()


class DuplicateGroups:
    """Multimap from fingerprint to the paths that produced it.

    add() has the success-observer signature, so an instance can be handed to
    fingerprint() directly or forwarded to from a wider observer.
    """

    def __init__(self):
        self._paths: dict[bytes, list[Path]] = {}
        self._fingerprints: dict[Path, bytes] = {}

    def add(self, path: Path, fingerprint: bytes) -> None:
        self._paths.setdefault(fingerprint, []).append(path)
        self._fingerprints[path] = fingerprint

    def __len__(self):
        """Number of fingerprinted paths."""
        return len(self._fingerprints)

    def paths_for(self, fingerprint: bytes) -> list[Path]:
        return list(self._paths.get(fingerprint, []))

    def fingerprint_of(self, path: Path) -> bytes | None:
        return self._fingerprints.get(path)

    def items(self) -> Iterator[tuple[Path, bytes]]:
        """Every fingerprinted path with its fingerprint, in discovery order."""
        yield from self._fingerprints.items()

    def duplicates(self) -> Iterator[DuplicateGroup]:
        """Groups of two or more paths, ordered by fingerprint."""
        for fingerprint in sorted(self._paths):
            paths = self._paths[fingerprint]
            if len(paths) >= 2:
                yield DuplicateGroup(fingerprint, list(paths))
