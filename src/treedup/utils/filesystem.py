import os
import stat
from enum import StrEnum
from pathlib import Path
from typing import BinaryIO, Iterable, Protocol


class NodeKind(StrEnum):
    FILE = 'file'
    DIRECTORY = 'directory'
    SYMLINK = 'symlink'
    OTHER = 'other'


def classify(st: os.stat_result) -> NodeKind:
    """Map an lstat() result to the node kind the fingerprinter dispatches on."""
    if stat.S_ISREG(st.st_mode):
        return NodeKind.FILE
    elif stat.S_ISDIR(st.st_mode):
        return NodeKind.DIRECTORY
    elif stat.S_ISLNK(st.st_mode):
        return NodeKind.SYMLINK
    else:
        return NodeKind.OTHER


class FileSystem(Protocol):
    """Read-only view of a filesystem as consumed by the fingerprinter.

    Every method may raise OSError. Implementations never follow symlinks:
    stat_no_follow() reports a symlink as a symlink and read_link_target()
    returns the literal target text.
    """

    def stat_no_follow(self, path: Path) -> os.stat_result: ...

    def list_children(self, path: Path) -> Iterable[tuple[str, Path]]: ...

    def open_for_read(self, path: Path) -> BinaryIO: ...

    def read_link_target(self, path: Path) -> str: ...


class LocalFileSystem:
    """FileSystem backed by the operating system.

    Names and link targets that are not valid in the filesystem encoding come
    back as surrogate-escaped strings, so the digest layer can tell them apart
    when it encodes them.
    """

    def stat_no_follow(self, path: Path) -> os.stat_result:
        return path.stat(follow_symlinks=False)

    def list_children(self, path: Path) -> Iterable[tuple[str, Path]]:
        with os.scandir(path) as entries:
            # Materialize before the scandir handle is closed
            return [(entry.name, path / entry.name) for entry in entries]

    def open_for_read(self, path: Path) -> BinaryIO:
        return open(path, 'rb')

    def read_link_target(self, path: Path) -> str:
        return os.readlink(path)
