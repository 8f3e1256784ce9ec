"""Depth-first fingerprinting of a filesystem tree."""

import logging
from pathlib import Path
from typing import Callable

from .digest import directory_digest, file_digest, symlink_digest
from .errors import FingerprintError, FingerprintIOError, Ignored, UnsupportedKind
from ..utils.filesystem import FileSystem, LocalFileSystem, NodeKind, classify

logger = logging.getLogger(__name__)

SkipPredicate = Callable[[Path], bool]
SuccessObserver = Callable[[Path, bytes], None]
FailureObserver = Callable[[Path, FingerprintError], None]


def fingerprint(
        root: str | Path,
        skip: SkipPredicate,
        on_success: SuccessObserver,
        on_failure: FailureObserver,
        filesystem: FileSystem | None = None) -> bytes:
    """Fingerprint root and every node below it.

    The skip predicate is consulted exactly once per node, when the node is
    entered. A skipped node reaches neither observer; a directory silently
    leaves such children out of its digest, while a skipped root raises
    Ignored to the caller.

    Every other node ends in exactly one observer call: on_success(path, fp)
    before its fingerprint is returned, or on_failure(path, error) before the
    error is re-raised. A failing child aborts its directory at once, so the
    same error is reported again for each ancestor up to the root. Siblings
    after the failing child are never visited.

    Args:
        root: Path of the tree to fingerprint
        skip: Returns True for paths to exclude
        on_success: Receives each successfully fingerprinted node
        on_failure: Receives each node that could not be fingerprinted
        filesystem: Collaborator used for all filesystem access, LocalFileSystem by default

    Returns:
        The 32-byte fingerprint of root

    Raises:
        Ignored: root itself is matched by skip
        FingerprintError: root, or a node below it, could not be fingerprinted
    """
    if filesystem is None:
        filesystem = LocalFileSystem()

    return _Fingerprinter(skip, on_success, on_failure, filesystem).visit(Path(root))


class _DirectoryFrame:
    """A directory whose children are still being fingerprinted."""

    def __init__(self, path: Path, children: list[tuple[str, Path]]):
        self.path = path
        self.children = iter(children)
        self.entries: list[tuple[str, bytes]] = []
        self.pending: str | None = None


class _Fingerprinter:
    """Post-order walk driven by an explicit stack of open directories.

    Tree depth is bounded by the filesystem, not by the interpreter's
    recursion limit.
    """

    def __init__(self, skip: SkipPredicate, on_success: SuccessObserver, on_failure: FailureObserver,
                 filesystem: FileSystem):
        self._skip = skip
        self._on_success = on_success
        self._on_failure = on_failure
        self._filesystem = filesystem

    def visit(self, root: Path) -> bytes:
        if self._skip(root):
            raise Ignored(root)

        stack: list[_DirectoryFrame] = []
        try:
            result = self._enter(root, stack)
            while stack:
                frame = stack[-1]
                if result is not None:
                    frame.entries.append((frame.pending, result))
                    result = None

                child = next(frame.children, None)
                if child is not None:
                    name, child_path = child
                    if self._skip(child_path):
                        continue
                    frame.pending = name
                    result = self._enter(child_path, stack)
                    continue

                # the frame stays on the stack so a digest failure reaches it
                result = directory_digest(frame.path, frame.entries)
                stack.pop()
                self._on_success(frame.path, result)
        except FingerprintError as e:
            for frame in reversed(stack):
                self._on_failure(frame.path, e)
            raise

        return result

    def _enter(self, path: Path, stack: list[_DirectoryFrame]) -> bytes | None:
        """Fingerprint a leaf, or push a frame for a directory and return None."""
        logger.debug(f"Visiting: {path}")

        try:
            result = self._dispatch(path, stack)
        except FingerprintError as e:
            self._on_failure(path, e)
            raise

        if result is not None:
            self._on_success(path, result)
        return result

    def _dispatch(self, path: Path, stack: list[_DirectoryFrame]) -> bytes | None:
        try:
            st = self._filesystem.stat_no_follow(path)
        except OSError as e:
            raise FingerprintIOError(path, e) from e

        kind = classify(st)
        if kind == NodeKind.FILE:
            return self._visit_file(path)
        elif kind == NodeKind.DIRECTORY:
            stack.append(self._open_directory(path))
            return None
        elif kind == NodeKind.SYMLINK:
            return self._visit_symlink(path)
        else:
            raise UnsupportedKind(path, st.st_mode)

    def _visit_file(self, path: Path) -> bytes:
        try:
            with self._filesystem.open_for_read(path) as stream:
                return file_digest(stream)
        except OSError as e:
            raise FingerprintIOError(path, e) from e

    def _visit_symlink(self, path: Path) -> bytes:
        try:
            target = self._filesystem.read_link_target(path)
        except OSError as e:
            raise FingerprintIOError(path, e) from e

        logger.debug(f"{path} -> {target}")
        return symlink_digest(path, target)

    def _open_directory(self, path: Path) -> _DirectoryFrame:
        try:
            children = self._filesystem.list_children(path)
        except OSError as e:
            raise FingerprintIOError(path, e) from e
        return _DirectoryFrame(path, list(children))
