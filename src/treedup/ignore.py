import fnmatch
import os
import re
from pathlib import Path
from typing import Iterable


class IgnoreRules:
    """Skip predicate built from shell-style glob patterns.

    Patterns are matched against the whole path string as given to the
    scanner. Directories get a trailing separator first, so ``*/build/``
    matches a build directory, or a symbolic link to one, but not a file named
    build. ``*`` also matches across separators.

    Example:
        rules = IgnoreRules(['*/.git/', '*.pyc'])
        fingerprint(root, rules.matches, on_success, on_failure)
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: list[str] = list(patterns)
        for pattern in self.patterns:
            _validate(pattern)
        self._compiled = [re.compile(fnmatch.translate(pattern)) for pattern in self.patterns]

    def __bool__(self):
        return bool(self.patterns)

    def matches(self, path: Path) -> bool:
        if not self._compiled:
            return False

        candidate = str(path)
        if _is_directory(path) and not candidate.endswith(os.sep):
            candidate += os.sep

        return any(regex.match(candidate) for regex in self._compiled)


def _is_directory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _validate(pattern: str):
    """Reject character classes that are opened but never closed."""
    i = 0
    n = len(pattern)
    while i < n:
        if pattern[i] == '[':
            j = i + 1
            if j < n and pattern[j] == '!':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            while j < n and pattern[j] != ']':
                j += 1
            if j >= n:
                raise ValueError(f"Invalid ignore pattern {pattern!r}: unterminated character class")
            i = j
        i += 1
