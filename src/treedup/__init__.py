import logging

from .fingerprint.digest import SALT_DIR, SALT_SYMLINK, FINGERPRINT_SIZE
from .fingerprint.errors import (FingerprintError, FingerprintIOError, EncodeError, Ignored, UnsupportedKind,
                                 DuplicateNameInvariantViolation)
from .fingerprint.tree import fingerprint
from .ignore import IgnoreRules
from .report.groups import DuplicateGroup, DuplicateGroups
from .report.store import ReportManifest, ReportStore
from .scanner import Scanner, ScanResult
from .settings import Settings
from .utils.filesystem import FileSystem, LocalFileSystem, NodeKind

logging.getLogger(__name__).addHandler(logging.NullHandler())
