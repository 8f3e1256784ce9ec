import datetime
import logging
import time
from pathlib import Path
from typing import Callable, NamedTuple

from .fingerprint.errors import FingerprintError, Ignored
from .fingerprint.tree import fingerprint
from .ignore import IgnoreRules
from .report.groups import DuplicateGroups
from .report.store import ReportManifest, ReportStore, new_report_directory
from .settings import Settings, SETTING_LOGGING_PATH, SETTING_LOGGING_LEVEL
from .utils.filesystem import FileSystem

logger = logging.getLogger(__name__)


def configure_logging_from_settings(settings: Settings) -> bool:
    """Configure logging from logging.path and logging.level if a path is set.

    Preserves the current logging level when logging.level is absent.

    Returns:
        True if logging was configured, False otherwise
    """
    log_path_setting = settings.get(SETTING_LOGGING_PATH)
    if not log_path_setting:
        return False

    level_setting = settings.get(SETTING_LOGGING_LEVEL)
    if level_setting is not None:
        level = getattr(logging, str(level_setting).upper())
    else:
        level = logging.root.level if logging.root.level != logging.NOTSET else logging.INFO

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        filename=str(log_path_setting),
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return True


class ScanResult(NamedTuple):
    """Outcome of one scan.

    Attributes:
        root: The scanned path
        root_fingerprint: Fingerprint of root, or None if root failed or was ignored
        groups: Every successfully fingerprinted path, grouped by fingerprint
        failures: (path, error) for every failure reported, ancestors included
        report_dir: Report directory written for this scan, if any
    """
    root: Path
    root_fingerprint: bytes | None
    groups: DuplicateGroups
    failures: list[tuple[Path, FingerprintError]]
    report_dir: Path | None


class Scanner:
    """Workflow layer that runs the fingerprinter and collects its results.

    The fingerprinter itself keeps no state; Scanner provides the observers
    that group fingerprints, records and logs failures, and persists the
    outcome as a report directory.
    """

    def __init__(
            self,
            settings: Settings | None = None,
            ignore_patterns: list[str] | None = None,
            filesystem: FileSystem | None = None,
            on_failure: Callable[[Path, FingerprintError], None] | None = None):
        """
        Args:
            settings: Configuration; empty settings when None
            ignore_patterns: Extra globs, added after those from settings
            filesystem: Filesystem collaborator passed to the fingerprinter
            on_failure: Called for every failure in addition to the scanner's own bookkeeping

        Raises:
            ValueError: An ignore pattern is malformed
        """
        self._settings = settings if settings is not None else Settings()
        self._ignore = IgnoreRules(self._settings.ignore_patterns + list(ignore_patterns or []))
        self._filesystem = filesystem
        self._on_failure = on_failure

    @property
    def ignore_rules(self) -> IgnoreRules:
        return self._ignore

    def scan(self, root: str | Path, *, report_directory: Path | None = None,
             write_report: bool | None = None) -> ScanResult:
        """Fingerprint the tree at root and optionally write a report.

        Args:
            root: Tree to scan
            report_directory: Where report directories are created; report.directory from settings when None
            write_report: Whether to write a report; report.enabled from settings when None
        """
        root = Path(root)
        started = time.time()
        groups = DuplicateGroups()
        failures: list[tuple[Path, FingerprintError]] = []

        def record_failure(path: Path, error: FingerprintError):
            failures.append((path, error))
            logger.warning(f"{error.kind}: {path} ({error})")
            if self._on_failure is not None:
                self._on_failure(path, error)

        logger.info(f"Starting scan of: {root}")
        try:
            root_fingerprint = fingerprint(root, self._ignore.matches, groups.add, record_failure,
                                           filesystem=self._filesystem)
        except Ignored:
            logger.info(f"Root is excluded by ignore patterns: {root}")
            root_fingerprint = None
        except FingerprintError:
            root_fingerprint = None
        logger.info(f"Completed scan of: {root} (nodes={len(groups)}, failures={len(failures)})")

        if write_report is None:
            write_report = self._settings.report_enabled

        report_dir = None
        if write_report:
            if report_directory is None:
                report_directory = self._settings.report_directory
            report_dir = new_report_directory(report_directory, int(started))
            self._write_report(report_dir, root, root_fingerprint, groups, failures, started)

        return ScanResult(root, root_fingerprint, groups, failures, report_dir)

    def _write_report(self, report_dir: Path, root: Path, root_fingerprint: bytes | None,
                      groups: DuplicateGroups, failures: list[tuple[Path, FingerprintError]], started: float):
        duplicates = list(groups.duplicates())

        store = ReportStore(report_dir)
        store.create_report_directory()
        store.open_database(create_if_missing=True)
        try:
            for path, node_fingerprint in groups.items():
                store.write_fingerprint(path, node_fingerprint)
            for group in duplicates:
                store.write_group(group)
        finally:
            store.close_database()

        store.write_listing(duplicates)
        store.write_manifest(ReportManifest(
            root=str(root),
            timestamp=datetime.datetime.fromtimestamp(started, tz=datetime.UTC).isoformat(),
            ignore_patterns=list(self._ignore.patterns),
            root_fingerprint=root_fingerprint.hex().upper() if root_fingerprint is not None else None,
            node_count=len(groups),
            duplicate_groups=len(duplicates),
            failures=[{'path': str(path), 'kind': error.kind, 'message': str(error)} for path, error in failures],
        ))
        logger.info(f"Report written to: {report_dir}")
