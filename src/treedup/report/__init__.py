"""Report module for duplicate grouping and persistence.

This package contains:
- groups: DuplicateGroups multimap from fingerprint to paths
- store: ReportStore and ReportManifest for the on-disk report directory
"""
