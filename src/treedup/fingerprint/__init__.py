"""Content fingerprints for files, symlinks and directory trees.

This package contains:
- digest: File, symlink and directory digest algorithms with their salts
- tree: The depth-first fingerprint() entry point
- errors: FingerprintError and its subclasses
"""
