"""Tests for the fingerprint package.

Test Files and Coverage:
========================

| Test File          | Test Classes                 | Tested Constructs                                  | Tested Functionalities                      |
|--------------------|------------------------------|----------------------------------------------------|---------------------------------------------|
| test_digest.py     | FileDigestTest               | file_digest()                                      | Streaming, chunk boundaries, raw content    |
|                    | SymlinkDigestTest            | symlink_digest()                                   | Salt, kind separation, undecodable targets  |
|                    | DirectoryDigestTest          | directory_digest()                                 | Ordering, empty dirs, duplicate names       |
| test_tree.py       | FingerprintTreeTest          | fingerprint() on a real filesystem                 | Duplicates, skip, renames, observers        |
|                    | FingerprintFailureTest       | fingerprint() failure paths                        | Abort, ancestor reports, unsupported kinds  |
|                    | MemoryFileSystemTest         | fingerprint() with an injected FileSystem          | Listing order, handles, duplicate names     |
"""
