"""Tests for utility modules.

Test Files and Coverage:
========================

| Test File           | Test Classes        | Tested Constructs                 | Tested Functionalities              |
|---------------------|---------------------|-----------------------------------|-------------------------------------|
| test_filesystem.py  | ClassifyTest        | classify(), NodeKind              | Kind mapping from lstat results     |
|                     | LocalFileSystemTest | LocalFileSystem                   | No-follow stat, listing, readlink   |
| test_varint.py      | VarintTest          | encode_varint(), decode_varint()  | Known encodings, offsets, errors    |
| test_profiling.py   | ProfilingTest       | profile_function(), profile_main  | Environment switch, dump files      |
"""
