"""Tests for report module.

Test Files and Coverage:
========================

| Test File                  | Test Classes                 | Tested Constructs                          | Tested Functionalities                  |
|----------------------------|------------------------------|--------------------------------------------|-----------------------------------------|
| test_groups.py             | DuplicateGroupsTest          | DuplicateGroups, DuplicateGroup            | Grouping, ordering, lookups             |
| test_report_store.py       | ReportStoreTest              | ReportStore, ReportManifest                | DB write/read, listing, manifest        |
|                            | NewReportDirectoryTest       | new_report_directory()                     | Timestamp naming, collisions            |
"""
