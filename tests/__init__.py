"""Tests for treedup.

Test Files and Coverage:
========================

| Test File            | Test Classes                      | Tested Constructs              | Tested Functionalities                     |
|----------------------|-----------------------------------|--------------------------------|--------------------------------------------|
| test_ignore.py       | IgnoreRulesTest                   | IgnoreRules                    | Globs, directory separator, validation     |
| test_settings.py     | SettingsTest                      | Settings                       | TOML loading, dotted keys, discovery       |
| test_scanner.py      | ScannerTest, ScannerReportTest    | Scanner, ScanResult            | Grouping, failures, report directories     |
|                      | ConfigureLoggingTest              | Scanner logging configuration  | Log path and level from settings           |
| test_cli.py          | CliTest                           | treedup_main()                 | scan/show commands, config, exit status    |
| fingerprint/         | see fingerprint/__init__.py       |                                |                                            |
| report/              | see report/__init__.py            |                                |                                            |
| utils/               | see utils/__init__.py             |                                |                                            |
"""
