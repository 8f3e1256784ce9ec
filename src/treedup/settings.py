import os
import tomllib
from pathlib import Path

CONFIG_ENVIRONMENT_VARIABLE = 'TREEDUP_CONFIG'
DEFAULT_CONFIG_FILE = 'treedup.toml'

# Settings key constants
SETTING_IGNORE = 'ignore'
SETTING_REPORT_DIRECTORY = 'report.directory'
SETTING_REPORT_ENABLED = 'report.enabled'
SETTING_LOGGING_PATH = 'logging.path'
SETTING_LOGGING_LEVEL = 'logging.level'

DEFAULT_REPORT_DIRECTORY = 'outputs'


class Settings:
    """Read-only key-value view of a TOML configuration file.

    Example treedup.toml:
        ignore = ["*/.git/", "*.pyc"]

        [report]
        directory = "outputs"

        [logging]
        path = "treedup.log"
        level = "DEBUG"
    """

    def __init__(self, config_path: Path | None = None):
        """Load settings from config_path, or start empty when it is None.

        Raises:
            FileNotFoundError: config_path does not exist
            tomllib.TOMLDecodeError: config_path is not valid TOML
        """
        self.config_path = config_path
        self._settings = {}

        if config_path is not None:
            with open(config_path, 'rb') as f:
                self._settings = tomllib.load(f)

    @classmethod
    def discover(cls, config_path: str | os.PathLike | None = None) -> 'Settings':
        """Load settings from the first available source.

        Order: the explicit config_path, the TREEDUP_CONFIG environment
        variable, treedup.toml in the working directory. When none applies
        the settings are empty.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENVIRONMENT_VARIABLE)

        if config_path is not None:
            return cls(Path(config_path))

        default_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if default_path.is_file():
            return cls(default_path)

        return cls()

    def get(self, key: str, default=None):
        """Get a setting by dotted key path, e.g. 'report.directory'.

        Returns default if any component is missing or an intermediate value
        is not a table.
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def ignore_patterns(self) -> list[str]:
        patterns = self.get(SETTING_IGNORE, [])
        if isinstance(patterns, str):
            return [patterns]
        return list(patterns)

    @property
    def report_directory(self) -> Path:
        return Path(self.get(SETTING_REPORT_DIRECTORY, DEFAULT_REPORT_DIRECTORY))

    @property
    def report_enabled(self) -> bool:
        return bool(self.get(SETTING_REPORT_ENABLED, True))
