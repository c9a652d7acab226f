"""Configuration loading for bureaucrat.

The configuration lives in the repository work tree as a small YAML file:

    codes:
      - GH
    branch_prefixes:
      - feature
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAMES = (
    ".bureaucrat-config.yaml",
    ".bureaucrat-config.yml",
    ".bureaucrat.yaml",
    ".bureaucrat.yml",
)


class InvalidConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""
    pass


class ConfigurationNotFoundError(Exception):
    """Raised when no configuration file exists in the work tree."""
    pass


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidConfigurationError(f"'{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class Config:
    """Issue codes and the branch prefixes they are restricted to."""

    codes: tuple[str, ...]
    branch_prefixes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Create Config from a parsed YAML document.

        Raises
        ------
        InvalidConfigurationError
            When the document does not have the expected shape
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError("configuration must be a mapping")
        if "codes" not in data:
            raise InvalidConfigurationError("missing field 'codes'")
        return cls(
            codes=_string_list(data, "codes"),
            branch_prefixes=_string_list(data, "branch_prefixes"),
        )


def load_config(config_path: str | Path) -> Config:
    """Load configuration from a YAML file.

    Raises
    ------
    OSError
        If the file cannot be read
    InvalidConfigurationError
        If the file is not valid YAML or has the wrong shape
    """
    with open(config_path, "r", encoding="utf-8") as f:
        contents = f.read()

    try:
        data = yaml.safe_load(contents)
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(str(e)) from e

    return Config.from_dict(data)
