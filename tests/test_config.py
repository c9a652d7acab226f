"""Tests for configuration loading and validation."""

import pytest

from bureaucrat.config import (
    CONFIG_FILENAMES,
    Config,
    InvalidConfigurationError,
    load_config,
)

MINIMAL_CONFIGURATION = """codes:
    - GH
"""

ADVANCED_CONFIGURATION = """codes:
    - GH
    - GIT
branch_prefixes:
    - feature
    - release
"""


class TestLoadConfig:
    """Test loading configuration files from disk."""

    @pytest.fixture
    def config_path(self, tmp_path):
        return tmp_path / ".bureaucrat-config.yaml"

    def test_load_minimal(self, config_path):
        config_path.write_text(MINIMAL_CONFIGURATION)

        config = load_config(config_path)

        assert config == Config(codes=("GH",), branch_prefixes=())

    def test_load_branch_prefixes(self, config_path):
        config_path.write_text(ADVANCED_CONFIGURATION)

        config = load_config(config_path)

        assert config.codes == ("GH", "GIT")
        assert config.branch_prefixes == ("feature", "release")

    def test_accepts_string_path(self, config_path):
        config_path.write_text(MINIMAL_CONFIGURATION)

        assert load_config(str(config_path)).codes == ("GH",)

    def test_empty_codes_allowed(self, config_path):
        config_path.write_text("codes: []\n")

        assert load_config(config_path) == Config(codes=())

    def test_unknown_keys_ignored(self, config_path):
        config_path.write_text(MINIMAL_CONFIGURATION + "colour: blue\n")

        assert load_config(config_path) == Config(codes=("GH",))

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "contents",
        [
            "",  # empty document
            "branch_prefixes:\n  - feature\n",  # missing codes
            "codes: GH\n",  # not a list
            "codes:\n  - 12\n",  # not a string
            "codes:\n  - GH\nbranch_prefixes: feature\n",
            "- GH\n",  # not a mapping
            "codes: [GH\n",  # invalid YAML
        ],
    )
    def test_invalid_configuration(self, config_path, contents):
        config_path.write_text(contents)

        with pytest.raises(InvalidConfigurationError):
            load_config(config_path)


class TestConfig:
    """Test the Config value itself."""

    def test_defaults_to_no_prefixes(self):
        assert Config(codes=("GH",)).branch_prefixes == ()

    def test_is_immutable(self):
        config = Config(codes=("GH",))
        with pytest.raises(AttributeError):
            config.codes = ("GG",)

    def test_from_dict_preserves_order(self):
        config = Config.from_dict({"codes": ["B", "A", "B"]})
        assert config.codes == ("B", "A", "B")

    def test_filenames_in_discovery_order(self):
        assert CONFIG_FILENAMES[0] == ".bureaucrat-config.yaml"
        assert CONFIG_FILENAMES[-1] == ".bureaucrat.yml"
