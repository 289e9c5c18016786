"""Unit tests for cli.config module."""

import pytest

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError, ConfigFilesystemError
from src.cli.models import EnrichConfig


class TestConfigLoaderLoad:
    """Test cases for ConfigLoader.load."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = ConfigLoader.load(str(tmp_path / "missing.yaml"))

        assert config == EnrichConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("   \n", encoding="utf-8")

        assert ConfigLoader.load(str(path)) == EnrichConfig()

    def test_full_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "tenant: ' acme '\n"
            "max_concurrency: 4\n"
            "request_timeout: 12\n"
            "max_retries: 0\n",
            encoding="utf-8",
        )

        config = ConfigLoader.load(str(path))

        assert config.tenant == "acme"
        assert config.max_concurrency == 4
        assert config.request_timeout == 12.0
        assert isinstance(config.request_timeout, float)
        assert config.max_retries == 0

    def test_partial_config_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_concurrency: 2\n", encoding="utf-8")

        config = ConfigLoader.load(str(path))

        assert config.max_concurrency == 2
        assert config.tenant is None
        assert config.max_retries == 3

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("tenant: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML syntax"):
            ConfigLoader.load(str(path))

    def test_not_a_dictionary(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- tenant\n- acme\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="YAML dictionary"):
            ConfigLoader.load(str(path))

    def test_directory_is_filesystem_error(self, tmp_path):
        with pytest.raises(ConfigFilesystemError) as exc_info:
            ConfigLoader.load(str(tmp_path))

        assert exc_info.value.operation == "read"


class TestConfigLoaderValidation:
    """Test cases for field validation."""

    def test_unknown_field(self):
        with pytest.raises(ConfigError, match="Unknown fields: spaces"):
            ConfigLoader._parse_config({"spaces": []})

    @pytest.mark.parametrize("value", ["", "   ", 42])
    def test_bad_tenant(self, value):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader._parse_config({"tenant": value})

        assert exc_info.value.config_field == "tenant"

    @pytest.mark.parametrize("value", [0, -1, "4", True, 1.5])
    def test_bad_max_concurrency(self, value):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader._parse_config({"max_concurrency": value})

        assert exc_info.value.config_field == "max_concurrency"

    @pytest.mark.parametrize("value", [0, -3.5, "30", False])
    def test_bad_request_timeout(self, value):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader._parse_config({"request_timeout": value})

        assert exc_info.value.config_field == "request_timeout"

    @pytest.mark.parametrize("value", [-1, "3", True])
    def test_bad_max_retries(self, value):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader._parse_config({"max_retries": value})

        assert exc_info.value.config_field == "max_retries"

    def test_error_message_names_field(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader._parse_config({"max_retries": -1})

        assert str(exc_info.value).startswith("Configuration error in field 'max_retries'")
