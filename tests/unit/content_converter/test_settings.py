"""Unit tests for content_converter.settings module."""

from unittest.mock import patch

import pytest

from textile2md.content_converter.errors import SettingsError
from textile2md.content_converter.settings import (
    ConverterSettings,
    SettingsLoader,
    parse_timeout,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove converter variables from the environment."""
    for var in (
        SettingsLoader.PANDOC_PATH_VAR,
        SettingsLoader.TARGET_FORMAT_VAR,
        SettingsLoader.TIMEOUT_VAR,
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestSettingsLoader:
    """Test cases for SettingsLoader."""

    def test_defaults_when_unset(self, clean_env):
        settings = SettingsLoader(load_env_file=False).get_settings()

        assert settings == ConverterSettings()
        assert settings.pandoc_path == "pandoc"
        assert settings.target_format == "markdown_github"
        assert settings.timeout == 30.0

    def test_reads_environment(self, clean_env):
        clean_env.setenv('TEXTILE2MD_PANDOC_PATH', '/opt/pandoc')
        clean_env.setenv('TEXTILE2MD_TARGET_FORMAT', 'gfm')
        clean_env.setenv('TEXTILE2MD_TIMEOUT', '7.5')

        settings = SettingsLoader(load_env_file=False).get_settings()

        assert settings == ConverterSettings('/opt/pandoc', 'gfm', 7.5)

    def test_zero_timeout_disables_limit(self, clean_env):
        clean_env.setenv('TEXTILE2MD_TIMEOUT', '0')

        assert SettingsLoader(load_env_file=False).get_settings().timeout is None

    def test_empty_pandoc_path_rejected(self, clean_env):
        clean_env.setenv('TEXTILE2MD_PANDOC_PATH', '  ')

        with pytest.raises(SettingsError) as exc_info:
            SettingsLoader(load_env_file=False).get_settings()

        assert exc_info.value.variable == 'TEXTILE2MD_PANDOC_PATH'

    def test_invalid_timeout_rejected(self, clean_env):
        clean_env.setenv('TEXTILE2MD_TIMEOUT', 'soon')

        with pytest.raises(SettingsError) as exc_info:
            SettingsLoader(load_env_file=False).get_settings()

        assert exc_info.value.variable == 'TEXTILE2MD_TIMEOUT'
        assert "number of seconds" in str(exc_info.value)

    @patch('textile2md.content_converter.settings.load_dotenv')
    def test_init_loads_dotenv(self, mock_load_dotenv):
        """SettingsLoader __init__ should call load_dotenv()."""
        SettingsLoader()

        mock_load_dotenv.assert_called_once()

    @patch('textile2md.content_converter.settings.load_dotenv')
    def test_init_can_skip_dotenv(self, mock_load_dotenv):
        SettingsLoader(load_env_file=False)

        mock_load_dotenv.assert_not_called()


class TestParseTimeout:
    """Test cases for parse_timeout."""

    @pytest.mark.parametrize("value,expected", [
        (30, 30.0),
        ("2.5", 2.5),
        (0, None),
        ("0", None),
    ])
    def test_valid_values(self, value, expected):
        assert parse_timeout(value) == expected

    @pytest.mark.parametrize("value", ["-1", -0.5, "abc", None])
    def test_invalid_values(self, value):
        with pytest.raises(SettingsError):
            parse_timeout(value)
