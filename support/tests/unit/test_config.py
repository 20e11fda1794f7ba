"""
Unit tests for linear_cli.config

Tests YAML loading, environment overrides, and validation errors.
"""

import pytest

from linear_cli.config import DEFAULT_API_URL, DEFAULT_CAPITALIZATION_LABELS, LinearCliConfig, load_config
from linear_cli.errors import ConfigurationError

pytestmark = pytest.mark.unit


@pytest.fixture
def no_dotenv(monkeypatch):
    """Keep a developer's .env out of the tests."""
    monkeypatch.setattr("linear_cli.config.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "linear.yaml"
    path.write_text(
        """
api_url: https://linear.example.test/graphql
default_team: Design
capitalization_labels:
  - capex
  - "  rd  "
max_limit: 50
"""
    )
    return path


class TestLoadConfig:
    """Test layered configuration loading."""

    def test_defaults_from_environment(self, monkeypatch, no_dotenv):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")

        config = load_config()

        assert config.api_key == "lin_api_env"
        assert config.api_url == DEFAULT_API_URL
        assert config.default_team is None
        assert config.capitalization_labels == DEFAULT_CAPITALIZATION_LABELS
        assert config.max_limit == 100

    def test_missing_api_key(self, no_dotenv):
        with pytest.raises(ConfigurationError, match="Linear API key is required"):
            load_config()

    def test_api_key_optional(self, no_dotenv):
        assert load_config(require_api_key=False).api_key == ""

    def test_yaml_file(self, monkeypatch, no_dotenv, config_file):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")

        config = load_config(str(config_file))

        assert config.api_url == "https://linear.example.test/graphql"
        assert config.default_team == "Design"
        assert config.capitalization_labels == ["capex", "rd"]
        assert config.max_limit == 50

    def test_environment_overrides_yaml(self, monkeypatch, no_dotenv, config_file):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")
        monkeypatch.setenv("LINEAR_DEFAULT_TEAM", "Engineering")
        monkeypatch.setenv("LINEAR_CLI_CONFIG", str(config_file))

        config = LinearCliConfig.load()

        assert config.default_team == "Engineering"
        assert config.max_limit == 50

    def test_missing_file(self, monkeypatch, no_dotenv, tmp_path):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(str(tmp_path / "absent.yaml"))

    def test_non_mapping_file(self, monkeypatch, no_dotenv, tmp_path):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(str(path))

    def test_schema_violation(self, monkeypatch, no_dotenv, tmp_path):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")
        path = tmp_path / "bad.yaml"
        path.write_text("page_size: 1000\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(str(path))

    def test_blank_capitalization_labels_rejected(self):
        with pytest.raises(ValueError):
            LinearCliConfig(api_key="k", capitalization_labels=["  "])
