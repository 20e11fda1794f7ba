"""linear-cli configuration loader with .env override support.

Configuration is layered, lowest precedence first:
1. Built-in defaults (endpoint, capitalization markers, limits)
2. Optional YAML file (LINEAR_CLI_CONFIG or --config)
3. Environment variables, after .env has been loaded by python-dotenv

Usage:
    from linear_cli.config import load_config

    config = load_config()
    client = LinearClient(config.api_key, config.api_url)

YAML example:
    api_url: https://api.linear.app/graphql
    default_team: Engineering
    capitalization_labels:
      - capitalization
      - capex
      - fixed asset
    max_limit: 100
    page_size: 50
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from linear_cli.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_CAPITALIZATION_LABELS = ["capitalization", "capex", "fixed asset"]

# Environment variable -> config field
ENV_OVERRIDES = {
    "LINEAR_API_KEY": "api_key",
    "LINEAR_API_URL": "api_url",
    "LINEAR_DEFAULT_TEAM": "default_team",
}


class LinearCliConfig(BaseModel):
    """linear-cli configuration."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    default_team: Optional[str] = None

    # Label substrings that mark an issue or project as capitalized
    capitalization_labels: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CAPITALIZATION_LABELS)
    )

    # Upper bound for --limit on list commands
    max_limit: int = Field(default=100, gt=0)

    # Page size used when walking paginated connections
    page_size: int = Field(default=50, gt=0, le=250)

    @field_validator("capitalization_labels")
    @classmethod
    def _strip_labels(cls, labels: List[str]) -> List[str]:
        cleaned = [label.strip() for label in labels if label and label.strip()]
        if not cleaned:
            raise ValueError("capitalization_labels must contain at least one label")
        return cleaned

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        env_file: Optional[str] = None,
        require_api_key: bool = True,
    ) -> "LinearCliConfig":
        """Load configuration from YAML + environment.

        Args:
            config_path: Path to a YAML config file (falls back to LINEAR_CLI_CONFIG)
            env_file: Path to a .env file (python-dotenv searches upwards when omitted)
            require_api_key: Raise when no API key is configured

        Returns:
            LinearCliConfig instance with merged YAML + environment configuration

        Raises:
            ConfigurationError: If the config file is missing or invalid, or the
                API key is required and absent
        """
        load_dotenv(env_file, override=False)

        data: Dict[str, Any] = {}

        config_path = config_path or os.getenv("LINEAR_CLI_CONFIG")
        if config_path:
            data.update(_read_yaml(Path(config_path)))

        for env_var, field_name in ENV_OVERRIDES.items():
            if value := os.getenv(env_var):
                data[field_name] = value

        if not data.get("api_key"):
            if require_api_key:
                raise ConfigurationError(
                    "Linear API key is required! Please set LINEAR_API_KEY in your .env file."
                )
            data["api_key"] = ""

        try:
            config = cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug(f"Loaded configuration (api_url={config.api_url})")
        return config


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            content = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse config file {path}: {e}") from e

    if not isinstance(content, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    logger.info(f"Loaded config file {path}")
    return content


def load_config(config_path: Optional[str] = None, require_api_key: bool = True) -> LinearCliConfig:
    """Load linear-cli configuration.

    Args:
        config_path: Optional YAML config path
        require_api_key: Raise ConfigurationError when LINEAR_API_KEY is unset

    Returns:
        LinearCliConfig instance
    """
    return LinearCliConfig.load(config_path=config_path, require_api_key=require_api_key)
