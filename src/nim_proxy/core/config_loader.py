"""Configuration loader with YAML parsing and environment variable substitution"""

import os
import re
import yaml
from typing import Any, Dict, Mapping, Optional
from pathlib import Path
from dotenv import load_dotenv

from ..models.config import ProxyConfig, SystemConfig, UpstreamConfig


class ConfigLoader:
    """Load proxy configuration from an optional YAML file and the environment

    Environment variables always win over the file:

    - ``NIM_API_KEY``: upstream credential
    - ``NIM_API_BASE``: upstream base URL
    - ``NIM_PROXY_HOST`` / ``NIM_PROXY_PORT``: listen address
    - ``NIM_PROXY_LOG_LEVEL``: log level
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize configuration loader

        Args:
            config_path: Path to a YAML configuration file (optional)
            environ: Environment to read; the process environment, with
                ``.env`` loaded into it, when omitted
        """
        self.config_path = Path(config_path) if config_path else None
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.environ = environ

    def _substitute_env_vars(self, value: Any) -> Any:
        """
        Recursively substitute environment variables in configuration values

        Supports ${VAR_NAME} syntax for environment variable substitution

        Args:
            value: Configuration value (can be string, dict, list, etc.)

        Returns:
            Value with environment variables substituted
        """
        if isinstance(value, str):
            pattern = r'\$\{([^}]+)\}'

            def replace_env_var(match):
                var_name = match.group(1)
                env_value = self.environ.get(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' is not set")
                return env_value

            return re.sub(pattern, replace_env_var, value)

        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}

        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]

        else:
            return value

    def load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Returns:
            Raw configuration dictionary (empty when no file is configured)

        Raises:
            FileNotFoundError: If the configured file doesn't exist
            ValueError: If YAML parsing fails
        """
        if self.config_path is None:
            return {}

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to parse YAML configuration: {e}")

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a mapping")

        return self._substitute_env_vars(config_data)

    def _parse_upstream_config(self, data: Dict[str, Any]) -> UpstreamConfig:
        """Parse upstream configuration section"""
        upstream_data = dict(data.get('upstream') or {})

        # Override with environment variables if present
        if self.environ.get('NIM_API_KEY'):
            upstream_data['api_key'] = self.environ['NIM_API_KEY']
        if self.environ.get('NIM_API_BASE'):
            upstream_data['api_base'] = self.environ['NIM_API_BASE']

        return UpstreamConfig(**upstream_data)

    def _parse_system_config(self, data: Dict[str, Any]) -> SystemConfig:
        """Parse system configuration section"""
        system_data = dict(data.get('system') or {})

        # Override with environment variables if present
        if self.environ.get('NIM_PROXY_HOST'):
            system_data['host'] = self.environ['NIM_PROXY_HOST']
        if self.environ.get('NIM_PROXY_PORT'):
            system_data['port'] = int(self.environ['NIM_PROXY_PORT'])
        if self.environ.get('NIM_PROXY_LOG_LEVEL'):
            system_data['log_level'] = self.environ['NIM_PROXY_LOG_LEVEL']

        return SystemConfig(**system_data)

    def load(self) -> ProxyConfig:
        """
        Load and parse complete proxy configuration

        Returns:
            Validated ProxyConfig object

        Raises:
            FileNotFoundError: If the configured file doesn't exist
            ValueError: If configuration is invalid
        """
        raw_config = self.load_yaml()

        return ProxyConfig(
            upstream=self._parse_upstream_config(raw_config),
            system=self._parse_system_config(raw_config),
            model_mappings=raw_config.get('model_mappings'),
            default_model=raw_config.get('default_model'),
        )


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProxyConfig:
    """
    Convenience function to load configuration

    Args:
        config_path: Path to configuration file (defaults to NIM_PROXY_CONFIG_PATH env var, if set)
        environ: Environment to read instead of the process environment

    Returns:
        Loaded ProxyConfig
    """
    loader = ConfigLoader(config_path, environ)
    if loader.config_path is None and loader.environ.get('NIM_PROXY_CONFIG_PATH'):
        loader.config_path = Path(loader.environ['NIM_PROXY_CONFIG_PATH'])
    return loader.load()
