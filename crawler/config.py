"""
load the config from config.yaml and .env
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    REQUIRED_KEYS = ('root_url', 'cache_path', 'output')
    SECTIONS = ('fetcher', 'politeness', 'extraction', 'logging')

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, reads config.yaml
                        from the current working directory.
        """
        if config_path is None:
            config_path = Path.cwd() / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'ROOT_URL': ('root_url',),
            'CACHE_PATH': ('cache_path',),
            'OUTPUT_PATH': ('output',),
            'FETCHER_TIMEOUT': ('fetcher', 'timeout'),
            'FETCHER_MAX_ATTEMPTS': ('fetcher', 'max_attempts'),
            'POLITENESS_MIN_DELAY': ('politeness', 'min_delay'),
            'POLITENESS_MAX_DELAY': ('politeness', 'max_delay'),
            'EXTRACTION_PATTERN': ('extraction', 'pattern'),
            'LOG_LEVEL': ('logging', 'level'),
            'LOG_FORMAT': ('logging', 'format'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if not isinstance(current.get(key), dict):
                        current[key] = {}
                    current = current[key]

                # patterns are kept verbatim, digits in them must not become ints
                final_key = config_path[-1]
                if env_var == 'EXTRACTION_PATTERN':
                    current[final_key] = env_value
                else:
                    current[final_key] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def _validate(self):
        missing = [key for key in self.REQUIRED_KEYS if not self._config.get(key)]
        if missing:
            raise ValueError(f"Missing required configuration keys: {', '.join(missing)}")

        bad_sections = [
            section for section in self.SECTIONS
            if self._config.get(section) is not None and not isinstance(self._config[section], dict)
        ]
        if bad_sections:
            raise ValueError(f"Configuration sections must be mappings: {', '.join(bad_sections)}")

    def get(self, *keys, default=None):
        """Get configuration value using dot notation.

        Args:
            *keys: Configuration keys (e.g., 'fetcher', 'timeout')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def root_url(self) -> str:
        """Get the URL of the document to scrape."""
        return str(self.get('root_url'))

    @property
    def cache_path(self) -> Path:
        """Get the absolute cache directory, creating it (non-recursively) if absent."""
        path = Path(self.get('cache_path')).resolve()
        path.mkdir(exist_ok=True)
        return path

    @property
    def output(self) -> Path:
        """Get the absolute output file path."""
        return Path(self.get('output')).resolve()

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher') or {}

    @property
    def politeness(self) -> Dict[str, Any]:
        """Get politeness configuration."""
        return self.get('politeness') or {}

    @property
    def extraction(self) -> Dict[str, Any]:
        """Get extraction configuration."""
        return self.get('extraction') or {}

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging') or {}
