"""
load the config from config.yaml and environment variables
"""

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

DEFAULTS: Dict[str, Any] = {
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
    'fetcher': {
        'follow_redirects': True,
    },
}

# Only logging is tunable from the environment; fetch behavior comes from the file.
ENV_OVERRIDES = {
    'LOG_LEVEL': ('logging', 'level'),
    'LOG_FORMAT': ('logging', 'format'),
}


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a YAML config file. If None, looks for config.yaml
                        next to this module and falls back to built-in defaults
                        when it is absent. An explicit path must exist.

        Raises:
            FileNotFoundError: explicit config_path does not exist.
            ValueError: invalid YAML or an invalid setting.
        """
        self._explicit = config_path is not None
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        self.config_path = Path(config_path)
        self._config = self._load_config()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        """Load defaults, merge the YAML file over them and apply environment overrides."""
        config = copy.deepcopy(DEFAULTS)

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            loaded = {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        self._merge(config, loaded)

        for env_var, (section, key) in ENV_OVERRIDES.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                config.setdefault(section, {})[key] = env_value

        return config

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]):
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _validate(self):
        for section in DEFAULTS:
            if not isinstance(self._config.get(section), dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

        follow_redirects = self.fetcher.get('follow_redirects')
        if not isinstance(follow_redirects, bool):
            raise ValueError(f"fetcher.follow_redirects must be true or false, got {follow_redirects!r}")

        level = self.logging.get('level')
        if not isinstance(logging.getLevelName(str(level).upper()), int):
            raise ValueError(f"Unknown logging.level: {level!r}")

        if not isinstance(self.logging.get('format'), str):
            raise ValueError("logging.format must be a string")

    def get(self, *keys, default=None):
        """Get a configuration value by nested keys, e.g. get('fetcher', 'follow_redirects')."""
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})
