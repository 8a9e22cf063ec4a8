"""
Configuration loading and store selection.

Settings come from an optional JSON file; environment variables take
precedence over file values:

  - TEAM_MANAGER_STORE      overrides store       (file | sql | memory)
  - TEAM_MANAGER_DATA_DIR   overrides data_dir
  - DATABASE_URL            overrides database_url
  - TEAM_MANAGER_LOG_LEVEL  overrides log_level
"""

import json
import logging
import os
from typing import Dict, Optional

from .database import DEFAULT_DATABASE_URL
from .errors import ConfigError
from .stores import FileStore, KeyValueStore, MemoryStore, SqlStore

logger = logging.getLogger('team_manager.config')

DEFAULT_CONFIG_PATH = 'config.json'

STORE_CHOICES = ('file', 'sql', 'memory')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_CONFIG: Dict = {
    'store': 'file',
    'data_dir': '.team_manager',
    'database_url': DEFAULT_DATABASE_URL,
    'log_level': 'WARNING',
}

_ENV_OVERRIDES = {
    'store': 'TEAM_MANAGER_STORE',
    'data_dir': 'TEAM_MANAGER_DATA_DIR',
    'database_url': 'DATABASE_URL',
    'log_level': 'TEAM_MANAGER_LOG_LEVEL',
}


def load_config(config_path: Optional[str] = DEFAULT_CONFIG_PATH) -> Dict:
    """Load configuration from a JSON file with environment variable support.

    A missing file is not an error: defaults apply.

    Raises:
        ConfigError: If the file is not a JSON object, names an unknown
            store or log level, or gives a path/URL that is not text.
    """
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                loaded = json.load(f)
        except (ValueError, RecursionError, IOError) as e:
            raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(loaded)
    elif config_path:
        logger.debug("Config file %s not found, using defaults", config_path)

    for key, env_name in _ENV_OVERRIDES.items():
        if os.getenv(env_name):
            config[key] = os.getenv(env_name)

    if config['store'] not in STORE_CHOICES:
        raise ConfigError(
            f"Unknown store {config['store']!r}; expected one of {', '.join(STORE_CHOICES)}"
        )
    for key in ('data_dir', 'database_url'):
        if not isinstance(config[key], str) or not config[key]:
            raise ConfigError(f"Config value {key!r} must be a non-empty string")
    level = config['log_level']
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )
    return config


def build_store(config: Dict) -> KeyValueStore:
    """Instantiate the store backend named by ``config['store']``."""
    kind = config.get('store', 'file')
    if kind == 'file':
        return FileStore(config.get('data_dir') or DEFAULT_CONFIG['data_dir'])
    if kind == 'sql':
        return SqlStore(config.get('database_url') or DEFAULT_DATABASE_URL)
    if kind == 'memory':
        return MemoryStore()
    raise ConfigError(f"Unknown store {kind!r}")
