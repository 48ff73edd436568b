"""
Configuration loader for the sitesync JSON config file
"""
import os
import json
from pathlib import Path
from typing import Optional, Dict, Any

from ..exceptions import ConfigError
from .logger import get_logger

log = get_logger(__name__)

DEFAULT_CONFIG_FILE = "sitesync.json"

# Default configuration. Merged under whatever the config file provides.
DEFAULT_CONFIG: Dict[str, Any] = {
    "source_dir": "dist/",
    "bucket_name": "",
    "aws_profile": "",
    "aws_region": "",
    "endpoint_url": "",
    "max_workers": 16,
    "max_attempts": 3,
    "connect_timeout": 10,
    "read_timeout": 60,
    "ignore": [],
    "honor_ignore": False,
    "dry_run": False,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "SITESYNC_SOURCE_DIR": "source_dir",
    "SITESYNC_BUCKET": "bucket_name",
    "AWS_PROFILE": "aws_profile",
    "AWS_REGION": "aws_region",
}


class ConfigLoader:
    """Handles loading, merging and validating configuration."""

    @staticmethod
    def get_config_path(filename: Optional[str] = None) -> Path:
        """
        Get full path to the configuration file.

        Args:
            filename: Explicit path, or None for ``sitesync.json`` in the cwd

        Returns:
            Path to the config file
        """
        return Path(filename) if filename else Path.cwd() / DEFAULT_CONFIG_FILE

    @staticmethod
    def load_config_json(filename: Optional[str] = None) -> Dict[str, Any]:
        """
        Load the config file merged over :data:`DEFAULT_CONFIG`.

        A missing default file is fine (defaults apply); a missing file
        that was named explicitly is not.

        Args:
            filename: Explicit config path from ``--config``

        Returns:
            Configuration dictionary with defaults

        Raises:
            ConfigError: If the file is missing (when explicit) or invalid
        """
        config = dict(DEFAULT_CONFIG)
        config["ignore"] = list(DEFAULT_CONFIG["ignore"])
        config_path = ConfigLoader.get_config_path(filename)

        if not config_path.exists():
            if filename:
                raise ConfigError(f"Config file not found: {config_path}")
            log.debug("No %s found, using defaults", config_path)
            return config

        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error loading {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")

        for key, value in data.items():
            if key not in DEFAULT_CONFIG:
                log.warning("Unknown config key '%s' in %s (ignored)", key, config_path)
                continue
            config[key] = value

        log.debug("Loaded configuration from %s", config_path)
        return config

    @staticmethod
    def apply_env_overrides(config: Dict[str, Any], environ=None) -> Dict[str, Any]:
        """Overlay non-empty environment variables from :data:`ENV_OVERRIDES`."""
        environ = os.environ if environ is None else environ
        for env_name, key in ENV_OVERRIDES.items():
            value = environ.get(env_name, "").strip()
            if value:
                config[key] = value
        return config

    @staticmethod
    def apply_cli_overrides(config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Overlay command-line flags that were actually given.

        Args:
            config: Configuration dictionary
            args: Parsed argparse namespace

        Returns:
            The updated configuration
        """
        mapping = {
            'source': 'source_dir',
            'bucket': 'bucket_name',
            'profile': 'aws_profile',
            'region': 'aws_region',
            'endpoint_url': 'endpoint_url',
            'workers': 'max_workers',
        }
        for attr, key in mapping.items():
            value = getattr(args, attr, None)
            if value is not None:
                config[key] = value

        extra_ignore = getattr(args, 'ignore', None)
        if extra_ignore:
            config['ignore'] = list(config.get('ignore') or []) + list(extra_ignore)
        if getattr(args, 'honor_ignore', False):
            config['honor_ignore'] = True
        if getattr(args, 'dry_run', False):
            config['dry_run'] = True
        return config

    @staticmethod
    def validate(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check the merged configuration.

        Raises:
            ConfigError: On a missing bucket/source or a mistyped setting
        """
        if not str(config.get('bucket_name') or '').strip():
            raise ConfigError(
                "No destination bucket configured "
                f"(set bucket_name in {DEFAULT_CONFIG_FILE}, SITESYNC_BUCKET or --bucket)"
            )
        if not str(config.get('source_dir') or '').strip():
            raise ConfigError("No source directory configured")

        for key in ('max_workers', 'max_attempts'):
            value = config.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{key} must be a positive integer, got {value!r}")

        for key in ('connect_timeout', 'read_timeout'):
            value = config.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"{key} must be a positive number, got {value!r}")

        # JSON "false" is a truthy string
        for key in ('dry_run', 'honor_ignore'):
            if not isinstance(config.get(key), bool):
                raise ConfigError(f"{key} must be true or false, got {config.get(key)!r}")

        if not isinstance(config.get('ignore'), (list, tuple, set)):
            raise ConfigError("ignore must be a list of paths")
        return config


def load_config(filename=None, args=None, environ=None) -> Dict[str, Any]:
    """
    Build the effective configuration: defaults, file, environment, flags.

    Args:
        filename: Explicit config path
        args: Optional argparse namespace with flag overrides
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated configuration dictionary
    """
    config = ConfigLoader.load_config_json(filename)
    ConfigLoader.apply_env_overrides(config, environ)
    if args is not None:
        ConfigLoader.apply_cli_overrides(config, args)
    return ConfigLoader.validate(config)
