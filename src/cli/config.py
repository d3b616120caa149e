"""Editor configuration loading and validation.

The configuration is an optional YAML file:

    debounce_seconds: 1.0
    load_delay_seconds: 0.35
    io_workers: 4
    computation_workers: 2
    store_path: .telex-editor/pages.yaml
    api_url: https://api.telegra.ph

Every field is optional. A missing file yields the defaults.
"""

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, ConfigFilesystemError

DEFAULT_CONFIG_PATH = '.telex-editor/config.yaml'


@dataclass
class EditorConfig:
    """Tunables of the editor core.

    Attributes:
        debounce_seconds: Quiet window before a background draft save
        load_delay_seconds: Minimum delay before a fresh page copy is shown
        io_workers: Size of the I/O worker pool
        computation_workers: Size of the conversion worker pool
        store_path: YAML file of the local page store
        api_url: Telegraph API base URL (None: TELEGRAPH_API_URL or the default)
    """
    debounce_seconds: float = 1.0
    load_delay_seconds: float = 0.35
    io_workers: int = 4
    computation_workers: int = 2
    store_path: str = '.telex-editor/pages.yaml'
    api_url: Optional[str] = None


class ConfigLoader:
    """Handles configuration file loading, validation and saving."""

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> EditorConfig:
        """Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            EditorConfig (defaults when the file is missing or empty)

        Raises:
            ConfigFilesystemError: If file cannot be read (except FileNotFoundError)
            ConfigError: If the file is not valid YAML or a value is invalid
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return EditorConfig()
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        if not content.strip():
            return EditorConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return EditorConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Config must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: EditorConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        yaml_str = yaml.safe_dump(
            asdict(config),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'write', str(e))

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> EditorConfig:
        """Validate a raw config dictionary.

        Raises:
            ConfigError: On unknown fields or invalid values
        """
        known = {f.name for f in fields(EditorConfig)}
        unknown = sorted(str(key) for key in config_dict if key not in known)
        if unknown:
            raise ConfigError(f"Unknown field(s): {', '.join(unknown)}")

        config = EditorConfig()

        for name in ('debounce_seconds', 'load_delay_seconds'):
            if name in config_dict:
                value = config_dict[name]
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(f"Must be a number, got {type(value).__name__}", name)
                if value < 0:
                    raise ConfigError("Cannot be negative", name)
                setattr(config, name, float(value))

        for name in ('io_workers', 'computation_workers'):
            if name in config_dict:
                value = config_dict[name]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f"Must be an integer, got {type(value).__name__}", name)
                if value < 1:
                    raise ConfigError("Must be at least 1", name)
                setattr(config, name, value)

        if 'store_path' in config_dict:
            store_path = config_dict['store_path']
            if not isinstance(store_path, str) or not store_path.strip():
                raise ConfigError("Must be a non-empty string", 'store_path')
            config.store_path = store_path.strip()

        api_url = config_dict.get('api_url')
        if api_url is not None:
            if not isinstance(api_url, str) or not api_url.startswith(('http://', 'https://')):
                raise ConfigError("Must be an http(s) URL", 'api_url')
            config.api_url = api_url.rstrip('/')

        return config
