"""
Configuration module for Protector.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging
import os

import yaml

from ..types.errors import ConfigurationError


logger = logging.getLogger(__name__)

TRUTHY_VALUES = ('true', '1', 'yes', 'on')


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_VALUES
    if isinstance(value, int):
        return bool(value)
    raise ConfigurationError(f"{key} must be a boolean", config_key=key, config_value=value)


@dataclass(frozen=True)
class Config:
    """Process-wide settings of the policy engine"""
    # Report every box as scoped unless a rule proves otherwise
    paranoid: bool = False
    metrics_enabled: bool = False

    @classmethod
    def keys(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from a mapping, rejecting unknown keys"""
        unknown = set(data) - set(cls.keys())
        if unknown:
            key = sorted(unknown)[0]
            raise ConfigurationError(f"Unknown configuration key: {key}", config_key=key)

        return cls(**{key: _to_bool(key, value) for key, value in data.items()})

    @classmethod
    def from_env(cls, prefix: str = "PROTECTOR_") -> "Config":
        """Create configuration from environment variables"""
        return cls(
            paranoid=_to_bool("paranoid", os.getenv(f"{prefix}PARANOID", "false")),
            metrics_enabled=_to_bool(
                "metrics_enabled", os.getenv(f"{prefix}METRICS_ENABLED", "false")
            ),
        )

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "Config":
        """Load configuration from a JSON or YAML file"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        with open(path, 'r', encoding='utf-8') as f:
            if suffix == '.json':
                data = json.load(f)
            elif suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported configuration file format: {suffix}",
                    config_key="file",
                    config_value=str(path),
                )

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping", config_value=str(path))

        logger.info(f"Loaded protector configuration from {path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {key: getattr(self, key) for key in self.keys()}


_current_config: Config = Config()


def get_config() -> Config:
    """Get the process-wide configuration."""
    return _current_config


def set_config(config: Optional[Config]) -> Config:
    """Replace the process-wide configuration; None restores the defaults."""
    global _current_config
    _current_config = config if config is not None else Config()
    logger.debug(f"Protector configuration set: {_current_config.to_dict()}")
    return _current_config


def configure(**overrides: Any) -> Config:
    """Override selected settings of the process-wide configuration."""
    unknown = set(overrides) - set(Config.keys())
    if unknown:
        key = sorted(unknown)[0]
        raise ConfigurationError(f"Unknown configuration key: {key}", config_key=key)

    values = {key: _to_bool(key, value) for key, value in overrides.items()}
    return set_config(replace(get_config(), **values))
