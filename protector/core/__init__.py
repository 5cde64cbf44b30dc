"""
Core settings for Protector.
"""

from .config import Config, get_config, set_config, configure

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "configure",
]
