"""
Protector Python Package

Field- and action-level access control policies for Python objects.
"""

__version__ = "0.1.0"
__author__ = "Mauricio Fernandez"
__email__ = "mauricio.fernandez@siemens.com"

from .core.config import Config, get_config, set_config, configure
from .dsl import (
    Meta,
    Box,
    Protected,
    Restrictable,
    can,
    cannot,
    scope,
    between,
    insecurely,
    run_insecurely,
)
from .types.errors import (
    ProtectorError,
    UnrestrictedError,
    InvalidRuleError,
    ConfigurationError,
)

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "configure",
    "Meta",
    "Box",
    "Protected",
    "Restrictable",
    "can",
    "cannot",
    "scope",
    "between",
    "insecurely",
    "run_insecurely",
    "ProtectorError",
    "UnrestrictedError",
    "InvalidRuleError",
    "ConfigurationError",
]
