# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Package types provides shared type definitions for Protector.

This package contains the error hierarchy shared by the DSL, configuration
and metrics packages.
"""

from .errors import (
    ErrorCode,
    ProtectorError,
    UnrestrictedError,
    InvalidRuleError,
    ConfigurationError,
)

__all__ = [
    'ErrorCode',
    'ProtectorError',
    'UnrestrictedError',
    'InvalidRuleError',
    'ConfigurationError',
]
