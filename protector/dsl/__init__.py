# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Package dsl implements rule declaration and evaluation for Protector.

Rules are plain callables taking up to two arguments (subject, entry). While
a rule set is evaluated they call `can`, `cannot` and `scope` to fill the
resulting Box.
"""

from .context import (
    insecurely,
    run_insecurely,
    is_insecure,
    insecure_depth
)

from .base import Restrictable

from .conditions import (
    PermissionCondition,
    Unconditional,
    EqualsValue,
    InRange,
    Predicate,
    UNCONDITIONAL,
    between,
    build_condition
)

from .box import (
    Box,
    BoxBuilder,
    ACTION_ALIASES,
    READ,
    CREATE,
    UPDATE,
    DESTROY,
    resolve_action,
    can,
    cannot,
    scope
)

from .meta import Meta, Rule, rule_arity

from .entry import Protected

__all__ = [
    # Restriction context
    'insecurely',
    'run_insecurely',
    'is_insecure',
    'insecure_depth',
    'Restrictable',

    # Conditions
    'PermissionCondition',
    'Unconditional',
    'EqualsValue',
    'InRange',
    'Predicate',
    'UNCONDITIONAL',
    'between',
    'build_condition',

    # Evaluation
    'Box',
    'BoxBuilder',
    'ACTION_ALIASES',
    'READ',
    'CREATE',
    'UPDATE',
    'DESTROY',
    'resolve_action',
    'can',
    'cannot',
    'scope',
    'Meta',
    'Rule',
    'rule_arity',

    # Host integration
    'Protected'
]
