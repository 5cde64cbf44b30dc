"""
Permission boxes for Protector.

A box is the immutable result of evaluating a rule set for a subject and an
entry. Rules fill it through the `can`, `cannot` and `scope` functions while
the evaluation runs.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple
import logging
import warnings

from ..types.errors import InvalidRuleError
from .conditions import PermissionCondition, UNCONDITIONAL, build_condition


logger = logging.getLogger(__name__)

READ = "read"
CREATE = "create"
UPDATE = "update"
DESTROY = "destroy"

# Deprecated action names and the action they stand for
ACTION_ALIASES: Dict[str, str] = {
    "view": READ,
}


def resolve_action(action: str, stacklevel: int = 3) -> str:
    """
    Resolve an action name through the alias table.

    The deprecation warning for an alias is attributed stacklevel frames up,
    by default to the caller of the function resolving the action.
    """
    if not isinstance(action, str):
        raise InvalidRuleError(f"Action must be a string, got {action!r}")

    target = ACTION_ALIASES.get(action)
    if target is None:
        return action

    warnings.warn(
        f"Action '{action}' is deprecated, use '{target}' instead",
        DeprecationWarning,
        stacklevel=stacklevel
    )
    logger.debug(f"Resolved deprecated action '{action}' to '{target}'")
    return target


class Box:
    """
    Evaluated permissions of a subject over an entry.
    """

    __slots__ = ('_access', '_relation', '_scoped')

    def __init__(self, access: Mapping[str, Mapping[str, PermissionCondition]],
                 relation: Any = None, scoped: bool = False):
        self._access = MappingProxyType({
            action: MappingProxyType(dict(fields))
            for action, fields in access.items()
            if fields
        })
        self._relation = relation
        self._scoped = scoped

    @property
    def access(self) -> Mapping[str, Mapping[str, PermissionCondition]]:
        """Read-only mapping of action to field conditions."""
        return self._access

    @property
    def relation(self) -> Any:
        """Value of the last scope that fired, if any."""
        return self._relation

    @property
    def scoped(self) -> bool:
        return self._scoped

    def is_scoped(self) -> bool:
        return self._scoped

    def can(self, action: str, field: Optional[str] = None) -> bool:
        """
        Check whether an action (or one field of it) is granted.

        Args:
            action: Action name
            field: Optional field name

        Returns:
            bool: True if granted
        """
        fields = self._access.get(resolve_action(action))
        if not fields:
            return False
        if field is None:
            return True
        return field in fields

    def cannot(self, action: str, field: Optional[str] = None) -> bool:
        return not self.can(resolve_action(action), field)

    def readable(self, field: Optional[str] = None) -> bool:
        return self.can(READ, field)

    @property
    def destroyable(self) -> bool:
        return self.can(DESTROY)

    def is_destroyable(self) -> bool:
        return self.destroyable

    def creatable(self, values: Optional[Mapping[str, Any]] = None) -> bool:
        """Check whether an entry can be created, optionally with the given values."""
        return self._modifiable(CREATE, values)

    def updatable(self, values: Optional[Mapping[str, Any]] = None) -> bool:
        """Check whether an entry can be updated, optionally with the given values."""
        return self._modifiable(UPDATE, values)

    def first_uncreatable_field(self, values: Mapping[str, Any]) -> Optional[str]:
        """First field of values (in order) that cannot be set on create."""
        return self._first_unmodifiable_field(CREATE, values)

    def first_unupdatable_field(self, values: Mapping[str, Any]) -> Optional[str]:
        """First field of values (in order) that cannot be set on update."""
        return self._first_unmodifiable_field(UPDATE, values)

    def _modifiable(self, action: str, values: Optional[Mapping[str, Any]]) -> bool:
        if not self.can(action):
            return False
        if values is None:
            return True
        return self._first_unmodifiable_field(action, values) is None

    def _first_unmodifiable_field(self, action: str,
                                  values: Mapping[str, Any]) -> Optional[str]:
        fields = self._access.get(action, {})
        for field, value in values.items():
            condition = fields.get(field)
            if condition is None or not condition.matches(value):
                return field
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary summary."""
        return {
            'access': {action: list(fields) for action, fields in self._access.items()},
            'scoped': self._scoped
        }

    def __repr__(self) -> str:
        actions = ", ".join(self._access)
        return f"<Box actions=[{actions}] scoped={self._scoped}>"


class BoxBuilder:
    """
    Mutable accumulator behind a single evaluation.
    """

    def __init__(self, fields: Callable[[], Sequence[str]]):
        self._fields = fields
        self.access: Dict[str, Dict[str, PermissionCondition]] = {}
        self.relation: Any = None
        self.scope_was_set = False

    def can(self, action: str, *fields: Any, **conditions: Any) -> None:
        action = resolve_action(action)
        names, given = _split_fields(action, fields)
        given.update(conditions)

        granted: Dict[str, PermissionCondition] = {}
        for name in names:
            granted[name] = UNCONDITIONAL
        for name, value in given.items():
            if not isinstance(name, str):
                raise InvalidRuleError("Field names must be strings", action=action, field=name)
            granted[name] = build_condition(value, action=action, field=name)

        # Only a bare can(action) is a wildcard; an empty collection grants nothing
        if not fields and not conditions:
            granted = {name: UNCONDITIONAL for name in self._fields()}

        self.access.setdefault(action, {}).update(granted)

    def cannot(self, action: str, *fields: Any) -> None:
        action = resolve_action(action)
        names, given = _split_fields(action, fields)
        if given:
            raise InvalidRuleError("cannot does not take conditions", action=action)

        if not fields:
            self.access.pop(action, None)
            return

        granted = self.access.get(action)
        if granted is None:
            return
        for name in names:
            granted.pop(name, None)

    def scope(self, func: Callable[[], Any]) -> None:
        self.relation = func()
        self.scope_was_set = True

    def build(self, paranoid: bool = False) -> Box:
        return Box(
            self.access,
            relation=self.relation,
            scoped=self.scope_was_set or paranoid
        )


def _split_fields(action: str, items: Iterable[Any]) -> Tuple[List[str], Dict[Any, Any]]:
    """Split positional DSL arguments into field names and condition mappings."""
    names: List[str] = []
    conditions: Dict[Any, Any] = {}

    for item in items:
        if isinstance(item, str):
            names.append(item)
        elif isinstance(item, Mapping):
            conditions.update(item)
        elif isinstance(item, Iterable):
            for name in item:
                if not isinstance(name, str):
                    raise InvalidRuleError("Field names must be strings", action=action, field=name)
                names.append(name)
        else:
            raise InvalidRuleError("Field names must be strings", action=action, field=item)

    return names, conditions


_current_builder: ContextVar[Optional[BoxBuilder]] = ContextVar(
    'protector_current_builder', default=None
)


@contextmanager
def evaluating(builder: BoxBuilder) -> Iterator[BoxBuilder]:
    """Make builder the target of DSL calls for the duration of the block."""
    token = _current_builder.set(builder)
    try:
        yield builder
    finally:
        _current_builder.reset(token)


def current_builder() -> BoxBuilder:
    builder = _current_builder.get()
    if builder is None:
        raise InvalidRuleError("Protector DSL used outside of an evaluation")
    return builder


def can(action: str, *fields: Any, **conditions: Any) -> None:
    """
    Grant an action, or some of its fields.

    Fields are given as names, iterables of names or mappings of name to
    condition; keyword arguments are conditions as well. Without any field
    every known field is granted; an empty collection grants nothing.
    """
    current_builder().can(resolve_action(action), *fields, **conditions)


def cannot(action: str, *fields: Any) -> None:
    """Revoke some fields of an action, or the whole action without fields."""
    current_builder().cannot(resolve_action(action), *fields)


def scope(func: Callable[[], Any]) -> None:
    """Set the relation entries are scoped to."""
    current_builder().scope(func)
