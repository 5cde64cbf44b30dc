"""
Field permission conditions for Protector.
Implements the condition types a grant can attach to a field.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..types.errors import InvalidRuleError
from .context import insecurely


class PermissionCondition(ABC):
    """
    Condition a proposed field value has to satisfy.
    """

    @abstractmethod
    def matches(self, candidate: Any) -> bool:
        """
        Evaluate the condition against a proposed value.

        Args:
            candidate: The value proposed for the field

        Returns:
            bool: True if the value is allowed, False otherwise
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert condition to dictionary representation."""
        pass


@dataclass(frozen=True)
class Unconditional(PermissionCondition):
    """Any value is allowed."""

    def matches(self, candidate: Any) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'unconditional'}


@dataclass(frozen=True)
class EqualsValue(PermissionCondition):
    """Only the given value is allowed."""
    value: Any

    def matches(self, candidate: Any) -> bool:
        return bool(candidate == self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'equals', 'value': self.value}


@dataclass(frozen=True)
class InRange(PermissionCondition):
    """
    Values between two bounds are allowed.

    The upper bound is inclusive unless exclude_end is set. Values that
    cannot be compared with the bounds never match.
    """
    low: Any
    high: Any
    exclude_end: bool = False

    def matches(self, candidate: Any) -> bool:
        try:
            if self.exclude_end:
                return bool(self.low <= candidate < self.high)
            return bool(self.low <= candidate <= self.high)
        except TypeError:
            return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'range',
            'low': self.low,
            'high': self.high,
            'exclude_end': self.exclude_end
        }


@dataclass(frozen=True)
class Predicate(PermissionCondition):
    """
    Values accepted by a callable are allowed.

    The callable runs in insecure mode so that inspecting a restricted
    object from inside it does not trigger another evaluation.
    """
    func: Callable[[Any], Any]

    def matches(self, candidate: Any) -> bool:
        with insecurely():
            return bool(self.func(candidate))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'predicate',
            'func': getattr(self.func, '__qualname__', repr(self.func))
        }


UNCONDITIONAL = Unconditional()


def between(low: Any, high: Any, exclude_end: bool = False) -> InRange:
    """Build an inclusive range condition (exclusive end on request)."""
    return InRange(low, high, exclude_end)


def build_condition(value: Any, action: Optional[str] = None,
                    field: Optional[str] = None) -> PermissionCondition:
    """
    Convert a condition value given to `can` into a PermissionCondition.

    None means unconditional, callables become predicates, ranges with a
    step of 1 become end-exclusive range conditions and any other value must
    be matched exactly.
    """
    if value is None:
        return UNCONDITIONAL
    if isinstance(value, PermissionCondition):
        return value
    if isinstance(value, range):
        if value.step != 1:
            raise InvalidRuleError(
                f"Range condition for {field!r} must have a step of 1, got {value.step}",
                action=action,
                field=field
            )
        return InRange(value.start, value.stop, exclude_end=True)
    if callable(value):
        return Predicate(value)
    return EqualsValue(value)
