"""
Rule sets for Protector.

A Meta holds the ordered rules a protected type declares, together with
the field universe wildcard grants expand to, and evaluates them into a Box.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple
import inspect
import logging
import time

from ..core.config import get_config
from ..metrics.collector import get_global_collector
from ..types.errors import InvalidRuleError
from .box import Box, BoxBuilder, evaluating


logger = logging.getLogger(__name__)

MAX_RULE_ARITY = 2


def rule_arity(func: Callable[..., Any]) -> int:
    """
    Number of the (subject, entry) values a rule wants, from its signature.

    Rules taking *args get both values. Rules that require more positional
    arguments than can be supplied, or required keyword-only arguments, are
    rejected.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise InvalidRuleError(
            f"Cannot inspect rule {func!r}; pass its arity explicitly"
        ) from e

    positional = 0
    required = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return MAX_RULE_ARITY
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY,
                              inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
            if parameter.default is inspect.Parameter.empty:
                required += 1
        elif (parameter.kind == inspect.Parameter.KEYWORD_ONLY
              and parameter.default is inspect.Parameter.empty):
            raise InvalidRuleError(
                f"Rule {func!r} requires keyword argument '{parameter.name}'"
            )

    if required > MAX_RULE_ARITY:
        raise InvalidRuleError(
            f"Rule {func!r} requires {required} arguments, at most {MAX_RULE_ARITY} are supplied"
        )
    return min(positional, MAX_RULE_ARITY)


@dataclass(frozen=True)
class Rule:
    """A rule callable and the number of (subject, entry) values it receives."""
    func: Callable[..., Any]
    arity: int

    @classmethod
    def wrap(cls, func: Callable[..., Any], arity: Optional[int] = None) -> "Rule":
        if not callable(func):
            raise InvalidRuleError(f"Rule must be callable, got {func!r}")
        if arity is None:
            arity = rule_arity(func)
        elif not 0 <= arity <= MAX_RULE_ARITY:
            raise InvalidRuleError(f"Rule arity must be between 0 and {MAX_RULE_ARITY}, got {arity}")
        return cls(func, arity)

    def __call__(self, subject: Any, entry: Any) -> Any:
        return self.func(*(subject, entry)[:self.arity])


class Meta:
    """
    Ordered rule set of a protected type.

    Args:
        fields_provider: Zero-argument callable returning the field names of
            the type; resolved on first use and memoized
        model: The protected type, if any
    """

    def __init__(self, fields_provider: Optional[Callable[[], Iterable[str]]] = None,
                 model: Any = None, rules: Optional[Iterable[Rule]] = None):
        self.model = model
        self._fields_provider = fields_provider or tuple
        self._fields: Optional[Tuple[str, ...]] = None
        self._rules: List[Rule] = list(rules or ())

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def fields(self) -> Tuple[str, ...]:
        """Field universe of the type, resolved once."""
        if self._fields is None:
            self._fields = tuple(self._fields_provider())
        return self._fields

    @property
    def model_name(self) -> str:
        if self.model is None:
            return "anonymous"
        if isinstance(self.model, str):
            return self.model
        return getattr(self.model, '__name__', type(self.model).__name__)

    def add_rule(self, func: Optional[Callable[..., Any]] = None, *, arity: Optional[int] = None):
        """
        Append a rule. Usable as a decorator, with or without an explicit arity.

        Returns:
            The rule function, unchanged
        """
        if func is None:
            def decorator(f):
                return self.add_rule(f, arity=arity)
            return decorator

        self._rules.append(Rule.wrap(func, arity))
        return func

    def __lshift__(self, func: Callable[..., Any]) -> "Meta":
        self.add_rule(func)
        return self

    def inherit(self, model: Any = None,
                fields_provider: Optional[Callable[[], Iterable[str]]] = None) -> "Meta":
        """Create a rule set for a subtype, starting with a copy of these rules."""
        return Meta(
            fields_provider=fields_provider or self._fields_provider,
            model=model if model is not None else self.model,
            rules=self._rules
        )

    def evaluate(self, subject: Any, entry: Any) -> Box:
        """
        Run every rule for a subject and an entry.

        Args:
            subject: Actor requesting access
            entry: Protected object

        Returns:
            Box: Evaluated permissions
        """
        config = get_config()
        start_time = time.perf_counter()

        builder = BoxBuilder(lambda: self.fields)
        with evaluating(builder):
            for rule in self._rules:
                rule(subject, entry)

        box = builder.build(paranoid=config.paranoid)
        duration = time.perf_counter() - start_time

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Evaluated {len(self._rules)} rules of {self.model_name} "
                f"in {duration * 1000:.3f}ms: {box.to_dict()}"
            )
        if config.metrics_enabled:
            get_global_collector().record_evaluation(self.model_name, duration, len(self._rules))

        return box

    def __repr__(self) -> str:
        return f"<Meta model={self.model_name} rules={len(self._rules)}>"
