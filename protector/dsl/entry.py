"""
Host class integration: declaring rules on a class and evaluating them
for its instances.
"""

from typing import Any, Callable, Optional, Tuple
import dataclasses
import inspect
import logging

from .base import Restrictable
from .box import Box
from .meta import Meta


logger = logging.getLogger(__name__)


class Protected(Restrictable):
    """
    Mixin for protected classes.

    Every class gets its own rule set. A subclass starts from a copy of the
    rules its nearest protected parent has when the subclass's rule set is
    first used.
    """

    @classmethod
    def protector_fields(cls) -> Tuple[str, ...]:
        """
        Field universe of the class.

        Uses __protected_fields__ when defined, then dataclass fields, then
        public class annotations.
        """
        declared = getattr(cls, '__protected_fields__', None)
        if declared is not None:
            return tuple(declared)
        if dataclasses.is_dataclass(cls):
            return tuple(f.name for f in dataclasses.fields(cls))

        names = []
        for klass in reversed(cls.__mro__):
            for name in inspect.get_annotations(klass):
                if not name.startswith('_') and name not in names:
                    names.append(name)
        return tuple(names)

    @classmethod
    def protector_meta(cls) -> Meta:
        """Rule set of the class, created on first use."""
        meta = cls.__dict__.get('_protector_meta')
        if meta is not None:
            return meta

        for base in cls.__mro__[1:]:
            if issubclass(base, Protected) and base is not Protected:
                meta = base.protector_meta().inherit(model=cls, fields_provider=cls.protector_fields)
                break
        else:
            meta = Meta(fields_provider=cls.protector_fields, model=cls)

        logger.debug(f"Created rule set for {cls.__name__} with {len(meta.rules)} inherited rules")
        cls._protector_meta = meta
        return meta

    @classmethod
    def protect(cls, func: Optional[Callable[..., Any]] = None, *, arity: Optional[int] = None):
        """Register a rule on the class. Usable as a decorator."""
        return cls.protector_meta().add_rule(func, arity=arity)

    def protector_box(self) -> Box:
        """Evaluate the class rules for the attached subject and this instance."""
        return type(self).protector_meta().evaluate(self.protector_subject, self)
