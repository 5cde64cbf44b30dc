"""
Restrictable instances: the subject an object is restricted under.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..types.errors import UnrestrictedError
from .context import is_insecure


@dataclass(frozen=True)
class _Attachment:
    """Wrapper telling an attached None apart from no attachment at all."""
    subject: Any


class Restrictable:
    """
    Mixin giving an instance an attachable restriction subject.

    The subject is the actor the instance is restricted under. Any value,
    None included, can be attached.
    """

    _protector_attachment: Optional[_Attachment] = None

    def restrict(self, subject: Any) -> "Restrictable":
        """Attach a subject and return self for chaining."""
        self._protector_attachment = _Attachment(subject)
        return self

    def unrestrict(self) -> "Restrictable":
        """Detach the subject, if any."""
        self._protector_attachment = None
        return self

    @property
    def protector_subject(self) -> Any:
        """The attached subject; raises UnrestrictedError if none is attached."""
        if self._protector_attachment is None:
            raise UnrestrictedError(target=self)
        return self._protector_attachment.subject

    def has_protector_subject(self) -> bool:
        return self._protector_attachment is not None

    def is_restricted(self) -> bool:
        """True iff a subject is attached and insecure mode is off."""
        return self._protector_attachment is not None and not is_insecure()
