"""
Typed lookup results for string-keyed host access.

The host addresses configurations, source sets and tasks by name.
Every lookup returns a ``Lookup`` so callers decide explicitly what a
miss means instead of falling through on ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from smithywire.core.errors import MissingElementError, MissingTaskError

T = TypeVar("T")


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of looking up a named host element."""

    kind: str            # "task", "configuration", "source set", "extension"
    name: str
    value: T | None = None

    @property
    def found(self) -> bool:
        return self.value is not None

    def require(self) -> T:
        """Return the element, raising if it does not exist."""
        if self.value is None:
            if self.kind == "task":
                raise MissingTaskError(self.name)
            raise MissingElementError(self.kind, self.name)
        return self.value

    def or_none(self) -> T | None:
        return self.value
