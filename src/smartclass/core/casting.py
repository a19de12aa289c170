"""Casting engine (source of truth).

Casting locates, inside an instance's own chain, the level that represents a
given class. It never builds or mutates anything: the same query always
returns the same level object.

- ``try_cast(cls, instance)``: the instance itself when its class matches;
  otherwise search the lower links (towards more-derived classes, useful when
  a virtual method runs against an ancestor level), then the super links.
  ``None`` when the class is not part of the chain. Non-instances raise
  ``TypeError``.
- ``cast(cls, instance)``: same, but a miss raises :class:`CastError`.
- ``class_made(cls, value)``: ``False`` for anything that is not an instance
  (checked first, so any value is accepted), else whether ``try_cast`` hits.
"""

from __future__ import annotations

from typing import Any, Optional

from .errors import CastError
from .level import TERMINAL, Level

__all__ = ["cast", "class_made", "is_instance", "try_cast"]


def is_instance(value: Any) -> bool:
    """Return True when ``value`` is a level of some instance chain."""
    return isinstance(value, Level)


def try_cast(cls: Any, instance: Any) -> Optional[Level]:
    if not is_instance(instance):
        raise TypeError(f"Cannot cast {instance!r}: not a smartclass instance")
    if instance._level_class is cls:
        return instance

    node = instance._level_lower
    while node is not None:
        if node._level_class is cls:
            return node
        node = node._level_lower

    node = instance._level_super
    while node is not TERMINAL:
        if node._level_class is cls:
            return node
        node = node._level_super
    return None


def cast(cls: Any, instance: Any) -> Level:
    casted = try_cast(cls, instance)
    if casted is None:
        raise CastError(cls, instance)
    return casted


def class_made(cls: Any, value: Any) -> bool:
    if not is_instance(value):
        return False
    return try_cast(cls, value) is not None
