"""Core runtime aggregator (source of truth).

Purpose: expose the object model building blocks from a single module. No
extra logic beyond imports/exports.

- ``descriptor`` → ``ClassDescriptor``, ``Object``, ``newclass``
- ``level`` → ``Level`` (one class level of an instance chain)
- ``decorators`` → ``method`` helper
- ``errors`` → ``AbstractMethodError``, ``CastError``, ``ProtectedClassError``
"""

from .decorators import method
from .descriptor import ClassDescriptor, Object, newclass
from .errors import AbstractMethodError, CastError, ProtectedClassError, SmartClassError
from .level import Level

__all__ = [
    "ClassDescriptor",
    "Object",
    "newclass",
    "method",
    "Level",
    "SmartClassError",
    "AbstractMethodError",
    "CastError",
    "ProtectedClassError",
]
