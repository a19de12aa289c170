"""Error kinds raised by the object model (source of truth).

Every error is raised synchronously at the call site and is never recovered
internally. Each kind also derives from the builtin exception a Python caller
would expect for the same failure, so generic handlers keep working:

- ``AbstractMethodError`` (``NotImplementedError``): a virtual method that was
  declared but never implemented down to the instantiated class was called.
- ``CastError`` (``TypeError``): a strict cast found no level of the target
  class inside the instance chain.
- ``ProtectedClassError`` (``AttributeError``): something tried to add methods
  or fields directly to the root class ``Object``.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SmartClassError",
    "AbstractMethodError",
    "CastError",
    "ProtectedClassError",
]


class SmartClassError(Exception):
    """Base class for object model errors."""


class AbstractMethodError(SmartClassError, NotImplementedError):
    """An abstract (never overridden) virtual method was invoked."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Attempt to call an undefined abstract method '{name}'")


class CastError(SmartClassError, TypeError):
    """Strict cast failed: the target class is not part of the instance chain."""

    def __init__(self, target: Any, instance: Any):
        self.target = target
        self.instance = instance
        super().__init__(f"Failed to cast {instance} to a {target.name()}")


class ProtectedClassError(SmartClassError, AttributeError):
    """The root class cannot be modified; subclass it instead."""

    def __init__(self, message: str = "May not modify the class 'Object'. Subclass it instead."):
        super().__init__(message)
