"""SmartClass public API surface (source of truth).

A single-inheritance object model where every instance is a chain of per-class
levels. Recreate the module with these rules:

- Public exports: ``Object`` (root class), ``newclass``, ``ClassDescriptor``,
  ``Level``, decorator helper ``method`` and the error classes.

Constraints
-----------
- Import must stay lightweight: no class creation beyond ``Object``.
- Version string lives here as ``__version__``.
"""

__version__ = "0.1.0"

from .core import (
    AbstractMethodError,
    CastError,
    ClassDescriptor,
    Level,
    Object,
    ProtectedClassError,
    SmartClassError,
    method,
    newclass,
)

__all__ = [
    "Object",
    "newclass",
    "ClassDescriptor",
    "Level",
    "method",
    "SmartClassError",
    "AbstractMethodError",
    "CastError",
    "ProtectedClassError",
]
