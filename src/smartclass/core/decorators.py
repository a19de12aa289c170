"""Decorator helper for defining methods (source of truth).

``method(cls, *, name=None, virtual=False)``

- Returns a decorator assigning the function to ``cls`` under ``name`` (the
  function name by default), exactly like ``cls.<name> = func``: the method
  table and any virtual resolution of that name are updated at once.
- ``virtual=True`` then declares the name virtual on ``cls``.
- The decorator returns the original function unchanged, so one function can
  be stacked onto several classes.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

__all__ = ["method"]


def method(cls: Any, *, name: Optional[str] = None, virtual: bool = False) -> Callable:
    """Define the decorated function as a method of ``cls``.

    Args:
        cls: Target class descriptor.
        name: Optional method name (defaults to the function name).
        virtual: Also declare the method virtual on ``cls``.
    """

    def decorator(func: Callable) -> Callable:
        method_name = name or func.__name__
        setattr(cls, method_name, func)
        if virtual:
            cls.virtual(method_name)
        return func

    return decorator
