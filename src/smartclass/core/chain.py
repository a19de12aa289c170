"""Instance chain constructor (source of truth).

``construct(cls, *args, **kwargs)``:

1. takes the virtual snapshot of ``cls`` (``VirtualTable.snapshot``);
2. builds one :class:`Level` per class of ``cls.ancestry()`` (most-derived
   first), each record starting as its own copy of the snapshot;
3. links every level to the next one up (``_level_super``) and back
   (``_level_lower``); the root level keeps ``TERMINAL`` above it;
4. calls ``init`` on the most-derived level with the constructor arguments;
5. returns the most-derived level.

The chain is complete before any user code runs. Exceptions raised by a user
constructor propagate unchanged and the half-initialised chain is dropped.
"""

from __future__ import annotations

from typing import Any

from .level import Level

__all__ = ["build_chain", "construct"]


def build_chain(cls: Any) -> Level:
    """Build the linked levels for ``cls`` without running any constructor."""
    snapshot = cls._virtuals.snapshot()
    classes = cls.ancestry()
    instance = lower = Level(next(classes), snapshot)
    for klass in classes:
        level = Level(klass, snapshot)
        object.__setattr__(lower, "_level_super", level)
        object.__setattr__(level, "_level_lower", lower)
        lower = level
    return instance


def construct(cls: Any, *args: Any, **kwargs: Any) -> Level:
    instance = build_chain(cls)
    instance.init(*args, **kwargs)
    return instance
