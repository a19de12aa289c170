"""Instance levels and the attribute resolution protocol (source of truth).

An instance is not one flat record but a chain of :class:`Level` objects, one
per class from the instantiated (most-derived) class up to ``Object``. Each
level carries:

- ``_level_class``: the class descriptor it represents;
- ``_level_record``: its own attribute record (``dict``), seeded with a copy of
  the virtual snapshot taken when the chain was built;
- ``_level_super``: the next level up, or :data:`TERMINAL` above the root;
- ``_level_lower``: the level built directly beneath it (``None`` at the
  most-derived level).

Read protocol (``read_attribute``)
----------------------------------
Only runs for names missing from the level slots. Walks the chain upward with
``lookup``; at every level the own record wins over the class method table.

- record hit: plain values are returned as stored; ``VirtualMethod`` markers
  are bound to the level they were found on;
- method table hit: the value is bound to the level owning that table through
  the descriptor protocol (functions become bound methods, data stays data).

Binding to the *owning* level is what makes inherited calls (and calls through
``self.super``) run against the ancestor's own record. Every read produces a
fresh bound callable; there is no shared forwarding state. Misses return
:data:`MISSING`; ``Level.__getattr__`` turns that into ``AttributeError``.

Write protocol (``write_attribute``)
------------------------------------
- name already in the level record: overwrite in place;
- otherwise, if a full lookup from the super level finds the name, the write
  moves up one level and the same rule applies there (shared attribute);
- otherwise the value is stored on the current level (private attribute). The
  owning class decides through ``_store_field``; the root class refuses.

Events
------
Operator hooks on ``Level`` dispatch to handlers stored in the *level's own*
class method table (see ``EVENT_NAMES`` in ``descriptor``). Binary handlers get
``(left, right)``; reflected operators swap the operands. Without a handler
Python defaults apply.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from .errors import ProtectedClassError

__all__ = [
    "Level",
    "MISSING",
    "TERMINAL",
    "lookup",
    "read_attribute",
    "write_attribute",
]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class _TerminalRecord:
    """Empty record above the root level: answers "not found" for any key."""

    __slots__ = ()

    def __getattr__(self, key: str) -> Any:
        raise AttributeError(key)

    def __setattr__(self, key: str, value: Any) -> None:
        raise ProtectedClassError()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<terminal record>"


TERMINAL: Any = _TerminalRecord()

_READ_ONLY = frozenset({"super"})


def lookup(level: "Level", key: str) -> Any:
    """Find ``key`` from ``level`` upward.

    Returns ``(holder, value, from_record)`` or ``MISSING``.
    """
    node = level
    while node is not TERMINAL:
        record = node._level_record
        if key in record:
            return node, record[key], True
        methods = node._level_class._methods
        if key in methods:
            return node, methods[key], False
        node = node._level_super
    return MISSING


def read_attribute(level: "Level", key: str) -> Any:
    found = lookup(level, key)
    if found is MISSING:
        return MISSING
    holder, value, from_record = found
    return holder._level_class._bind(holder, key, value, from_record=from_record)


def write_attribute(level: "Level", key: str, value: Any) -> "Level":
    """Store ``value`` following the shared/private rule; return the target level."""
    node = level
    while True:
        record = node._level_record
        if key in record:
            record[key] = value
            return node
        upper = node._level_super
        if upper is TERMINAL or lookup(upper, key) is MISSING:
            node._level_class._store_field(node, key, value)
            return node
        node = upper


def _handler(level: "Level", event: str) -> Optional[Callable]:
    return level._level_class._methods.get(event)


def _binary_event(event: str) -> Tuple[Callable, Callable]:
    def forward(self: "Level", other: Any) -> Any:
        handler = _handler(self, event)
        if handler is None:
            return NotImplemented
        return handler(self, other)

    def reflected(self: "Level", other: Any) -> Any:
        handler = _handler(self, event)
        if handler is None:
            return NotImplemented
        return handler(other, self)

    forward.__name__ = event
    reflected.__name__ = event.replace("__", "__r", 1)
    return forward, reflected


class Level:
    """One class level of an instance chain."""

    __slots__ = ("_level_class", "_level_record", "_level_super", "_level_lower", "__weakref__")

    def __init__(self, owner: Any, record: Optional[dict] = None):
        object.__setattr__(self, "_level_class", owner)
        object.__setattr__(self, "_level_record", dict(record or {}))
        object.__setattr__(self, "_level_super", TERMINAL)
        object.__setattr__(self, "_level_lower", None)

    @property
    def super(self) -> Any:
        """The next level up, usable as a full instance of the superclass."""
        return self._level_super

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_level_"):
            raise AttributeError(key)
        value = read_attribute(self, key)
        if value is MISSING:
            raise AttributeError(
                f"'{self._level_class.name()}' instance has no attribute '{key}'"
            )
        return value

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _READ_ONLY or key.startswith("_level_"):
            raise AttributeError(f"'{key}' is read-only on instances")
        write_attribute(self, key, value)

    def __delattr__(self, key: str) -> None:
        record = self._level_record
        if key not in record:
            raise AttributeError(key)
        del record[key]

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        handler = _handler(self, "__str__")
        if handler is None:
            return repr(self)
        return handler(self)

    def __repr__(self) -> str:
        bottom = self
        while bottom._level_lower is not None:
            bottom = bottom._level_lower
        name = self._level_class.name()
        if bottom is self:
            return f"<{name} instance at {id(self):#x}>"
        return f"<{name} level of {bottom._level_class.name()} instance at {id(bottom):#x}>"

    __hash__ = object.__hash__

    def __eq__(self, other: Any) -> Any:
        handler = _handler(self, "__eq__")
        if handler is None:
            return NotImplemented
        return handler(self, other)

    def __lt__(self, other: Any) -> Any:
        handler = _handler(self, "__lt__")
        if handler is None:
            return NotImplemented
        return handler(self, other)

    def __le__(self, other: Any) -> Any:
        handler = _handler(self, "__le__")
        if handler is None:
            return NotImplemented
        return handler(self, other)

    __add__, __radd__ = _binary_event("__add__")
    __sub__, __rsub__ = _binary_event("__sub__")
    __mul__, __rmul__ = _binary_event("__mul__")
    __truediv__, __rtruediv__ = _binary_event("__truediv__")
    __mod__, __rmod__ = _binary_event("__mod__")
    __pow__, __rpow__ = _binary_event("__pow__")

    def __neg__(self) -> Any:
        handler = _handler(self, "__neg__")
        if handler is None:
            raise TypeError(f"bad operand type for unary -: '{self._level_class.name()}'")
        return handler(self)

    def __len__(self) -> int:
        handler = _handler(self, "__len__")
        if handler is None:
            raise TypeError(f"object of class '{self._level_class.name()}' has no len()")
        return handler(self)

    def __bool__(self) -> bool:
        handler = _handler(self, "__bool__")
        if handler is None:
            return True
        return bool(handler(self))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        handler = _handler(self, "__call__")
        if handler is None:
            raise TypeError(f"'{self._level_class.name()}' instance is not callable")
        return handler(self, *args, **kwargs)
