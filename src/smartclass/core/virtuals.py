"""Virtual dispatch table builder (source of truth).

A class keeps one :class:`VirtualTable`: the names declared virtual for that
class mapped to the implementation they currently resolve to. Subclasses start
from a copy of their base table.

- ``declare(name, impl)``: pins ``impl`` as the resolution for ``name``; a
  ``None`` implementation installs an abstract stub raising
  :class:`AbstractMethodError` when called.
- ``update(name, impl)``: only touches names already declared; used whenever a
  method is assigned on the class so overrides made before instantiation win.
- ``snapshot()``: the current resolution as ``name -> VirtualMethod``. The
  instance chain constructor value-copies it into every level record, which
  decouples live instances from later redefinitions.

``VirtualMethod`` is the marker stored inside level records. It is immutable,
so snapshots can share the markers while each level owns its own dict.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Optional

from .errors import AbstractMethodError

__all__ = ["VirtualMethod", "VirtualTable", "abstract_stub"]


def abstract_stub(name: str) -> Callable:
    """Return a placeholder implementation failing with ``AbstractMethodError``."""

    def abstract(self, *args: Any, **kwargs: Any) -> Any:
        raise AbstractMethodError(name)

    abstract.__name__ = name
    abstract.__qualname__ = f"abstract.{name}"
    abstract.__smartclass_abstract__ = True  # type: ignore[attr-defined]
    return abstract


class VirtualMethod:
    """Resolved virtual implementation pinned into a level record."""

    __slots__ = ("name", "func")

    def __init__(self, name: str, func: Any):
        self.name = name
        self.func = func

    @property
    def abstract(self) -> bool:
        return bool(getattr(self.func, "__smartclass_abstract__", False))

    def __repr__(self) -> str:
        state = "abstract" if self.abstract else "resolved"
        return f"<VirtualMethod {self.name!r} {state}>"


class VirtualTable:
    """Per-class mapping of virtual names to their resolved implementation."""

    __slots__ = ("_resolved",)

    def __init__(self, resolved: Optional[Dict[str, Any]] = None):
        self._resolved: Dict[str, Any] = dict(resolved or {})

    def copy(self) -> "VirtualTable":
        return VirtualTable(self._resolved)

    def declare(self, name: str, impl: Any = None) -> None:
        self._resolved[name] = impl if impl is not None else abstract_stub(name)

    def update(self, name: str, impl: Any) -> bool:
        """Re-resolve an already virtual ``name``; return False for other names."""
        if name not in self._resolved:
            return False
        self._resolved[name] = impl if impl is not None else abstract_stub(name)
        return True

    def resolve(self, name: str) -> Any:
        return self._resolved[name]

    def snapshot(self) -> Dict[str, VirtualMethod]:
        return {name: VirtualMethod(name, func) for name, func in self._resolved.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._resolved

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolved)

    def __len__(self) -> int:
        return len(self._resolved)
