"""Class descriptors and the root class (source of truth).

If this module disappeared, rebuild it from the contract below.

ClassDescriptor
---------------
Runtime value describing one class; compared by identity, callable to build
instances. Internal state (slots, written with ``object.__setattr__`` because
attribute assignment on a descriptor means "define a method"):

- ``_name``: display name (``"Unnamed"`` when creation got no string name);
- ``_base``: parent descriptor, ``None`` only for ``Object``;
- ``_methods``: method table (methods, events, class constants);
- ``_virtuals``: :class:`VirtualTable`, copied from the base at creation.

Creation (``subclass``) seeds the method table with the events the base holds
at that moment (``EVENT_NAMES``), a default ``init`` calling
``self.super.init()`` without arguments, and a ``class_`` accessor. Later
changes on the base never reach existing subclasses through these copies.

Assigning ``C.name = value`` stores ``value`` in the method table; when the
name is virtual the resolution follows (``VirtualTable.update``), so instances
created afterwards see the override. ``del C.name`` removes it (a virtual name
falls back to an abstract stub).

Class operations: ``name``, ``super``, ``subclass``, ``inherits``, ``virtual``,
``virtuals``, ``methods``, ``ancestry``, ``new`` / ``__call__``, ``cast``,
``trycast``, ``made``. ``str(C)`` is ``"class <name>"``.

Object
------
Single root descriptor (:class:`RootClass`). Its ``init`` does nothing, its
``__str__`` event renders ``"a <class name>"``. Defining methods, deleting
methods, declaring virtuals and storing new fields on a root level raise
``ProtectedClassError``.

Binding
-------
``_bind`` is called by the read protocol for every value found on a level of
this class. Record values other than ``VirtualMethod`` markers come back as
stored; anything else goes through the descriptor protocol against the level.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from .casting import cast, class_made, try_cast
from .chain import construct
from .errors import ProtectedClassError
from .level import Level
from .virtuals import VirtualMethod, VirtualTable

__all__ = [
    "ClassDescriptor",
    "RootClass",
    "Object",
    "newclass",
    "EVENT_NAMES",
    "DEFAULT_CLASS_NAME",
    "ROOT_CLASS_NAME",
]

logger = logging.getLogger("smartclass")

DEFAULT_CLASS_NAME = "Unnamed"
ROOT_CLASS_NAME = "Object"

# Looked up on the level's own class only, never through the chain.
EVENT_NAMES = (
    "__str__",
    "__eq__",
    "__lt__",
    "__le__",
    "__add__",
    "__sub__",
    "__mul__",
    "__truediv__",
    "__mod__",
    "__pow__",
    "__neg__",
    "__len__",
    "__bool__",
    "__call__",
)

def _default_init(self, *args: Any, **kwargs: Any) -> None:
    self.super.init()


def _class_accessor(cls: "ClassDescriptor") -> Callable:
    def class_(self) -> "ClassDescriptor":
        return cls

    return class_


class ClassDescriptor:
    """One class of the single-inheritance hierarchy."""

    __slots__ = (
        "_name",
        "_base",
        "_methods",
        "_virtuals",
        "__weakref__",
    )

    def __init__(self, name: Optional[str], base: Optional["ClassDescriptor"]):
        self._set("_name", name if isinstance(name, str) else DEFAULT_CLASS_NAME)
        self._set("_base", base)
        self._set("_methods", self._seed_methods())
        self._set("_virtuals", base._virtuals.copy() if base is not None else VirtualTable())

    def _set(self, slot: str, value: Any) -> None:
        object.__setattr__(self, slot, value)

    def _seed_methods(self) -> Dict[str, Any]:
        base = self._base
        methods: Dict[str, Any] = {
            event: base._methods[event] for event in EVENT_NAMES if event in base._methods
        }
        methods["init"] = _default_init
        methods["class_"] = _class_accessor(self)
        return methods

    # ------------------------------------------------------------------
    # Method table
    # ------------------------------------------------------------------
    def __setattr__(self, name: str, value: Any) -> None:
        self._define(name, value)

    def __delattr__(self, name: str) -> None:
        if name not in self._methods:
            raise AttributeError(f"Class '{self._name}' has no method '{name}'")
        del self._methods[name]
        self._virtuals.update(name, None)

    def _define(self, name: str, value: Any) -> None:
        self._methods[name] = value
        if self._virtuals.update(name, value):
            logger.debug("class %s: virtual '%s' overridden", self._name, name)

    def methods(self) -> Mapping[str, Any]:
        """Read-only view of the method table."""
        return MappingProxyType(self._methods)

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------
    def name(self) -> str:
        return self._name

    def super(self) -> Optional["ClassDescriptor"]:
        return self._base

    def ancestry(self) -> Iterator["ClassDescriptor"]:
        """Yield this class then every ancestor up to ``Object``."""
        node: Optional[ClassDescriptor] = self
        while node is not None:
            yield node
            node = node._base

    def inherits(self, other: "ClassDescriptor") -> bool:
        """True when ``other`` is a strict ancestor of this class."""
        node = self._base
        while node is not None:
            if node is other:
                return True
            node = node._base
        return False

    def subclass(self, name: Optional[str] = None) -> "ClassDescriptor":
        child = ClassDescriptor(name, self)
        logger.debug("class %s created as subclass of %s", child._name, self._name)
        return child

    # ------------------------------------------------------------------
    # Virtual methods
    # ------------------------------------------------------------------
    def virtual(self, name: str) -> None:
        """Declare ``name`` virtual, resolved from this class's own method table."""
        impl = self._methods.get(name)
        self._virtuals.declare(name, impl)
        logger.debug(
            "class %s: '%s' declared virtual (%s)",
            self._name,
            name,
            "abstract" if impl is None else "resolved",
        )

    def virtuals(self) -> Dict[str, Any]:
        """Current resolution of every virtual name (a copy)."""
        return {name: self._virtuals.resolve(name) for name in self._virtuals}

    # ------------------------------------------------------------------
    # Instances and casting
    # ------------------------------------------------------------------
    def new(self, *args: Any, **kwargs: Any) -> Level:
        return construct(self, *args, **kwargs)

    __call__ = new

    def cast(self, instance: Any) -> Level:
        return cast(self, instance)

    def trycast(self, instance: Any) -> Optional[Level]:
        return try_cast(self, instance)

    def made(self, value: Any) -> bool:
        return class_made(self, value)

    def _store_field(self, level: Level, key: str, value: Any) -> None:
        level._level_record[key] = value

    def __str__(self) -> str:
        return f"class {self._name}"

    def __repr__(self) -> str:
        return f"<ClassDescriptor {self._name!r}>"

    # ------------------------------------------------------------------
    # Binding (called by the read protocol)
    # ------------------------------------------------------------------
    def _bind(self, level: Level, name: str, value: Any, *, from_record: bool) -> Any:
        if from_record:
            if not isinstance(value, VirtualMethod):
                return value
            value = value.func
        getter = getattr(type(value), "__get__", None)
        if getter is None:
            return value
        return getter(value, level, type(level))


def _root_init(self, *args: Any, **kwargs: Any) -> None:
    pass


def _root_str(self) -> str:
    return "a " + self.class_().name()


class RootClass(ClassDescriptor):
    """The single root class ``Object``; read-only."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(ROOT_CLASS_NAME, None)

    def _seed_methods(self) -> Dict[str, Any]:
        return {
            "init": _root_init,
            "class_": _class_accessor(self),
            "__str__": _root_str,
        }

    def _define(self, name: str, value: Any) -> None:
        raise ProtectedClassError()

    def __delattr__(self, name: str) -> None:
        raise ProtectedClassError()

    def virtual(self, name: str) -> None:
        raise ProtectedClassError()

    def _store_field(self, level: Level, key: str, value: Any) -> None:
        raise ProtectedClassError()


Object = RootClass()


def newclass(name: Optional[str] = None, base: Optional[ClassDescriptor] = None) -> ClassDescriptor:
    """Create a class named ``name`` deriving from ``base`` (``Object`` by default)."""
    base = base or Object
    return base.subclass(name)
