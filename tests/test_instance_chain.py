"""Tests for instance chain construction."""

import pytest

from smartclass import Level, Object, newclass


def _chain(instance):
    levels = []
    node = instance
    while isinstance(node, Level):
        levels.append(node)
        node = node.super
    return levels


def test_chain_has_one_level_per_ancestor():
    A = newclass("A")
    B = A.subclass("B")
    C = B.subclass("C")
    c = C.new()

    levels = _chain(c)
    assert len(levels) == 4
    assert [level.class_() for level in levels] == [C, B, A, Object]
    assert not c.super.super.super.super


def test_lower_links_point_back_down():
    A = newclass("A")
    B = A.subclass("B")
    b = B.new()
    assert b._level_lower is None
    assert b.super._level_lower is b
    assert b.super.super._level_lower is b.super


def test_new_and_call_forward_constructor_arguments():
    Point = newclass("Point")

    def init(self, x, y=0):
        self.x = x
        self.y = y

    Point.init = init
    p = Point.new(1, y=2)
    q = Point(5)
    assert (p.x, p.y) == (1, 2)
    assert (q.x, q.y) == (5, 0)
    assert p.class_() is Point


def test_default_init_calls_super_init_without_arguments():
    calls = []
    A = newclass("A")
    A.init = lambda self: calls.append("A")
    B = A.subclass("B")
    B.new("ignored", key="ignored")
    assert calls == ["A"]


def test_super_constructor_chaining():
    A = newclass("A")

    def a_init(self, name):
        self.name = name

    A.init = a_init
    B = A.subclass("B")

    def b_init(self, name, age):
        self.super.init(name)
        self.age = age

    B.init = b_init
    b = B.new("ann", 3)
    assert b.name == "ann"
    assert b.age == 3
    assert b.super.name == "ann"


def test_constructor_errors_propagate():
    A = newclass("A")

    def init(self):
        self.partial = True
        raise RuntimeError("boom")

    A.init = init
    with pytest.raises(RuntimeError, match="boom"):
        A.new()


def test_root_instance():
    obj = Object.new()
    assert obj.class_() is Object
    assert str(obj) == "a Object"
    assert _chain(obj) == [obj]
    assert obj._level_lower is None


def test_instances_do_not_share_levels():
    A = newclass("A")
    B = A.subclass("B")
    A.init = lambda self: setattr(self, "items", [])
    B.init = lambda self: self.super.init()
    first, second = B.new(), B.new()
    first.items.append(1)
    assert second.items == []
    assert first.super is not second.super
