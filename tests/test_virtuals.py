"""Tests for virtual methods: abstract stubs, resolution and pinning."""

import pytest

from smartclass import AbstractMethodError, newclass


def _abstract_base():
    A = newclass("A")
    A.virtual("whoami")
    A.test = lambda self: self.whoami()
    return A


def test_abstract_virtual_raises():
    A = _abstract_base()
    with pytest.raises(AbstractMethodError, match="whoami") as excinfo:
        A.new().whoami()
    assert excinfo.value.name == "whoami"
    with pytest.raises(NotImplementedError):
        A.new().test()


def test_override_visible_through_inherited_method():
    A = _abstract_base()
    B = A.subclass("B")
    B.whoami = lambda self: "B"
    b = B.new()
    assert b.whoami() == "B"
    assert b.test() == "B"
    assert b.super.whoami() == "B"


def test_virtual_declared_after_definition_resolves_to_it():
    A = newclass("A")
    A.kind = lambda self: "A"
    A.virtual("kind")
    A.describe = lambda self: "I am " + self.kind()
    B = A.subclass("B")
    B.kind = lambda self: "B"
    assert A.new().describe() == "I am A"
    assert B.new().describe() == "I am B"


def test_non_virtual_methods_are_not_dispatched_down():
    A = newclass("A")
    A.kind = lambda self: "A"
    A.describe = lambda self: self.kind()
    B = A.subclass("B")
    B.kind = lambda self: "B"
    b = B.new()
    assert b.kind() == "B"
    assert b.describe() == "A"


def test_deepest_override_wins():
    A = _abstract_base()
    B = A.subclass("B")
    B.whoami = lambda self: "B"
    C = B.subclass("C")
    C.whoami = lambda self: "C"
    assert C.new().test() == "C"
    assert B.new().test() == "B"


def test_virtual_receiver_is_calling_level_and_cast_reaches_down():
    A = newclass("A")
    A.virtual("describe")
    A.run = lambda self: self.describe()
    B = A.subclass("B")

    def b_init(self):
        self.secret = "b-only"
        self.super.init()

    def describe(self):
        return B.cast(self).secret

    B.init = b_init
    B.describe = describe
    assert B.new().run() == "b-only"


def test_live_instances_keep_their_snapshot():
    A = _abstract_base()
    B = A.subclass("B")
    B.whoami = lambda self: "old"
    before = B.new()
    B.whoami = lambda self: "new"
    after = B.new()
    assert before.test() == "old"
    assert after.test() == "new"


def test_subclass_copies_virtual_names_at_creation():
    A = newclass("A")
    B = A.subclass("B")
    A.virtual("late")
    assert "late" in A.virtuals()
    assert "late" not in B.virtuals()


def test_base_override_after_subclass_creation_is_not_seen():
    A = _abstract_base()
    B = A.subclass("B")
    A.whoami = lambda self: "A"
    assert A.new().test() == "A"
    with pytest.raises(AbstractMethodError):
        B.new().test()


def test_virtual_on_inherited_method_uses_own_table_only():
    A = newclass("A")
    A.greet = lambda self: "hello"
    B = A.subclass("B")
    B.virtual("greet")
    with pytest.raises(AbstractMethodError):
        B.new().greet()


def test_deleting_virtual_method_restores_abstract_stub():
    A = newclass("A")
    A.kind = lambda self: "A"
    A.virtual("kind")
    del A.kind
    with pytest.raises(AbstractMethodError):
        A.new().kind()


def test_virtual_fields_can_be_replaced_per_instance():
    A = _abstract_base()
    B = A.subclass("B")
    B.whoami = lambda self: "B"
    b = B.new()
    b.whoami = lambda: "patched"
    assert b.whoami() == "patched"
    assert b.super.whoami() == "B"
