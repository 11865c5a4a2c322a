"""Tests for access transform merging and class/set aggregation."""

from __future__ import annotations

import itertools

import pytest

from fmlat.model import (
    ACC_FINAL,
    ACC_PRIVATE,
    ACC_PROTECTED,
    ACC_PUBLIC,
    AccessChange,
    AccessTransform,
    AccessTransformSet,
    ClassEntry,
    ModifierChange,
)
from fmlat.signature import MethodSignature

ALL_TRANSFORMS = [
    AccessTransform(access, final)
    for access, final in itertools.product(AccessChange, ModifierChange)
]

EMPTY = AccessTransform.EMPTY


class TestAccessTransformMerge:
    @pytest.mark.parametrize("t", ALL_TRANSFORMS, ids=str)
    def test_identity(self, t: AccessTransform) -> None:
        """Merging with the empty transform changes nothing."""
        assert t.merge(EMPTY) == t
        assert EMPTY.merge(t) == t

    def test_commutative(self) -> None:
        for a, b in itertools.product(ALL_TRANSFORMS, repeat=2):
            assert a.merge(b) == b.merge(a)

    def test_associative(self) -> None:
        for a, b, c in itertools.product(ALL_TRANSFORMS, repeat=3):
            assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_visibility_never_narrows(self) -> None:
        for a, b in itertools.product(ALL_TRANSFORMS, repeat=2):
            assert a.merge(b).access >= max(a.access, b.access)

    def test_remove_absorbs(self) -> None:
        for a, b in itertools.product(ALL_TRANSFORMS, repeat=2):
            if ModifierChange.REMOVE in (a.final, b.final):
                assert a.merge(b).final is ModifierChange.REMOVE

    def test_public_beats_private(self) -> None:
        merged = AccessTransform.of(AccessChange.PRIVATE).merge(
            AccessTransform.of(AccessChange.PUBLIC)
        )
        assert merged == AccessTransform(AccessChange.PUBLIC, ModifierChange.NONE)

    def test_add_then_add(self) -> None:
        add = AccessTransform.of(AccessChange.NONE, ModifierChange.ADD)
        assert add.merge(add).final is ModifierChange.ADD

    def test_of_returns_empty_singleton(self) -> None:
        assert AccessTransform.of(AccessChange.NONE) is EMPTY
        assert EMPTY.is_empty
        assert not AccessTransform.of(AccessChange.PRIVATE).is_empty

    def test_value_semantics(self) -> None:
        a = AccessTransform.of(AccessChange.PUBLIC, ModifierChange.REMOVE)
        b = AccessTransform(AccessChange.PUBLIC, ModifierChange.REMOVE)
        assert a == b
        assert hash(a) == hash(b)


    def test_modifier_change_is_unordered(self) -> None:
        with pytest.raises(TypeError):
            ModifierChange.REMOVE < ModifierChange.ADD  # noqa: B015
        assert ModifierChange.NONE != 0


class TestAccessFlags:
    def test_public_replaces_private(self) -> None:
        flags = ACC_PRIVATE | ACC_FINAL
        assert AccessChange.PUBLIC.apply(flags) == ACC_PUBLIC | ACC_FINAL

    def test_package_private_clears_visibility(self) -> None:
        assert AccessChange.PACKAGE_PRIVATE.apply(ACC_PROTECTED) == 0

    def test_none_keeps_flags(self) -> None:
        assert AccessChange.NONE.apply(ACC_PRIVATE) == ACC_PRIVATE

    def test_transform_removes_final(self) -> None:
        t = AccessTransform.of(AccessChange.PROTECTED, ModifierChange.REMOVE)
        assert t.apply(ACC_PRIVATE | ACC_FINAL) == ACC_PROTECTED

    def test_transform_adds_final(self) -> None:
        t = AccessTransform.of(AccessChange.NONE, ModifierChange.ADD)
        assert t.apply(ACC_PUBLIC) == ACC_PUBLIC | ACC_FINAL


class TestClassEntry:
    def test_merge_field_accumulates(self) -> None:
        entry = ClassEntry()
        entry.merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        entry.merge_field("f", AccessTransform.of(AccessChange.NONE, ModifierChange.REMOVE))
        assert entry.fields["f"] == AccessTransform(
            AccessChange.PRIVATE, ModifierChange.REMOVE
        )

    def test_empty_merge_is_not_stored(self) -> None:
        entry = ClassEntry()
        entry.merge_field("f", EMPTY)
        entry.merge_method(MethodSignature.of("m", "()V"), EMPTY)
        assert entry.fields == {}
        assert entry.methods == {}
        assert entry.is_empty

    def test_wildcard_is_snapshot(self) -> None:
        entry = ClassEntry()
        entry.merge_field("f1", AccessTransform.of(AccessChange.PUBLIC))
        entry.merge_all_fields(AccessTransform.of(AccessChange.PUBLIC, ModifierChange.REMOVE))
        entry.merge_field("f2", AccessTransform.of(AccessChange.PUBLIC))
        assert entry.fields["f1"].final is ModifierChange.REMOVE
        assert entry.fields["f2"].final is ModifierChange.NONE

    def test_wildcard_leaves_class_and_other_members(self) -> None:
        entry = ClassEntry()
        sig = MethodSignature.of("m", "()V")
        entry.merge_method(sig, AccessTransform.of(AccessChange.PRIVATE))
        entry.merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        entry.merge_all_methods(AccessTransform.of(AccessChange.PUBLIC))
        assert entry.transform == EMPTY
        assert entry.get_method(sig).access is AccessChange.PUBLIC
        assert entry.get_field("f").access is AccessChange.PRIVATE

    def test_getters_default_to_empty(self) -> None:
        entry = ClassEntry()
        assert entry.get_field("missing") == EMPTY
        assert entry.get_method(MethodSignature.of("x", "()V")) == EMPTY

    def test_merge_entry(self) -> None:
        a = ClassEntry()
        a.merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        b = ClassEntry()
        b.merge(AccessTransform.of(AccessChange.PUBLIC))
        b.merge_field("f", AccessTransform.of(AccessChange.PROTECTED))
        b.merge_field("g", AccessTransform.of(AccessChange.NONE, ModifierChange.ADD))
        a.merge_entry(b)
        assert a.transform.access is AccessChange.PUBLIC
        assert a.fields["f"].access is AccessChange.PROTECTED
        assert a.fields["g"].final is ModifierChange.ADD

    def test_copy_is_independent(self) -> None:
        entry = ClassEntry()
        entry.merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        clone = entry.copy()
        clone.merge_field("g", AccessTransform.of(AccessChange.PUBLIC))
        assert "g" not in entry.fields
        assert clone.fields["f"] == entry.fields["f"]


class TestAccessTransformSet:
    def test_get_or_create_reuses_entry(self) -> None:
        s = AccessTransformSet()
        entry = s.get_or_create_class("a.B")
        assert s.get_or_create_class("a.B") is entry
        assert "a.B" in s
        assert len(s) == 1
        assert s["a.B"] is entry

    def test_get_and_remove(self) -> None:
        s = AccessTransformSet()
        assert s.get_class("a.B") is None
        entry = s.get_or_create_class("a.B")
        assert s.remove_class("a.B") is entry
        assert "a.B" not in s
        assert s.remove_class("a.B") is None

    def test_merge_sets(self) -> None:
        a = AccessTransformSet()
        a.get_or_create_class("x.A").merge(AccessTransform.of(AccessChange.PROTECTED))
        b = AccessTransformSet()
        b.get_or_create_class("x.A").merge(AccessTransform.of(AccessChange.PUBLIC))
        b.get_or_create_class("x.B").merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        a.merge(b)
        assert sorted(a) == ["x.A", "x.B"]
        assert a["x.A"].transform.access is AccessChange.PUBLIC
        assert a["x.B"].fields["f"].access is AccessChange.PRIVATE
        # the source set is left alone
        assert b["x.A"].transform.access is AccessChange.PUBLIC
        assert a["x.B"] is not b["x.B"]

    def test_copy_is_deep(self) -> None:
        s = AccessTransformSet()
        s.get_or_create_class("x.A").merge_field("f", AccessTransform.of(AccessChange.PRIVATE))
        clone = s.copy()
        clone["x.A"].merge_field("g", AccessTransform.of(AccessChange.PUBLIC))
        assert "g" not in s["x.A"].fields

    def test_is_empty(self) -> None:
        s = AccessTransformSet()
        s.get_or_create_class("x.A")
        assert s.is_empty
        s["x.A"].merge(AccessTransform.of(AccessChange.PUBLIC))
        assert not s.is_empty
