"""In-memory model of merged access transforms."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar

# JVM access flag bits touched by a transform.
ACC_PUBLIC = 0x0001
ACC_PRIVATE = 0x0002
ACC_PROTECTED = 0x0004
ACC_FINAL = 0x0010

_VISIBILITY_MASK = ACC_PUBLIC | ACC_PRIVATE | ACC_PROTECTED


class AccessChange(IntEnum):
    """Requested visibility, ordered from weakest to strongest."""

    NONE = 0
    PRIVATE = 1
    PACKAGE_PRIVATE = 2
    PROTECTED = 3
    PUBLIC = 4

    def merge(self, other: AccessChange) -> AccessChange:
        return max(self, other)

    def apply(self, flags: int) -> int:
        """Return *flags* with the visibility bits replaced."""
        if self is AccessChange.NONE:
            return flags
        return (flags & ~_VISIBILITY_MASK) | _VISIBILITY_FLAGS[self]


_VISIBILITY_FLAGS = {
    AccessChange.PRIVATE: ACC_PRIVATE,
    AccessChange.PACKAGE_PRIVATE: 0,
    AccessChange.PROTECTED: ACC_PROTECTED,
    AccessChange.PUBLIC: ACC_PUBLIC,
}


class ModifierChange(Enum):
    """Requested change to a boolean modifier such as ``final``."""

    NONE = 0
    REMOVE = 1
    ADD = 2

    def merge(self, other: ModifierChange) -> ModifierChange:
        if self is ModifierChange.NONE:
            return other
        if other is ModifierChange.NONE:
            return self
        if ModifierChange.REMOVE in (self, other):
            return ModifierChange.REMOVE
        return ModifierChange.ADD

    def apply(self, flags: int, modifier: int) -> int:
        if self is ModifierChange.ADD:
            return flags | modifier
        if self is ModifierChange.REMOVE:
            return flags & ~modifier
        return flags


@dataclass(frozen=True)
class AccessTransform:
    """A visibility change paired with a ``final`` modifier change."""

    access: AccessChange = AccessChange.NONE
    final: ModifierChange = ModifierChange.NONE

    EMPTY: ClassVar[AccessTransform]

    @classmethod
    def of(
        cls,
        access: AccessChange,
        final: ModifierChange = ModifierChange.NONE,
    ) -> AccessTransform:
        if access is AccessChange.NONE and final is ModifierChange.NONE:
            return cls.EMPTY
        return cls(access, final)

    @property
    def is_empty(self) -> bool:
        return self == AccessTransform.EMPTY

    def merge(self, other: AccessTransform) -> AccessTransform:
        """Combine two requests; the strongest visibility and REMOVE win."""
        return AccessTransform.of(
            self.access.merge(other.access),
            self.final.merge(other.final),
        )

    def apply(self, flags: int) -> int:
        return self.final.apply(self.access.apply(flags), ACC_FINAL)

    def __str__(self) -> str:
        return f"({self.access.name}, {self.final.name})"


AccessTransform.EMPTY = AccessTransform()


def _merge_into(
    members: dict[Hashable, AccessTransform],
    key: Hashable,
    transform: AccessTransform,
) -> AccessTransform:
    merged = members.get(key, AccessTransform.EMPTY).merge(transform)
    if merged.is_empty:
        members.pop(key, None)
    else:
        members[key] = merged
    return merged


@dataclass
class ClassEntry:
    """Merged transforms for one class and its members."""

    transform: AccessTransform = AccessTransform.EMPTY
    fields: dict[str, AccessTransform] = field(default_factory=dict)
    methods: dict[Hashable, AccessTransform] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.transform.is_empty and not self.fields and not self.methods

    def get_field(self, name: str) -> AccessTransform:
        return self.fields.get(name, AccessTransform.EMPTY)

    def get_method(self, signature: Hashable) -> AccessTransform:
        return self.methods.get(signature, AccessTransform.EMPTY)

    def merge(self, transform: AccessTransform) -> AccessTransform:
        """Merge *transform* into the class itself."""
        self.transform = self.transform.merge(transform)
        return self.transform

    def merge_field(self, name: str, transform: AccessTransform) -> AccessTransform:
        return _merge_into(self.fields, name, transform)

    def merge_method(
        self, signature: Hashable, transform: AccessTransform
    ) -> AccessTransform:
        return _merge_into(self.methods, signature, transform)

    def merge_all_fields(self, transform: AccessTransform) -> None:
        """Merge *transform* into every field declared so far.

        Fields added afterwards are not affected.
        """
        for name in list(self.fields):
            _merge_into(self.fields, name, transform)

    def merge_all_methods(self, transform: AccessTransform) -> None:
        """Merge *transform* into every method declared so far."""
        for signature in list(self.methods):
            _merge_into(self.methods, signature, transform)

    def merge_entry(self, other: ClassEntry) -> None:
        """Fold all transforms of *other* into this entry."""
        self.merge(other.transform)
        for name, transform in other.fields.items():
            self.merge_field(name, transform)
        for signature, transform in other.methods.items():
            self.merge_method(signature, transform)

    def copy(self) -> ClassEntry:
        return ClassEntry(
            transform=self.transform,
            fields=dict(self.fields),
            methods=dict(self.methods),
        )


@dataclass
class AccessTransformSet:
    """All class entries produced from one or more AT files."""

    classes: dict[str, ClassEntry] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.classes

    def __iter__(self) -> Iterator[str]:
        return iter(self.classes)

    def __len__(self) -> int:
        return len(self.classes)

    def __getitem__(self, name: str) -> ClassEntry:
        return self.classes[name]

    @property
    def is_empty(self) -> bool:
        return all(entry.is_empty for entry in self.classes.values())

    def get_class(self, name: str) -> ClassEntry | None:
        return self.classes.get(name)

    def get_or_create_class(self, name: str) -> ClassEntry:
        entry = self.classes.get(name)
        if entry is None:
            entry = ClassEntry()
            self.classes[name] = entry
        return entry

    def remove_class(self, name: str) -> ClassEntry | None:
        return self.classes.pop(name, None)

    def merge(self, other: AccessTransformSet) -> None:
        """Fold every entry of *other* into this set."""
        for name, entry in other.classes.items():
            self.get_or_create_class(name).merge_entry(entry)

    def copy(self) -> AccessTransformSet:
        return AccessTransformSet(
            classes={name: entry.copy() for name, entry in self.classes.items()}
        )
