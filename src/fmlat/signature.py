"""Method signature keys used by the methods map of a class entry."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Protocol


class MethodSignatureFactory(Protocol):
    """Builds a hashable method key from a name and a raw descriptor."""

    def __call__(self, name: str, descriptor: str) -> Hashable: ...


@dataclass(frozen=True)
class MethodSignature:
    """A method name paired with its JVM descriptor, e.g. ``doit`` + ``(I)V``.

    The descriptor is kept verbatim; it is never resolved or validated.
    """

    name: str
    descriptor: str

    @classmethod
    def of(cls, name: str, descriptor: str) -> MethodSignature:
        return cls(name, descriptor)

    def __str__(self) -> str:
        return self.name + self.descriptor
