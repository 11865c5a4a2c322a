"""Reader for FML access transformer files."""

from __future__ import annotations

from fmlat.errors import (
    AccessTransformError,
    ErrorContext,
    InvalidAccessSpecError,
    InvalidFinalSignError,
    MalformedLineError,
    UnknownVisibilityError,
)
from fmlat.model import (
    AccessChange,
    AccessTransform,
    AccessTransformSet,
    ClassEntry,
    ModifierChange,
)
from fmlat.reader import parse_access_transform, read, read_file, read_text
from fmlat.signature import MethodSignature, MethodSignatureFactory

__all__ = [
    "AccessChange",
    "AccessTransform",
    "AccessTransformError",
    "AccessTransformSet",
    "ClassEntry",
    "ErrorContext",
    "InvalidAccessSpecError",
    "InvalidFinalSignError",
    "MalformedLineError",
    "MethodSignature",
    "MethodSignatureFactory",
    "ModifierChange",
    "UnknownVisibilityError",
    "parse_access_transform",
    "read",
    "read_file",
    "read_text",
]
