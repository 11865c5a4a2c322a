"""Read FML access transformer lines into an AccessTransformSet.

Line format::

    <access>[+f|-f] <class name> [<field> | <method>(<descriptor>) | * | *()]

Everything from the first ``#`` to the end of the line is a comment.
"""

from __future__ import annotations

import io
import re
from collections.abc import Iterable
from pathlib import Path

from fmlat.errors import (
    ErrorContext,
    InvalidAccessSpecError,
    InvalidFinalSignError,
    MalformedLineError,
    UnknownVisibilityError,
)
from fmlat.model import AccessChange, AccessTransform, AccessTransformSet, ModifierChange
from fmlat.signature import MethodSignature, MethodSignatureFactory

_COMMENT_PREFIX = "#"
_WILDCARD = "*"

_SPACE_RE = re.compile(r"\s+")

_VISIBILITIES = {
    "public": AccessChange.PUBLIC,
    "protected": AccessChange.PROTECTED,
    "default": AccessChange.PACKAGE_PRIVATE,
    "private": AccessChange.PRIVATE,
    "": AccessChange.NONE,
}

_FINAL_SIGNS = {
    "-": ModifierChange.REMOVE,
    "+": ModifierChange.ADD,
}


def parse_access_transform(
    token: str, *, allow_final_only: bool = False
) -> AccessTransform:
    """Decode an access spec such as ``public``, ``protected-f`` or ``+f``.

    ``+f`` and ``-f`` (no visibility) are rejected unless
    *allow_final_only* is set.
    """
    min_length = 2 if allow_final_only else 3
    if len(token) < min_length:
        raise InvalidAccessSpecError(
            f"Invalid access transformer: {token}", token=token
        )

    access = token
    final = ModifierChange.NONE
    if access.endswith("f"):
        sign = access[-2]
        if sign not in _FINAL_SIGNS:
            raise InvalidFinalSignError(
                f"Invalid final modifier: {sign!r} in {token}", token=token
            )
        final = _FINAL_SIGNS[sign]
        access = access[:-2]

    try:
        change = _VISIBILITIES[access]
    except KeyError:
        raise UnknownVisibilityError(
            f"Invalid access modifier: {access}", token=token
        ) from None

    return AccessTransform.of(change, final)


def _strip_comment(line: str) -> str:
    pos = line.find(_COMMENT_PREFIX)
    return line[:pos] if pos >= 0 else line


def read(
    lines: Iterable[str],
    transform_set: AccessTransformSet,
    *,
    signature_factory: MethodSignatureFactory = MethodSignature.of,
    allow_final_only: bool = False,
    source: str | None = None,
) -> AccessTransformSet:
    """Merge every line of *lines* into *transform_set* and return it.

    Parsing stops at the first bad line; lines before it stay merged.
    """
    for line_number, raw in enumerate(lines, start=1):
        line = _strip_comment(raw).strip()
        if not line:
            continue

        parts = _SPACE_RE.split(line)
        if len(parts) not in (2, 3):
            raise MalformedLineError(
                f"Invalid FML access transformer line: {line}",
                ErrorContext(source, line_number, line),
            )

        try:
            transform = parse_access_transform(
                parts[0], allow_final_only=allow_final_only
            )
        except InvalidAccessSpecError as e:
            raise e.with_context(ErrorContext(source, line_number, line)) from None

        entry = transform_set.get_or_create_class(parts[1])

        if len(parts) == 2:
            entry.merge(transform)
            continue

        name = parts[2]
        method_index = name.find("(")

        if name.startswith(_WILDCARD):
            if method_index >= 0:
                entry.merge_all_methods(transform)
            else:
                entry.merge_all_fields(transform)
        elif method_index >= 0:
            signature = signature_factory(name[:method_index], name[method_index:])
            entry.merge_method(signature, transform)
        else:
            entry.merge_field(name, transform)

    return transform_set


def read_text(
    text: str, transform_set: AccessTransformSet | None = None, **options
) -> AccessTransformSet:
    """Read AT lines from a string."""
    if transform_set is None:
        transform_set = AccessTransformSet()
    # universal newlines only, as when reading a file
    return read(io.StringIO(text, newline=None), transform_set, **options)


def read_file(
    path: Path | str, transform_set: AccessTransformSet | None = None, **options
) -> AccessTransformSet:
    """Read an AT file; I/O errors propagate unchanged."""
    if transform_set is None:
        transform_set = AccessTransformSet()
    options.setdefault("source", str(path))
    with open(path, encoding="utf-8") as f:
        return read(f, transform_set, **options)
