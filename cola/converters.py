from __future__ import annotations

import dataclasses
import inspect
import re
from typing import Any, Callable, Dict

from pydantic import BaseModel, TypeAdapter
from pydantic.errors import PydanticSchemaGenerationError

from .errors import SchemaError

Converter = Callable[[str], Any]

PRIMITIVE_TYPE_MAP = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
}

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_bool(raw: str) -> bool:
    """Accept exactly ``true`` or ``false``."""

    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f"{raw!r} is not 'true' or 'false'")


def parse_int(raw: str) -> int:
    """Accept an optional sign followed by ASCII digits."""

    if not _INTEGER_PATTERN.fullmatch(raw):
        raise ValueError(f"{raw!r} is not an integer")
    return int(raw)


def parse_float(raw: str) -> float:
    # float() also tolerates surrounding whitespace and digit separators
    if raw != raw.strip() or "_" in raw:
        raise ValueError(f"{raw!r} is not a number")
    return float(raw)


STRICT_PARSERS: Dict[type, Converter] = {
    bool: parse_bool,
    int: parse_int,
    float: parse_float,
}


def target_annotation(target_type: Any) -> Any:
    """Return the Python annotation used for a record member."""

    if isinstance(target_type, str):
        try:
            return PRIMITIVE_TYPE_MAP[target_type]
        except KeyError:
            raise SchemaError(
                f"Unknown type token {target_type!r}; expected one of "
                f"{sorted(PRIMITIVE_TYPE_MAP)}"
            ) from None
    return target_type


def converter_for(target_type: Any) -> Converter:
    """Resolve the parse-from-string function for ``target_type``.

    Plain ``bool``, ``int`` and ``float`` use strict parsers: ``true`` and
    ``false`` only, signed ASCII digits, no whitespace or ``_`` separators.
    Types exposing a ``from_str`` callable use it. Structured types
    (dataclasses, named tuples, pydantic models) are built by calling them
    with the raw string. Anything else pydantic can validate goes through a
    ``TypeAdapter``, so ``Annotated`` constraints, enums, ``Decimal`` and
    ``Path`` work. Remaining classes are called with the raw string.
    """

    python_type = target_annotation(target_type)

    if isinstance(python_type, type) and python_type in STRICT_PARSERS:
        return STRICT_PARSERS[python_type]

    from_str = getattr(python_type, "from_str", None)
    if callable(from_str):
        return from_str

    if _is_structured(python_type):
        return _string_constructor(python_type)

    try:
        adapter = TypeAdapter(python_type)
    except PydanticSchemaGenerationError:
        if isinstance(python_type, type):
            return _string_constructor(python_type)
        raise SchemaError(
            f"{python_type!r} cannot be parsed from a string"
        ) from None
    return adapter.validate_python


def _is_structured(python_type: Any) -> bool:
    if not isinstance(python_type, type):
        return False
    if dataclasses.is_dataclass(python_type) or issubclass(python_type, BaseModel):
        return True
    return issubclass(python_type, tuple) and hasattr(python_type, "_fields")


def _string_constructor(cls: type) -> Converter:
    if not _accepts_single_string(cls):
        raise SchemaError(f"{cls!r} cannot be parsed from a string")
    return cls


def _accepts_single_string(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # Some extension types expose no signature; trust the constructor.
        return True
    try:
        signature.bind("")
    except TypeError:
        return False
    return True
