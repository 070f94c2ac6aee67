from __future__ import annotations

import inspect
import logging
from operator import attrgetter
from typing import Any, Callable, Dict, Optional, Set, Tuple, Type

from pydantic import BaseModel, Field, create_model

from .converters import converter_for, target_annotation
from .errors import SchemaError
from .record import Configuration
from .schema import DeclarationLike, Schema
from .sources import EnvironmentSource

logger = logging.getLogger(__name__)


def make_conf(
    *declarations: DeclarationLike,
    name: str = "Configuration",
    base: Type[Configuration] = Configuration,
    source: Optional[EnvironmentSource] = None,
) -> Type[Configuration]:
    """Generate a configuration record type from ``(key, name, type)`` entries.

    Example::

        Configuration = make_conf(
            ("YOUR_NAME", "your_name", str),
            ("YOUR_AGE", "your_age", int),
        )
        conf = Configuration.default()
    """

    return compile_schema(Schema(declarations, name=name), base=base, source=source)


def compile_schema(
    schema: Schema,
    *,
    base: Type[Configuration] = Configuration,
    source: Optional[EnvironmentSource] = None,
) -> Type[Configuration]:
    """Build the record type and bind its loaders to ``schema``."""

    if not (isinstance(base, type) and issubclass(base, Configuration)):
        raise SchemaError(f"base must be a subclass of Configuration, got {base!r}")
    if base.model_fields:
        raise SchemaError(
            f"base {base.__name__} must not declare fields of its own: "
            f"{sorted(base.model_fields)}"
        )

    fields: Dict[str, Tuple[Any, Any]] = {}
    converters: Dict[str, Callable[[str], Any]] = {}
    renamed: Dict[str, str] = {}
    used: Set[str] = set(schema.field_names())
    for declaration in schema:
        attribute = declaration.name
        metadata: Dict[str, Any] = {"description": declaration.describe()}
        if hasattr(base, declaration.name):
            if _defining_class(base, declaration.name) is not BaseModel or (
                declaration.name.startswith("model_")
            ):
                raise SchemaError(
                    f"Field name {declaration.name!r} shadows an attribute of "
                    f"{base.__name__}"
                )
            # Names of legacy pydantic methods (schema, json, copy, ...) are
            # stored under an aliased internal name and read via a property.
            attribute = _internal_name(declaration.name, used, base)
            metadata["alias"] = declaration.name
            renamed[declaration.name] = attribute
        converters[declaration.name] = converter_for(declaration.target_type)
        fields[attribute] = (
            target_annotation(declaration.target_type),
            Field(..., **metadata),
        )

    record = create_model(
        schema.name,
        __base__=base,
        __module__=base.__module__,
        **fields,
    )  # type: ignore[call-overload]
    record.__doc__ = _record_doc(schema, base)
    setattr(record, "__cola_schema__", schema)
    setattr(record, "__cola_converters__", converters)
    setattr(record, "__cola_source__", source)
    for name, attribute in renamed.items():
        setattr(record, name, property(attrgetter(attribute)))

    logger.debug(
        "Compiled %s with fields %s", schema.name, ", ".join(schema.field_names())
    )
    return record


def _record_doc(schema: Schema, base: Type[Configuration]) -> str:
    summary = inspect.cleandoc(base.__doc__ or "").split("\n")[0]
    lines = [summary, "", "Loaded from the environment variables:"]
    for declaration in schema:
        lines.append(f"    {declaration.key} -> {declaration.name}")
    return "\n".join(lines).strip()


def _defining_class(base: type, name: str) -> Optional[type]:
    for klass in base.__mro__:
        if name in vars(klass):
            return klass
    return None


def _internal_name(name: str, used: Set[str], base: type) -> str:
    candidate = f"{name}_"
    index = 1
    while candidate in used or hasattr(base, candidate):
        index += 1
        candidate = f"{name}_{index}"
    used.add(candidate)
    return candidate
