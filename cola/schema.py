from __future__ import annotations

import keyword
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Sequence, Set, Tuple, Union

from .errors import SchemaError


@dataclass(frozen=True)
class FieldDeclaration:
    """Bind an environment variable to a record member and its target type."""

    key: str
    name: str
    target_type: Any

    def describe(self) -> str:
        return (
            "This value represents the data stored in the environment variable "
            f"{self.key}"
        )


DeclarationLike = Union[FieldDeclaration, Tuple[str, str, Any]]


class Schema:
    """Ordered, immutable list of field declarations for one record shape."""

    def __init__(
        self, declarations: Iterable[DeclarationLike], name: str = "Configuration"
    ):
        if not isinstance(name, str) or not name.isidentifier():
            raise SchemaError(f"Record name {name!r} is not a valid identifier")
        self.name = name
        self._declarations: Tuple[FieldDeclaration, ...] = tuple(
            _coerce_declaration(item) for item in declarations
        )
        used: Set[str] = set()
        for declaration in self._declarations:
            _check_field_name(declaration.name, used)

    @property
    def declarations(self) -> Tuple[FieldDeclaration, ...]:
        return self._declarations

    def keys(self) -> List[str]:
        """Environment keys in declaration order, duplicates included."""

        return [declaration.key for declaration in self._declarations]

    def field_names(self) -> List[str]:
        return [declaration.name for declaration in self._declarations]

    def __iter__(self) -> Iterator[FieldDeclaration]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{declaration.key!r} => {declaration.name}" for declaration in self
        )
        return f"Schema({self.name}: {entries})"


def _coerce_declaration(item: DeclarationLike) -> FieldDeclaration:
    if isinstance(item, FieldDeclaration):
        declaration = item
    elif isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 3:
        key, name, target_type = item
        declaration = FieldDeclaration(key=key, name=name, target_type=target_type)
    else:
        raise SchemaError(
            f"Expected a FieldDeclaration or a (key, name, type) triple, got {item!r}"
        )
    if not isinstance(declaration.key, str) or not declaration.key:
        raise SchemaError(
            f"Environment key for field {declaration.name!r} must be a non-empty string"
        )
    return declaration


def _check_field_name(name: Any, used: Set[str]) -> None:
    if not isinstance(name, str) or not name.isidentifier():
        raise SchemaError(f"Field name {name!r} is not a valid identifier")
    if keyword.iskeyword(name):
        raise SchemaError(f"Field name {name!r} is a reserved keyword")
    if name.startswith("_"):
        raise SchemaError(f"Field name {name!r} must not start with an underscore")
    if name in used:
        raise SchemaError(f"Field name {name!r} is declared more than once")
    used.add(name)
