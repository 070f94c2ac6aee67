from __future__ import annotations

from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from .loader import fail_fast, load_values
from .sources import EnvironmentSource, resolve_source

C = TypeVar("C", bound="Configuration")


class Configuration(BaseModel):
    """App configuration, wrapped up into a neat package.

    Concrete record types are generated by :func:`cola.make_conf`; subclass
    this class to give them methods and pass it as ``base``.
    """

    model_config = ConfigDict(
        frozen=True, arbitrary_types_allowed=True, protected_namespaces=()
    )

    @classmethod
    def new(cls: Type[C], source: Optional[EnvironmentSource] = None) -> C:
        """Load the record, raising :class:`cola.ConfigError` on failure."""

        schema = getattr(cls, "__cola_schema__", None)
        if schema is None:
            raise TypeError(
                f"{cls.__name__} is not bound to a schema; create it with make_conf()"
            )
        if source is None:
            source = getattr(cls, "__cola_source__", None)
        values = load_values(schema, cls.__cola_converters__, resolve_source(source))
        return cls.model_construct(**values)

    @classmethod
    def default(cls: Type[C], source: Optional[EnvironmentSource] = None) -> C:
        """Load the record or exit the process naming the offending value."""

        return fail_fast(cls.new, source)
