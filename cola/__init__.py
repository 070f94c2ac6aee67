"""Declarative, typed configuration records loaded from the environment."""

from .compiler import compile_schema, make_conf
from .errors import ConfigError, ConfigMissing, InvalidData, SchemaError
from .record import Configuration
from .schema import FieldDeclaration, Schema
from .sources import EnvironmentSource, MappingSource, ProcessEnvironment

__all__ = [
    "ConfigError",
    "ConfigMissing",
    "Configuration",
    "EnvironmentSource",
    "FieldDeclaration",
    "InvalidData",
    "MappingSource",
    "ProcessEnvironment",
    "Schema",
    "SchemaError",
    "compile_schema",
    "make_conf",
]
