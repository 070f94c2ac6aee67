from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional


class EnvironmentSource(ABC):
    """Abstract base class for the key/value stores a record is loaded from."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the raw value stored under ``key`` or ``None`` when unset."""
        pass


class ProcessEnvironment(EnvironmentSource):
    """Source that reads the process environment on every lookup."""

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(key)

    def __repr__(self) -> str:
        return "ProcessEnvironment()"


class MappingSource(EnvironmentSource):
    """Source backed by an in-memory mapping.

    The mapping is read live, so changes made to it after the source was
    created are visible to the next load.
    """

    def __init__(self, values: Mapping[str, str]):
        self.values = values

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def __repr__(self) -> str:
        return f"MappingSource(keys={sorted(self.values)!r})"


def resolve_source(source: Optional[EnvironmentSource] = None) -> EnvironmentSource:
    """Return ``source`` or the process environment when none is given."""

    if source is None:
        return ProcessEnvironment()
    if not isinstance(source, EnvironmentSource):
        raise TypeError(
            f"Expected an EnvironmentSource, got {type(source).__name__}"
        )
    return source
