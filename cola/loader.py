from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, TypeVar

from .errors import ConfigMissing, InvalidData
from .schema import Schema
from .sources import EnvironmentSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_values(
    schema: Schema,
    converters: Mapping[str, Callable[[str], Any]],
    source: EnvironmentSource,
) -> Dict[str, Any]:
    """Read and convert every declared field, stopping at the first failure.

    Raises:
        ConfigMissing: a declared key is not present in ``source``.
        InvalidData: a present value could not be converted.
    """

    values: Dict[str, Any] = {}
    for declaration in schema:
        raw = source.get(declaration.key)
        if raw is None:
            logger.debug(
                "Environment variable %s for %s.%s is not set",
                declaration.key,
                schema.name,
                declaration.name,
            )
            raise ConfigMissing(declaration.key)

        convert = converters[declaration.name]
        try:
            values[declaration.name] = convert(raw)
        except (ValueError, TypeError) as exc:
            logger.debug(
                "Environment variable %s for %s.%s could not be converted",
                declaration.key,
                schema.name,
                declaration.name,
            )
            raise InvalidData(
                raw, key=declaration.key, field=declaration.name
            ) from exc

    logger.debug("Loaded %d fields for %s", len(values), schema.name)
    return values


def fail_fast(load: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``load`` and terminate the process if it raises a ConfigError."""

    try:
        return load(*args, **kwargs)
    except ConfigMissing as exc:
        logger.critical("Required environment variable %s is missing", exc.key)
        raise SystemExit(str(exc)) from exc
    except InvalidData as exc:
        logger.critical(
            "Environment variable %s holds data that cannot be parsed", exc.key
        )
        raise SystemExit(str(exc)) from exc
