from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Annotated, NamedTuple

import pytest
from pydantic import BaseModel, Field

from cola import InvalidData, MappingSource, SchemaError, make_conf
from cola.converters import converter_for, target_annotation


class Mode(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Port:
    def __init__(self, number: int):
        self.number = number

    @classmethod
    def from_str(cls, raw: str) -> "Port":
        number = int(raw)
        if not 0 < number < 65536:
            raise ValueError(f"{number} is not a valid port")
        return cls(number)


class Shout:
    def __init__(self, raw: str):
        self.text = raw.upper()


class Opaque:
    def __init__(self, left, right):
        self.pair = (left, right)


@pytest.mark.parametrize(
    "token, expected",
    [("string", str), ("integer", int), ("number", float), ("boolean", bool)],
)
def test_type_tokens(token: str, expected: type) -> None:
    assert target_annotation(token) is expected


def test_unknown_type_token() -> None:
    with pytest.raises(SchemaError):
        converter_for("complex")


def test_primitive_conversion() -> None:
    assert converter_for(int)("-1") == -1
    assert converter_for(float)("1") == 1.0
    assert converter_for(bool)("true") is True
    assert converter_for(bool)("false") is False
    assert converter_for(str)("Brad") == "Brad"


def test_primitive_conversion_failures() -> None:
    with pytest.raises(ValueError):
        converter_for(bool)("potato")
    with pytest.raises(ValueError):
        converter_for(int)("twenty")


def test_from_str_capability() -> None:
    Conf = make_conf(("PORT", "port", Port))

    conf = Conf.new(MappingSource({"PORT": "8080"}))

    assert isinstance(conf.port, Port)
    assert conf.port.number == 8080
    with pytest.raises(InvalidData) as excinfo:
        Conf.new(MappingSource({"PORT": "99999"}))
    assert excinfo.value.value == "99999"


def test_constructor_capability() -> None:
    Conf = make_conf(("GREETING", "greeting", Shout))

    assert Conf.new(MappingSource({"GREETING": "hi"})).greeting.text == "HI"


def test_types_without_string_capability_fail_at_compile_time() -> None:
    with pytest.raises(SchemaError):
        make_conf(("PAIR", "pair", Opaque))


def test_library_types() -> None:
    Conf = make_conf(
        ("PRICE", "price", Decimal),
        ("ROOT", "root", Path),
        ("MODE", "mode", Mode),
    )

    conf = Conf.new(
        MappingSource({"PRICE": "1.50", "ROOT": "/srv/app", "MODE": "prod"})
    )

    assert conf.price == Decimal("1.50")
    assert conf.root == Path("/srv/app")
    assert conf.mode is Mode.PROD
    with pytest.raises(InvalidData) as excinfo:
        Conf.new(MappingSource({"PRICE": "1", "ROOT": "/", "MODE": "staging"}))
    assert excinfo.value.value == "staging"


def test_annotated_constraints() -> None:
    Conf = make_conf(("COUNT", "count", Annotated[int, Field(ge=0)]))

    assert Conf.new(MappingSource({"COUNT": "3"})).count == 3
    with pytest.raises(InvalidData) as excinfo:
        Conf.new(MappingSource({"COUNT": "-1"}))
    assert excinfo.value.value == "-1"


@dataclass(frozen=True)
class Host:
    name: str


class Pair(NamedTuple):
    raw: str


class Credentials(BaseModel):
    user: str


def test_dataclass_built_from_string() -> None:
    Conf = make_conf(("HOST", "host", Host))

    assert Conf.new(MappingSource({"HOST": "db"})).host == Host("db")


def test_named_tuple_built_from_string() -> None:
    Conf = make_conf(("PAIR", "pair", Pair))

    assert Conf.new(MappingSource({"PAIR": "left"})).pair == Pair("left")


def test_structured_types_without_string_constructor_fail_at_compile_time() -> None:
    @dataclass
    class Endpoint:
        host: str
        port: int

    with pytest.raises(SchemaError):
        make_conf(("ENDPOINT", "endpoint", Endpoint))
    with pytest.raises(SchemaError):
        make_conf(("CREDENTIALS", "credentials", Credentials))


@pytest.mark.parametrize("raw", ["1", "True", "TRUE", "yes", "off", " true", ""])
def test_bool_accepts_only_true_and_false(raw: str) -> None:
    with pytest.raises(ValueError):
        converter_for(bool)(raw)


@pytest.mark.parametrize("raw", [" 1", "1 ", "1_000", "1.0", "0x10", ""])
def test_int_rejects_loose_spellings(raw: str) -> None:
    with pytest.raises(ValueError):
        converter_for(int)(raw)


def test_int_accepts_signs() -> None:
    assert converter_for(int)("+5") == 5
    assert converter_for("integer")("-12") == -12


@pytest.mark.parametrize("raw", [" 1.5", "1_000.0", "one"])
def test_float_rejects_loose_spellings(raw: str) -> None:
    with pytest.raises(ValueError):
        converter_for(float)(raw)


def test_float_accepts_exponents() -> None:
    assert converter_for(float)("1e3") == 1000.0
    assert converter_for("number")("-0.5") == -0.5
