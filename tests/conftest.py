from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cola import MappingSource  # noqa: E402

TEST_KEYS = (
    "TEST_STRING_ENV_KEY",
    "TEST_INT_ENV_KEY",
    "TEST_NEG_ENV_KEY",
    "TEST_TRUE_ENV_KEY",
    "TEST_FALSE_ENV_KEY",
    "DEFINITELY_DOES_NOT_EXIST",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in TEST_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture()
def env_values() -> dict:
    return {}


@pytest.fixture()
def mapping_source(env_values: dict) -> MappingSource:
    return MappingSource(env_values)
