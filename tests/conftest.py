import json
from pathlib import Path

import pytest

from json_schema_validator import SchemaStore, ValidationEngine

MOCK_DIR = Path(__file__).resolve().parent / "mock"


@pytest.fixture
def mock_dir() -> Path:
    return MOCK_DIR


@pytest.fixture
def test_schema_path() -> Path:
    return MOCK_DIR / "test-schema.json"


@pytest.fixture
def engine(test_schema_path) -> ValidationEngine:
    return ValidationEngine(SchemaStore.from_file(test_schema_path))


@pytest.fixture
def make_engine():
    """Build an engine from an inline schema mapping."""

    def _make(schema: dict) -> ValidationEngine:
        return ValidationEngine(SchemaStore.load(json.dumps(schema)))

    return _make


@pytest.fixture
def test_object() -> dict:
    return {
        "stringProp": "AB",
        "arrayProp": ["foo", "bar"],
        "numberProp": 1.1,
        "integerProp": 1,
        "booleanProp": False,
        "nullProp": None,
        "anyProp": 1,
        "multiProp": "foo",
        "customProp": "asdf",
        "dateTimeFormatProp": "2011-12-14T09:06:00Z",
        "dateFormatProp": "2011-12-14",
        "timeFormatProp": "09:00:00",
        "utcMillisecFormatProp": 123456789,
        "colorFormatProp": "#000000",
        "styleFormatProp": "background: #FFF url('foo.png') no-repeat 0px 0px;",
        "phoneFormatProp": "555-555-1234",
        "uriFormatProp": "https://www.google.com/",
        "objectProp": {"foo": "bar"},
    }
