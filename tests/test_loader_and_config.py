import logging

import pytest

from json_schema_validator.config import ValidatorConfig
from json_schema_validator.exceptions import DocumentParseError, SchemaNotFoundError
from json_schema_validator.file_io import load_document, parse_document, read_text


def test_read_text_not_found(tmp_path):
    with pytest.raises(SchemaNotFoundError):
        read_text(tmp_path / "missing.json")
    with pytest.raises(DocumentParseError):
        read_text(tmp_path / "missing.json", not_found_error=DocumentParseError)


def test_parse_document_json_and_yaml():
    assert parse_document('{"a": [1, null]}') == {"a": [1, None]}
    assert parse_document("a:\n  - 1\n", name="doc.yml") == {"a": [1]}


@pytest.mark.parametrize("text,name", [("", None), ("{", None), ("a: [1", "doc.yaml")])
def test_parse_document_malformed(text, name):
    with pytest.raises(DocumentParseError):
        parse_document(text, name=name)


def test_load_document(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('"hello"', encoding="utf-8")

    assert load_document(path) == "hello"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("JSON_SCHEMA_VALIDATOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("JSON_SCHEMA_VALIDATOR_MAX_DEPTH", "12")

    config = ValidatorConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.max_depth == 12
    assert config.encoding == "utf-8"


def test_set_logging_installs_split_handlers():
    logger = ValidatorConfig(log_level="DEBUG", print_level="ERROR").set_logging()

    assert logger.name == "json_schema_validator"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2


def test_read_text_undecodable(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b'{"a": "\xff"}')

    with pytest.raises(DocumentParseError, match="Unable to decode"):
        read_text(path)


def test_read_text_honours_encoding(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes('"café"'.encode("latin-1"))

    assert read_text(path, encoding="latin-1") == '"café"'


def test_yaml_dates_stay_strings():
    doc = parse_document("d: 2011-12-14\nt: 2011-12-14T10:00:00Z\nn: 3\n", name="doc.yaml")

    assert doc == {"d": "2011-12-14", "t": "2011-12-14T10:00:00Z", "n": 3}


def test_set_logging_leaves_root_logger_alone():
    root = logging.getLogger()
    before = list(root.handlers)

    ValidatorConfig().set_logging()
    logger = ValidatorConfig().set_logging()

    assert root.handlers == before
    assert len(logger.handlers) == 2
