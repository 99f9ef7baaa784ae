"""
Tests for schema loading helpers and logging setup.
"""
import io
import json
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from entity_codegen.logging_config import (
    ROOT_LOGGER_NAME,
    configure_logging,
    get_logger,
)
from entity_codegen.utils import (
    JSONLoaderError,
    load_json,
    load_json_from_file,
    load_json_from_stream,
)


class TestLoadJson:
    def test_file(self, schema_file, token_ast):
        source, data = load_json_from_file(schema_file)

        assert source == str(schema_file)
        assert data == token_ast

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json_from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_other_suffix_is_accepted(self, tmp_path):
        path = tmp_path / "schema.ast"
        path.write_text(json.dumps({"kind": "Document"}), encoding="utf-8")

        assert load_json_from_file(path)[1] == {"kind": "Document"}

    def test_stream(self):
        assert load_json_from_stream(io.StringIO('{"a": 1}')) == ("<stdin>", {"a": 1})

    def test_invalid_stream(self):
        with pytest.raises(JSONLoaderError):
            load_json_from_stream(io.StringIO("nope"))

    @pytest.mark.parametrize("path", [None, "-"])
    def test_dash_reads_stdin(self, path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("[]"))
        assert load_json(path) == ("<stdin>", [])


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_get_logger_nests_names(self):
        assert get_logger("cli").name == "entity_codegen.cli"
        assert get_logger("entity_codegen.utils").name == "entity_codegen.utils"
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME

    def test_configure_logging_replaces_handler(self):
        stream = io.StringIO()
        configure_logging(logging.DEBUG, Console(file=stream, width=200))
        handler = configure_logging(logging.DEBUG, Console(file=stream, width=200))

        root = logging.getLogger(ROOT_LOGGER_NAME)
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert rich_handlers == [handler]
        assert root.level == logging.DEBUG

        get_logger("tests").debug("hello from %s", "tests")
        assert "hello from tests" in stream.getvalue()
