"""
pytest configuration and fixtures for entity_codegen tests.

Shared fixtures build schema ASTs with the helpers in ``tests.builders``.
"""
import json

import pytest

from entity_codegen.codegen.core.config import GeneratorConfig
from entity_codegen.codegen.core.schema import load_document
from entity_codegen.codegen.languages.assemblyscript import AscTypeMapper

from tests.builders import document, field, list_of, named, non_null, object_type


@pytest.fixture
def mapper():
    return AscTypeMapper()


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def token_ast():
    """``type Token @entity { id: ID!, owner: Bytes }``"""
    return document(
        object_type(
            "Token",
            [
                field("id", non_null(named("ID"))),
                field("owner", named("Bytes")),
            ],
        )
    )


@pytest.fixture
def token_document(token_ast):
    return load_document(token_ast)


@pytest.fixture
def mixed_ast():
    """Entities interleaved with types that must be skipped."""
    return document(
        object_type("Account", [field("id", non_null(named("ID")))]),
        object_type("Helper", [field("note", named("String"))], directives=()),
        {
            "kind": "EnumTypeDefinition",
            "name": {"kind": "Name", "value": "Color"},
            "values": [],
        },
        object_type(
            "Transfer",
            [
                field("id", non_null(named("ID"))),
                field("amount", non_null(named("BigInt"))),
                field("tags", non_null(list_of(non_null(named("String"))))),
            ],
        ),
        object_type("Meta", [field("id", non_null(named("ID")))], directives=("other",)),
    )


@pytest.fixture
def schema_file(tmp_path, token_ast):
    path = tmp_path / "schema.ast.json"
    path.write_text(json.dumps(token_ast), encoding="utf-8")
    return path
