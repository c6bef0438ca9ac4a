"""Shared pytest fixtures for the autoprop test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from autoprop.codegen.core.config import load_config
from autoprop.codegen.core.schema import FieldDescriptor, GenerationRequest
from autoprop.codegen.languages.csharp import CSharpGenerator

BOOK_WITH_NAMESPACE = (
    "namespace MyNamespace\n"
    "{\n"
    "\tpartial class Book\n"
    "\t{\n"
    "\t\tpublic Book(string writer, decimal isbn)\n"
    "\t\t{\n"
    "\t\t\tthis.writer = writer;\n"
    "\t\t\tthis.isbn = isbn;\n"
    "\t\t}\n"
    "\t\tpublic string Writer { get => writer; set => writer = value; }\n"
    "\t\tpublic decimal Isbn { get => isbn; set => isbn = value; }\n"
    "\t}\n"
    "}\n"
)

BOOK_WITHOUT_NAMESPACE = (
    "partial class Book\n"
    "{\n"
    "\tpublic Book(string writer, decimal isbn)\n"
    "\t{\n"
    "\t\tthis.writer = writer;\n"
    "\t\tthis.isbn = isbn;\n"
    "\t}\n"
    "\tpublic string Writer { get => writer; set => writer = value; }\n"
    "\tpublic decimal Isbn { get => isbn; set => isbn = value; }\n"
    "}\n"
)


@pytest.fixture
def book_fields() -> tuple[FieldDescriptor, ...]:
    return (FieldDescriptor("writer", "string"), FieldDescriptor("isbn", "decimal"))


@pytest.fixture
def book_request(book_fields) -> GenerationRequest:
    return GenerationRequest("MyNamespace", "Book", book_fields)


@pytest.fixture
def generator() -> CSharpGenerator:
    return CSharpGenerator(load_config())


@pytest.fixture
def declaration_document() -> dict[str, Any]:
    """Mirrors a small program with two opted-in types and two that are not."""
    return {
        "types": [
            {
                "name": "Book",
                "namespace": "MyNamespace",
                "modifiers": ["public", "partial"],
                "attributes": ["AutoProp"],
                "fields": [
                    {"type": "string", "name": "writer"},
                    {"type": "decimal", "name": "isbn"},
                ],
            },
            {
                "name": "Publisher",
                "namespace": "MyNamespace",
                "modifiers": ["public", "partial"],
                "attributes": ["System.AutoPropAttribute"],
                "fields": [{"type": "string", "names": ["writer"]}],
            },
            {
                "name": "Program",
                "namespace": "MyNamespace",
                "modifiers": ["internal"],
                "attributes": [],
                "fields": [],
            },
            {
                "name": "Sealed",
                "namespace": "MyNamespace",
                "modifiers": ["public"],
                "attributes": ["AutoProp"],
                "fields": [{"type": "int", "name": "count"}],
            },
        ]
    }


@pytest.fixture
def declaration_file(tmp_path: Path, declaration_document) -> Path:
    path = tmp_path / "declarations.json"
    path.write_text(json.dumps(declaration_document), encoding="utf-8")
    return path
