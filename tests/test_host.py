"""Tests for declaration discovery and the generator host."""

from __future__ import annotations

import pytest

from autoprop.codegen.core.config import load_config
from autoprop.codegen.core.generator import GeneratorError
from autoprop.codegen.core.schema import FieldDescriptor
from autoprop.codegen.host import (
    DeclarationError,
    FieldDeclaration,
    SourceGeneratorHost,
    TypeDeclaration,
    is_eligible,
    load_declarations,
    make_eligibility_predicate,
    marker_spellings,
    to_request,
)
from autoprop.codegen.languages.csharp import CSharpGenerator

from .conftest import BOOK_WITH_NAMESPACE


def _declaration(**overrides) -> TypeDeclaration:
    values = dict(
        name="Book",
        namespace="MyNamespace",
        modifiers=("public", "partial"),
        attributes=("AutoProp",),
        fields=(FieldDeclaration("string", ("writer",)),),
    )
    values.update(overrides)
    return TypeDeclaration(**values)


def test_marker_spellings() -> None:
    assert marker_spellings("AutoProp", "System") == {
        "AutoProp",
        "AutoPropAttribute",
        "System.AutoProp",
        "System.AutoPropAttribute",
    }
    assert marker_spellings("AutoPropAttribute") == {"AutoProp", "AutoPropAttribute"}


@pytest.mark.parametrize(
    "attribute",
    ["AutoProp", "AutoPropAttribute", "System.AutoProp", "System.AutoPropAttribute"],
)
def test_every_marker_spelling_is_eligible(attribute: str) -> None:
    assert is_eligible(_declaration(attributes=("Serializable", attribute)))


def test_ineligible_declarations() -> None:
    assert not is_eligible(_declaration(attributes=()))
    assert not is_eligible(_declaration(attributes=("Other.AutoProp",)))
    assert not is_eligible(_declaration(modifiers=("public",)))


def test_custom_marker_predicate() -> None:
    predicate = make_eligibility_predicate("Generated", "Tools")

    assert predicate(_declaration(attributes=("Tools.Generated",)))
    assert not predicate(_declaration())


def test_to_request_flattens_multi_variable_fields() -> None:
    declaration = _declaration(
        namespace="",
        kind="struct",
        fields=(
            FieldDeclaration("int", ("a", "b")),
            FieldDeclaration("string", ("c",)),
        ),
    )
    request = to_request(declaration, default_namespace="Fallback")

    assert request.namespace_name == "Fallback"
    assert request.type_kind == "struct"
    assert request.fields == (
        FieldDescriptor("a", "int"),
        FieldDescriptor("b", "int"),
        FieldDescriptor("c", "string"),
    )


def test_load_declarations(declaration_document) -> None:
    declarations = load_declarations(declaration_document)

    assert [d.name for d in declarations] == ["Book", "Publisher", "Program", "Sealed"]
    assert declarations[0].fields[0] == FieldDeclaration("string", ("writer",))
    assert declarations[1].attributes == ("System.AutoPropAttribute",)
    assert declarations[2].kind == "class"


def test_load_declarations_default_kind() -> None:
    declarations = load_declarations([{"name": "Point"}], default_kind="struct")

    assert declarations[0].kind == "struct"


@pytest.mark.parametrize(
    "data",
    [
        {"classes": []},
        "Book",
        [{"namespace": "NoName"}],
        [{"name": "T", "fields": {"type": "int"}}],
        [{"name": "T", "fields": [{"name": "a"}]}],
        [{"name": "T", "fields": [{"type": "int"}]}],
        [{"name": "T", "attributes": [1]}],
    ],
)
def test_load_declarations_rejects_malformed(data) -> None:
    with pytest.raises(DeclarationError):
        load_declarations(data)


def test_run_generates_eligible_types(declaration_document) -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))
    outputs = host.run(load_declarations(declaration_document))

    assert list(outputs) == ["AutoPropAttribute.g.cs", "Book.g.cs", "Publisher.g.cs"]
    assert outputs["Book.g.cs"] == BOOK_WITH_NAMESPACE
    assert "public string Writer" in outputs["Publisher.g.cs"]


def test_support_sources_are_registered_once(declaration_document) -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))
    declarations = load_declarations(declaration_document)

    host.run(declarations)
    second = host.run(declarations)

    assert list(second) == ["Book.g.cs", "Publisher.g.cs"]


def test_eligible_type_without_fields_is_skipped() -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))

    outputs = host.run([_declaration(fields=())])

    assert list(outputs) == ["AutoPropAttribute.g.cs"]


def test_collect_requests_returns_skipped_names() -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))
    declarations = [_declaration(), _declaration(name="Hollow", fields=())]

    requests, skipped = host.collect_requests(declarations)

    assert [r.type_name for r in requests] == ["Book"]
    assert skipped == ["Hollow"]
    assert host.collect_requests([_declaration()])[1] == []


def test_host_uses_configured_marker() -> None:
    generator = CSharpGenerator(
        load_config({"attribute_name": "Generated", "emit_attribute": False})
    )
    host = SourceGeneratorHost(generator)

    assert host.run([_declaration()]) == {}
    assert list(host.run([_declaration(attributes=("Generated",))])) == ["Book.g.cs"]


def test_default_namespace_from_config() -> None:
    generator = CSharpGenerator(
        load_config({"default_namespace": "App", "emit_attribute": False})
    )
    outputs = SourceGeneratorHost(generator).run([_declaration(namespace="")])

    assert outputs["Book.g.cs"].startswith("namespace App\n{\n")


def test_build_reports_skipped_types(declaration_document) -> None:
    declarations = load_declarations(declaration_document)
    declarations.append(_declaration(name="Hollow", fields=()))
    host = SourceGeneratorHost(CSharpGenerator(load_config()))

    result = host.build(declarations)

    assert result.success
    assert list(result.files) == [
        "AutoPropAttribute.g.cs",
        "Book.g.cs",
        "Publisher.g.cs",
    ]
    assert result.metadata["type_count"] == 2
    assert result.metadata["skipped"] == 1
    assert "Type 'Hollow' has no fields - skipped" in result.warnings


def test_same_type_name_in_two_namespaces_fails_build() -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))
    declarations = [_declaration(namespace="A"), _declaration(namespace="B")]

    result = host.build(declarations)

    assert not result.success
    assert result.files == {}
    assert "A.Book and B.Book both generate Book.g" in result.error_message


def test_same_type_name_in_two_namespaces_fails_run() -> None:
    host = SourceGeneratorHost(CSharpGenerator(load_config()))
    declarations = [_declaration(namespace="A"), _declaration(namespace="B")]

    with pytest.raises(GeneratorError, match="both generate Book.g"):
        host.run(declarations)

    # the attribute source was not consumed by the failed run
    assert "AutoPropAttribute.g.cs" in host.run([_declaration()])
