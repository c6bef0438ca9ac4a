"""Tests for the C# partial type generator."""

from __future__ import annotations

import pytest

from autoprop.codegen.core.config import load_config
from autoprop.codegen.core.generator import GeneratorError, generate_code
from autoprop.codegen.core.schema import FieldDescriptor, GenerationRequest
from autoprop.codegen.languages.csharp import CSharpGenerator, create_csharp_generator

from .conftest import BOOK_WITH_NAMESPACE, BOOK_WITHOUT_NAMESPACE


def test_generates_type_inside_namespace(generator, book_request) -> None:
    assert generator.generate(book_request) == BOOK_WITH_NAMESPACE


def test_generates_type_without_namespace(generator, book_fields) -> None:
    request = GenerationRequest("", "Book", book_fields)

    assert generator.generate(request) == BOOK_WITHOUT_NAMESPACE


def test_output_is_deterministic(generator, book_request) -> None:
    assert generator.generate(book_request) == generator.generate(book_request)


def test_empty_request_generates_nothing(generator) -> None:
    assert generator.generate(GenerationRequest("MyNamespace", "Book", ())) == ""


def test_single_field() -> None:
    generator = CSharpGenerator(load_config())
    request = GenerationRequest("", "Counter", (FieldDescriptor("count", "int"),))

    assert generator.generate(request) == (
        "partial class Counter\n"
        "{\n"
        "\tpublic Counter(int count)\n"
        "\t{\n"
        "\t\tthis.count = count;\n"
        "\t}\n"
        "\tpublic int Count { get => count; set => count = value; }\n"
        "}\n"
    )


def test_field_order_is_preserved(generator) -> None:
    request = GenerationRequest(
        "",
        "P",
        (
            FieldDescriptor("z", "int"),
            FieldDescriptor("a", "int"),
            FieldDescriptor("m", "int"),
        ),
    )
    code = generator.generate(request)

    assert "public P(int z, int a, int m)" in code
    assert code.index("public int Z") < code.index("public int A")
    assert code.index("public int A") < code.index("public int M")


def test_duplicate_fields_are_emitted_twice(generator) -> None:
    request = GenerationRequest(
        "", "P", (FieldDescriptor("a", "int"), FieldDescriptor("a", "int"))
    )
    code = generator.generate(request)

    assert "public P(int a, int a)" in code
    assert code.count("this.a = a;") == 2
    assert code.count("public int A {") == 2


def test_underscore_field_keeps_its_name(generator) -> None:
    request = GenerationRequest("", "P", (FieldDescriptor("_secret", "string"),))

    assert (
        "public string _secret { get => _secret; set => _secret = value; }"
        in generator.generate(request)
    )


def test_type_text_is_copied_verbatim(generator) -> None:
    request = GenerationRequest(
        "", "P", (FieldDescriptor("items", "List<int>?"),)
    )
    code = generator.generate(request)

    assert "public P(List<int>? items)" in code
    assert "public List<int>? Items {" in code


def test_struct_kind() -> None:
    generator = CSharpGenerator(load_config({"type_kind": "struct"}))
    request = GenerationRequest(
        "", "Point", (FieldDescriptor("x", "int"),), type_kind="struct"
    )

    assert generator.generate(request).startswith("partial struct Point\n{\n")


def test_space_indentation_and_crlf() -> None:
    generator = create_csharp_generator(
        {"use_tabs": False, "indent_size": 2, "line_ending": "\r\n"}
    )
    request = GenerationRequest("N", "T", (FieldDescriptor("a", "int"),))
    lines = generator.generate(request).split("\r\n")

    assert lines[0] == "namespace N"
    assert lines[2] == "  partial class T"
    assert lines[4] == "    public T(int a)"
    assert lines[6] == "      this.a = a;"
    assert lines[-1] == ""


def test_generate_all_keys_and_skips_empty(generator, book_request) -> None:
    empty = GenerationRequest("MyNamespace", "Program", ())
    outputs = generator.generate_all([book_request, empty])

    assert list(outputs) == ["Book.g"]
    assert outputs["Book.g"] == BOOK_WITH_NAMESPACE


def test_support_sources_contain_attribute(generator) -> None:
    sources = generator.get_support_sources()

    assert list(sources) == ["AutoPropAttribute.g"]
    text = sources["AutoPropAttribute.g"]
    assert text.startswith("\nnamespace System\n{\n")
    assert "public class AutoPropAttribute : System.Attribute" in text
    assert (
        "[System.AttributeUsage(System.AttributeTargets.Class | "
        "System.AttributeTargets.Struct)]" in text
    )
    assert text.endswith("    }\n}")


def test_support_sources_follow_config() -> None:
    generator = create_csharp_generator(
        {"attribute_name": "Generated", "attribute_namespace": "Tools"}
    )
    sources = generator.get_support_sources()

    assert list(sources) == ["GeneratedAttribute.g"]
    assert "namespace Tools" in sources["GeneratedAttribute.g"]


def test_support_sources_can_be_disabled() -> None:
    generator = create_csharp_generator({"emit_attribute": False})

    assert generator.get_support_sources() == {}


def test_validate_requests_reports_problems(generator) -> None:
    requests = [
        GenerationRequest("", "Empty", ()),
        GenerationRequest(
            "",
            "Order",
            (
                FieldDescriptor("id", "int"),
                FieldDescriptor("id", "int"),
                FieldDescriptor("_total", "decimal"),
                FieldDescriptor("order", "string"),
                FieldDescriptor("class", "string"),
            ),
        ),
    ]
    warnings = generator.validate_requests(requests)

    assert "Type 'Empty' has no fields - skipped" in warnings
    assert any("Duplicate field 'id'" in w for w in warnings)
    assert any("Order._total" in w and "backing field" in w for w in warnings)
    assert any("Order.Order" in w and "enclosing type" in w for w in warnings)
    assert any("Order.class is a C# keyword" in w for w in warnings)


def test_validate_requests_clean(generator, book_request) -> None:
    assert generator.validate_requests([book_request]) == []


def test_generate_code_result(generator, book_request) -> None:
    result = generate_code(
        generator, [book_request, GenerationRequest("", "Skipped", ())]
    )

    assert result.success
    assert result.files == {"Book.g": BOOK_WITH_NAMESPACE}
    assert result.code == BOOK_WITH_NAMESPACE
    assert result.metadata == {
        "language": "csharp",
        "file_extension": ".cs",
        "type_count": 1,
        "field_count": 2,
        "skipped": 1,
    }
    assert result.warnings == ["Type 'Skipped' has no fields - skipped"]


def test_generate_code_turns_exceptions_into_error_result(generator, monkeypatch):
    def explode(request):
        raise RuntimeError("boom")

    monkeypatch.setattr(generator, "generate", explode)
    result = generate_code(
        generator, [GenerationRequest("", "T", (FieldDescriptor("a", "int"),))]
    )

    assert not result.success
    assert "boom" in result.error_message
    assert isinstance(result.exception, RuntimeError)


def test_generate_all_rejects_colliding_file_keys(generator, book_fields) -> None:
    requests = [
        GenerationRequest("A", "Book", book_fields),
        GenerationRequest("", "Other", book_fields),
        GenerationRequest("B", "Book", book_fields),
    ]

    with pytest.raises(GeneratorError, match="A.Book and B.Book both generate Book.g"):
        generator.generate_all(requests)


def test_generate_code_reports_colliding_file_keys(generator, book_fields) -> None:
    result = generate_code(
        generator,
        [
            GenerationRequest("A", "Book", book_fields),
            GenerationRequest("B", "Book", book_fields),
        ],
    )

    assert not result.success
    assert result.files == {}
    assert "both generate Book.g" in result.error_message


def test_request_accepts_field_pairs(generator) -> None:
    request = GenerationRequest("", "Counter", [("count", "int")])

    assert request.fields == (FieldDescriptor("count", "int"),)
    assert "public int Count { get => count; set => count = value; }" in (
        generator.generate(request)
    )


def test_attribute_source_text(generator) -> None:
    assert generator.render_attribute_source() == (
        "\n"
        "namespace System\n"
        "{\n"
        "    [System.AttributeUsage(System.AttributeTargets.Class | "
        "System.AttributeTargets.Struct)]\n"
        "    public class AutoPropAttribute : System.Attribute\n"
        "    {\n"
        "    }\n"
        "}"
    )
