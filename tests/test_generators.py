import json

import pytest

from serdedoc.generators import (
    GeneratorConfig,
    JsonSchemaGenerator,
    MarkdownGenerator,
    generate_json_schema,
    get_generator,
)
from serdedoc.model import Context, FieldUnit, FileUnit, StructUnit


def _point() -> StructUnit:
    return StructUnit(
        "Point",
        fields=[FieldUnit("x", "i32", " The x coordinate"), FieldUnit("y", "i32")],
        derive=["Serialize"],
        doc=" This is a point struct",
    )


def _line() -> StructUnit:
    return StructUnit("Line", fields=[FieldUnit("start", "Point"), FieldUnit("label", "String")])


@pytest.fixture
def ctx() -> Context:
    return Context(files=[FileUnit(structs=[_point()]), FileUnit(structs=[_line()])])


def test_markdown_render(ctx):
    text = MarkdownGenerator().render(ctx, GeneratorConfig())
    assert text.splitlines() == [
        "## Structs",
        "### Point",
        " This is a point struct",
        "Fields:",
        "- x: i32",
        "  -  The x coordinate",
        "- y: i32",
        "### Line",
        "Fields:",
        "- start: Point",
        "- label: String",
    ]
    assert text.endswith("\n")


def test_markdown_ignores_struct_filter(ctx):
    gen = MarkdownGenerator()
    assert gen.render(ctx, GeneratorConfig(structs=["Point"])) == gen.render(ctx, GeneratorConfig())


def test_markdown_empty_context():
    assert MarkdownGenerator().render(Context(), GeneratorConfig()) == "## Structs\n"


def test_generate_json_schema_types():
    schema = generate_json_schema([_point(), _line()])
    assert schema["$schema"] == "http://json-schema.org/draft-07/schema#"
    point = schema["definitions"]["Point"]
    assert point["type"] == "object"
    assert point["description"] == " This is a point struct"
    assert point["properties"]["x"] == {"type": "integer", "description": " The x coordinate"}
    assert point["required"] == ["x", "y"]
    line = schema["definitions"]["Line"]
    assert line["properties"]["start"] == {"$ref": "#/definitions/Point"}
    assert line["properties"]["label"] == {"type": "string"}
    assert "description" not in line


@pytest.mark.parametrize(
    "ty,expected",
    [("i64", "integer"), ("f32", "number"), ("f64", "number"), ("bool", "boolean")],
)
def test_primitive_mapping(ty, expected):
    schema = generate_json_schema([StructUnit("S", fields=[FieldUnit("v", ty)])])
    assert schema["definitions"]["S"]["properties"]["v"] == {"type": expected}


def test_json_schema_render_filters_and_is_compact(ctx):
    text = JsonSchemaGenerator().render(ctx, GeneratorConfig(structs=["Line"]))
    assert " " not in text
    parsed = json.loads(text)
    assert list(parsed["definitions"]) == ["Line"]
    assert parsed == generate_json_schema([_line()])


def test_json_schema_render_all(ctx):
    parsed = json.loads(JsonSchemaGenerator().render(ctx, GeneratorConfig()))
    assert set(parsed["definitions"]) == {"Point", "Line"}


def test_generate_to_stdout(ctx, capsys):
    gen = MarkdownGenerator()
    gen.generate(ctx, GeneratorConfig())
    assert capsys.readouterr().out == gen.render(ctx, GeneratorConfig()) + "\n"


def test_generate_to_file(ctx, tmp_path, capsys):
    out = tmp_path / "schema.json"
    config = GeneratorConfig(output=str(out))
    gen = JsonSchemaGenerator()
    gen.generate(ctx, config)
    assert out.read_text(encoding="utf-8") == gen.render(ctx, config)
    assert capsys.readouterr().out == ""


def test_get_generator_markdown(ctx):
    text = get_generator("markdown").render(ctx, GeneratorConfig())
    assert text.startswith("## Structs\n### Point\n")
    assert text == MarkdownGenerator().render(ctx, GeneratorConfig())


def test_get_generator_jsonschema(ctx):
    text = get_generator("jsonschema").render(ctx, GeneratorConfig())
    assert json.loads(text) == generate_json_schema([_point(), _line()])


def test_get_generator_unknown():
    with pytest.raises(ValueError, match="Unknown generator: html"):
        get_generator("html")