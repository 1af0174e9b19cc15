"""Documentation generators for the structs gathered in a Context."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from .model import Context, StructUnit

_JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"

_PRIMITIVE_SCHEMAS = {
    "String": "string",
    "i32": "integer",
    "i64": "integer",
    "f32": "number",
    "f64": "number",
    "bool": "boolean",
}


@dataclass
class GeneratorConfig:
    """Options controlling what a generator produces and where it goes."""

    output: str | None = None
    structs: list[str] | None = None
    files: list[str] | None = None


class Generator(ABC):
    """Turns a Context into documentation text."""

    @abstractmethod
    def render(self, ctx: Context, config: GeneratorConfig) -> str:
        """Return the generated document."""

    def generate(self, ctx: Context, config: GeneratorConfig) -> None:
        """Render the document and write it to the configured output or stdout."""
        content = self.render(ctx, config)
        if config.output is not None:
            try:
                Path(config.output).write_text(content, encoding="utf-8")
            except OSError as exc:
                raise OSError(f"failed to write to file: {config.output!r}: {exc}") from exc
        else:
            print(content)


class MarkdownGenerator(Generator):
    """Renders every struct as a Markdown section listing its fields."""

    def render(self, ctx: Context, config: GeneratorConfig) -> str:
        lines = ["## Structs"]
        for struct_unit in ctx.iter_structs():
            lines.append(f"### {struct_unit.name}")
            if struct_unit.doc is not None:
                lines.append(struct_unit.doc)
            lines.append("Fields:")
            for field in struct_unit.fields:
                lines.append(f"- {field.name}: {field.ty}")
                if field.doc is not None:
                    lines.append(f"  - {field.doc}")
        return "".join(f"{line}\n" for line in lines)


class JsonSchemaGenerator(Generator):
    """Renders the selected structs as a JSON Schema document."""

    def render(self, ctx: Context, config: GeneratorConfig) -> str:
        selected = [
            s for s in ctx.iter_structs()
            if config.structs is None or s.name in config.structs
        ]
        schema = generate_json_schema(selected)
        return json.dumps(schema, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _field_schema(ty: str) -> dict[str, Any]:
    if ty in _PRIMITIVE_SCHEMAS:
        return {"type": _PRIMITIVE_SCHEMAS[ty]}
    return {"$ref": f"#/definitions/{ty}"}


def generate_json_schema(structs: Iterable[StructUnit]) -> dict[str, Any]:
    """Build a draft-07 JSON Schema with one definition per struct."""
    definitions: dict[str, Any] = {}
    for s in structs:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for field in s.fields:
            entry = _field_schema(field.ty)
            if field.doc is not None:
                entry["description"] = field.doc
            properties[field.name] = entry
            required.append(field.name)
        struct_schema: dict[str, Any] = {
            "type": "object",
            "properties": properties,
            "required": required,
        }
        if s.doc is not None:
            struct_schema["description"] = s.doc
        definitions[s.name] = struct_schema
    return {"$schema": _JSON_SCHEMA_DRAFT, "definitions": definitions}


_GENERATORS: dict[str, type[Generator]] = {
    "markdown": MarkdownGenerator,
    "jsonschema": JsonSchemaGenerator,
}


def get_generator(name: str) -> Generator:
    """Return the generator registered under ``name``."""
    try:
        return _GENERATORS[name]()
    except KeyError:
        raise ValueError(f"Unknown generator: {name}") from None