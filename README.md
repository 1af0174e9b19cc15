# serdedoc

serdedoc reads Rust source files, finds the structs declared at the top level
of each file, and writes documentation for them. For each struct it records
the name, the named fields and their types, the names listed in its
`#[derive(...)]` attributes, and its doc comment (`///`, `/** */` or
`#[doc = "..."]`; when there are several, the first one is kept).

A field's type is recorded as the last segment of its path, so
`std::collections::HashMap<String, u32>` becomes `HashMap`. Types that are not
paths (references, tuples, arrays, `dyn`/`impl` types, macros) are recorded as
`Unknown`. Tuple structs and unit structs are recorded without fields.

Two output formats are available:

- `markdown`: a Markdown listing of every struct and its fields.
- `jsonschema`: a compact JSON Schema (draft-07) document with one definition
  per struct, keys sorted.

## Installation

```
pip install .
```

## Command line

List the structs found under a path. The path may be a single `.rs` file or a
directory, which is searched recursively for `.rs` files in sorted order. It
defaults to the current directory.

```
serde-doc --manifest-path path/to/crate list
```

Generate documentation:

```
serde-doc gen markdown
serde-doc gen jsonschema --output schema.json
serde-doc gen jsonschema --structs Point --structs Line
```

Without `--output` the result is printed to standard output. `--structs` can
be given more than once; only the `jsonschema` generator uses it, to limit the
output to the named structs. `--files` is accepted but no generator uses it.

A leading `serde-doc` argument is ignored, so `serde-doc serde-doc list` works
like `serde-doc list`. When a file cannot be parsed, the output cannot be
written or the generator name is unknown, the command prints `Error: ...` to
standard error and exits with status 1.

## Library use

```python
from serdedoc.model import Context
from serdedoc.extract import process_path, process_code
from serdedoc.generators import GeneratorConfig, get_generator, generate_json_schema

ctx = Context()
process_path(ctx, "src")
for struct in ctx.iter_structs():
    print(struct.name, [field.name for field in struct.fields])

generator = get_generator("markdown")
print(generator.render(ctx, GeneratorConfig()))

unit = process_code("struct Point { x: i32, y: i32 }")
schema = generate_json_schema(unit.structs)
```

- `serdedoc.model` holds the dataclasses `Context`, `FileUnit`, `StructUnit`
  and `FieldUnit`.
- `process_code` and `process_path` raise `ExtractError` when source cannot be
  parsed.
- `Generator.render` returns the document as a string; `Generator.generate`
  writes it to `GeneratorConfig.output` or prints it.
- `get_generator` raises `ValueError` for an unknown generator name.

## Mapping of field types in JSON Schema

| Rust type     | Schema                               |
|---------------|--------------------------------------|
| `String`      | `{"type": "string"}`                 |
| `i32`, `i64`  | `{"type": "integer"}`                |
| `f32`, `f64`  | `{"type": "number"}`                 |
| `bool`        | `{"type": "boolean"}`                |
| anything else | `{"$ref": "#/definitions/<Type>"}`   |

Every field is listed as required. A doc comment becomes the `description`.

## What it does not do

- It does not read `Cargo.toml`; `--manifest-path` only names a file or
  directory of `.rs` sources.
- It looks only at top-level structs. Enums, type aliases and structs inside
  modules or functions are not documented.
- serde attributes such as `#[serde(rename = ...)]` are not interpreted, and
  `Option` fields are still listed as required.