"""Data collected from Rust source files: files, structs and their fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class FieldUnit:
    """A named field of a struct."""

    name: str
    ty: str
    doc: str | None = None


@dataclass
class StructUnit:
    """A struct with its fields, derived traits and doc comment."""

    name: str
    fields: list[FieldUnit] = field(default_factory=list)
    derive: list[str] = field(default_factory=list)
    doc: str | None = None


@dataclass
class FileUnit:
    """The structs found in one source file."""

    structs: list[StructUnit] = field(default_factory=list)
    doc: str | None = None


@dataclass
class Context:
    """Everything gathered from the processed source files."""

    files: list[FileUnit] = field(default_factory=list)

    def iter_structs(self) -> Iterator[StructUnit]:
        """Yield every struct of every file, in file order."""
        for file_unit in self.files:
            yield from file_unit.structs