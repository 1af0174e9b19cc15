"""Markdown and JSON Schema documentation for structs found in Rust source files."""

__version__ = "0.1.0"
__all__ = ["cli", "extract", "generators", "model"]