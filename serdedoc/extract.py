"""Extraction of struct definitions from Rust source code."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterator, NamedTuple

from .model import Context, FieldUnit, FileUnit, StructUnit


class ExtractError(Exception):
    """Raised when source code cannot be parsed."""


class _Lexeme(NamedTuple):
    kind: str  # ident, punct, str, lit, doc, innerdoc
    text: str
    value: str | None = None


_LEXER = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<line>//[^\n]*)
    |(?P<block>/\*)
    |(?P<raw>b?r(?P<hashes>\#*)")
    |(?P<str>b?"(?:\\.|[^\\"])*")
    |(?P<char>b?'(?:\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]*\}|.)|[^\\'\n])')
    |(?P<lifetime>'[^\W\d]\w*)
    |(?P<ident>(?:r\#)?[^\W\d]\w*)
    |(?P<num>\d\w*(?:\.\d\w*)?)
    |(?P<punct>::|->|=>|[^\s\w'"])
    """,
    re.VERBOSE | re.DOTALL,
)
_COMMENT_MARK = re.compile(r"/\*|\*/")
_ESCAPE = re.compile(r"\\(x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]*\}|\n\s*|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", "'": "'", '"': '"'}
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_NON_PATH_TYPES = {"dyn", "impl", "fn", "unsafe", "extern", "for"}


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        esc = match.group(1)
        if esc in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[esc]
        if esc.startswith("x"):
            return chr(int(esc[1:], 16))
        if esc.startswith("u{"):
            return chr(int(esc[2:-1].replace("_", ""), 16))
        if esc.startswith("\n"):
            return ""
        raise ExtractError(f"unknown escape: \\{esc}")

    return _ESCAPE.sub(replace, body)


def _block_comment_end(code: str, start: int) -> int:
    depth = 0
    for mark in _COMMENT_MARK.finditer(code, start):
        depth += 1 if mark.group() == "/*" else -1
        if depth == 0:
            return mark.end()
    raise ExtractError("unterminated block comment")


def _tokenize(code: str) -> list[_Lexeme]:
    lexemes: list[_Lexeme] = []
    pos = 0
    while pos < len(code):
        match = _LEXER.match(code, pos)
        if match is None:
            raise ExtractError(f"unexpected character: {code[pos]!r}")
        kind, text, end = match.lastgroup, match.group(), match.end()
        if kind == "line":
            if text.startswith("///") and not text.startswith("////"):
                lexemes.append(_Lexeme("doc", text, text[3:]))
            elif text.startswith("//!"):
                lexemes.append(_Lexeme("innerdoc", text, text[3:]))
        elif kind == "block":
            end = _block_comment_end(code, pos)
            text = code[pos:end]
            if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
                lexemes.append(_Lexeme("doc", text, text[3:-2]))
            elif text.startswith("/*!"):
                lexemes.append(_Lexeme("innerdoc", text, text[3:-2]))
        elif kind == "raw":
            closing = '"' + match.group("hashes")
            stop = code.find(closing, end)
            if stop == -1:
                raise ExtractError("unterminated raw string literal")
            kind = "lit" if text.startswith("b") else "str"
            end = stop + len(closing)
            lexemes.append(_Lexeme(kind, code[pos:end], code[match.end():stop]))
        elif kind == "str":
            if text.startswith("b"):
                lexemes.append(_Lexeme("lit", text))
            else:
                lexemes.append(_Lexeme("str", text, _unescape(text[1:-1])))
        elif kind in ("char", "lifetime", "num"):
            lexemes.append(_Lexeme("lit", text))
        elif kind in ("ident", "punct"):
            lexemes.append(_Lexeme(kind, text))
        pos = end
    return lexemes


def _match_delimiters(lexemes: list[_Lexeme]) -> dict[int, int]:
    closing: dict[int, int] = {}
    stack: list[int] = []
    for index, lex in enumerate(lexemes):
        if lex.kind != "punct":
            continue
        if lex.text in _OPENERS:
            stack.append(index)
        elif lex.text in _OPENERS.values():
            if not stack or _OPENERS[lexemes[stack[-1]].text] != lex.text:
                raise ExtractError(f"unexpected closing delimiter: {lex.text}")
            closing[stack.pop()] = index
    if stack:
        raise ExtractError(f"unclosed delimiter: {lexemes[stack[-1]].text}")
    return closing


class _Parser:
    def __init__(self, lexemes: list[_Lexeme]) -> None:
        self.tokens = lexemes
        self.close = _match_delimiters(lexemes)

    def _is(self, p: int, text: str, kind: str = "punct") -> bool:
        return p < len(self.tokens) and self.tokens[p][:2] == (kind, text)

    def parse_file(self) -> FileUnit:
        unit = FileUnit()
        end = len(self.tokens)
        p = 0
        while p < end:
            if self.tokens[p].kind == "innerdoc":
                p += 1
            elif self._is(p, "#") and self._is(p + 1, "!") and self._is(p + 2, "["):
                p = self.close[p + 2] + 1
            else:
                doc, derives, p = self._read_attrs(p, end)
                if p >= end:
                    break
                p = self._skip_visibility(p)
                if self._is(p, "struct", "ident"):
                    struct_unit, p = self._parse_struct(p + 1, doc, derives)
                    unit.structs.append(struct_unit)
                else:
                    p = self._skip_item(p, end)
        return unit

    def _read_attrs(self, p: int, end: int) -> tuple[str | None, list[str], int]:
        """Read outer attributes; the doc is that of the first doc attribute."""
        docs: list[str | None] = []
        derives: list[str] = []
        while p < end:
            if self.tokens[p].kind == "doc":
                docs.append(self.tokens[p].value)
                p += 1
            elif self._is(p, "#") and self._is(p + 1, "["):
                close = self.close[p + 1]
                self._parse_attr(p + 2, close, docs, derives)
                p = close + 1
            else:
                break
        return (docs[0] if docs else None), derives, p

    def _parse_attr(self, a: int, b: int, docs: list[str | None], derives: list[str]) -> None:
        if a >= b or self.tokens[a].kind != "ident" or self._is(a + 1, "::"):
            return
        name = self.tokens[a].text
        if name == "doc":
            is_value = self._is(a + 1, "=") and a + 2 < b and self.tokens[a + 2].kind == "str"
            docs.append(self.tokens[a + 2].value if is_value else None)
        elif name == "derive" and self._is(a + 1, "("):
            for start, stop in self._split(a + 2, self.close[a + 1]):
                if stop - start == 1 and self.tokens[start].kind == "ident":
                    derives.append(self.tokens[start].text)

    def _split(self, a: int, b: int) -> Iterator[tuple[int, int]]:
        """Yield the comma-separated spans between a and b, ignoring nested commas."""
        start = a
        depth = 0
        p = a
        while p < b:
            if p in self.close:
                p = self.close[p] + 1
                continue
            text = self.tokens[p].text if self.tokens[p].kind == "punct" else ""
            if text == "<":
                depth += 1
            elif text == ">":
                depth = max(depth - 1, 0)
            elif text == "," and depth == 0:
                yield start, p
                start = p + 1
            p += 1
        if start < b:
            yield start, b

    def _skip_visibility(self, p: int) -> int:
        if self._is(p, "pub", "ident"):
            p += 1
            if self._is(p, "("):
                p = self.close[p] + 1
        return p

    def _skip_item(self, p: int, end: int) -> int:
        while p < end:
            if self._is(p, ";"):
                return p + 1
            if self._is(p, "{"):
                return self.close[p] + 1
            p = self.close.get(p, p) + 1
        return end

    def _parse_struct(self, p: int, doc: str | None, derives: list[str]) -> tuple[StructUnit, int]:
        if p >= len(self.tokens) or self.tokens[p].kind != "ident":
            raise ExtractError("expected struct name")
        unit = StructUnit(self.tokens[p].text, derive=derives, doc=doc)
        while p < len(self.tokens):
            if self._is(p, "{"):
                unit.fields = self._parse_fields(p + 1, self.close[p])
                return unit, self.close[p] + 1
            if self._is(p, ";"):
                return unit, p + 1
            p = self.close.get(p, p) + 1
        raise ExtractError(f"unexpected end of struct {unit.name}")

    def _parse_fields(self, a: int, b: int) -> list[FieldUnit]:
        fields = []
        for start, stop in self._split(a, b):
            doc, _, q = self._read_attrs(start, stop)
            q = self._skip_visibility(q)
            if q >= stop or self.tokens[q].kind != "ident" or not self._is(q + 1, ":"):
                raise ExtractError("expected named field")
            fields.append(FieldUnit(self.tokens[q].text, self._type_name(q + 2, stop), doc))
        return fields

    def _type_name(self, a: int, b: int) -> str:
        """Return the last segment of a path type, or "Unknown" for other types."""
        if a >= b:
            raise ExtractError("expected field type")
        first = self.tokens[a]
        if first.kind == "ident" and first.text in _NON_PATH_TYPES:
            return "Unknown"
        if first.kind != "ident" and not (self._is(a, "::") or self._is(a, "<")):
            return "Unknown"
        last = "Unknown"
        depth = 0
        p = a
        while p < b:
            if p in self.close:
                p = self.close[p] + 1
                continue
            lex = self.tokens[p]
            if lex.kind == "punct":
                if lex.text == "<":
                    depth += 1
                elif lex.text == ">":
                    depth -= 1
                elif lex.text == "!" and depth == 0:
                    return "Unknown"
            elif lex.kind == "ident" and depth == 0:
                last = lex.text
            p += 1
        return last


def process_code(code: str) -> FileUnit:
    """Parse Rust source and collect its top-level structs."""
    return _Parser(_tokenize(code)).parse_file()


def process_path(context: Context, path: str | os.PathLike[str]) -> None:
    """Add the structs of a ``.rs`` file, or of every ``.rs`` file below a directory."""
    target = Path(path)
    if target.is_file() and target.suffix == ".rs":
        code = target.read_text(encoding="utf-8")
        try:
            unit = process_code(code)
        except ExtractError as exc:
            raise ExtractError(f"failed to parse file: {str(target)!r}: {exc}") from exc
        context.files.append(unit)
    elif target.is_dir():
        for entry in sorted(target.iterdir()):
            process_path(context, entry)