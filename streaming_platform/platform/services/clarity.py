"""Clarity value literals as they travel over the call protocol.

Arguments arrive in the textual form produced by Clarinet's ``types`` helpers
(``u10``, ``"title"``, ``'ST1...``) and results leave in the form shown in
block receipts (``(ok true)``, ``(err u100)``, ``{is-active: false, ...}``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from streaming_platform.platform.errors import CallError

_PRINCIPAL_RE = re.compile(r"^S[0-9A-Z]{20,}(\.[a-zA-Z][a-zA-Z0-9\-_]{0,39})?$")
_UINT_MAX = 2**128 - 1
_INT_MIN = -(2**127)
_INT_MAX = 2**127 - 1


@dataclass(frozen=True)
class UInt:
    value: int


@dataclass(frozen=True)
class Int:
    value: int


@dataclass(frozen=True)
class Principal:
    address: str


@dataclass(frozen=True)
class Ascii:
    value: str


@dataclass(frozen=True)
class Utf8:
    value: str


@dataclass(frozen=True)
class Some:
    value: Any


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Err:
    value: Any


def is_principal(address: str) -> bool:
    return bool(_PRINCIPAL_RE.match(address))


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def render(value: Any) -> str:
    """Render a Python/Clarity value the way a receipt shows it.

    ``None`` renders as ``none``, dicts as tuples (keys sorted), lists as
    ``(list ...)``. Bare Python ints are treated as ``uint``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, UInt):
        return f"u{value.value}"
    if isinstance(value, Int):
        return str(value.value)
    if isinstance(value, int):
        return f"u{value}"
    if isinstance(value, Principal):
        return f"'{value.address}"
    if isinstance(value, Ascii):
        return _quote(value.value)
    if isinstance(value, Utf8):
        return "u" + _quote(value.value)
    if isinstance(value, str):
        return _quote(value)
    if value is None:
        return "none"
    if isinstance(value, Some):
        return f"(some {render(value.value)})"
    if isinstance(value, Ok):
        return f"(ok {render(value.value)})"
    if isinstance(value, Err):
        return f"(err {render(value.value)})"
    if isinstance(value, (list, tuple)):
        return "(list" + "".join(" " + render(item) for item in value) + ")"
    if isinstance(value, dict):
        fields = ", ".join(f"{key}: {render(value[key])}" for key in sorted(value))
        return "{" + fields + "}"
    raise TypeError(f"cannot render {type(value).__name__} as a clarity value")


class _Parser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _skip_ws(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _fail(self, message: str) -> CallError:
        return CallError(f"{message} at offset {self._pos} in {self._text!r}")

    def _peek(self, prefix: str) -> bool:
        return self._text.startswith(prefix, self._pos)

    def _read_string(self) -> str:
        # opening quote already consumed
        chars: list[str] = []
        while self._pos < len(self._text):
            ch = self._text[self._pos]
            self._pos += 1
            if ch == '"':
                return "".join(chars)
            if ch == "\\":
                if self._pos >= len(self._text):
                    break
                escaped = self._text[self._pos]
                self._pos += 1
                chars.append({"n": "\n", "t": "\t", "r": "\r"}.get(escaped, escaped))
            else:
                chars.append(ch)
        raise self._fail("unterminated string")

    def _read_atom(self) -> str:
        start = self._pos
        while self._pos < len(self._text) and not self._text[self._pos].isspace() and self._text[self._pos] not in "()":
            self._pos += 1
        return self._text[start:self._pos]

    def parse_value(self) -> Any:
        self._skip_ws()
        if self._pos >= len(self._text):
            raise self._fail("unexpected end of literal")

        if self._peek('u"'):
            self._pos += 2
            return Utf8(self._read_string())
        if self._peek('"'):
            self._pos += 1
            value = self._read_string()
            if not value.isascii():
                raise self._fail("non-ascii character in string-ascii")
            return Ascii(value)
        if self._peek("("):
            return self._parse_form()

        atom = self._read_atom()
        if not atom:
            raise self._fail("empty literal")
        if atom in ("true", "false"):
            return atom == "true"
        if atom == "none":
            return None
        if atom.startswith("'"):
            address = atom[1:]
            if not is_principal(address):
                raise self._fail(f"invalid principal {address!r}")
            return Principal(address)
        if re.fullmatch(r"u[0-9]+", atom):
            value = int(atom[1:])
            if value > _UINT_MAX:
                raise self._fail("uint out of range")
            return UInt(value)
        if re.fullmatch(r"-?[0-9]+", atom):
            value = int(atom)
            if not _INT_MIN <= value <= _INT_MAX:
                raise self._fail("int out of range")
            return Int(value)
        raise self._fail(f"unrecognised literal {atom!r}")

    def _parse_form(self) -> Any:
        self._pos += 1
        self._skip_ws()
        head = self._read_atom()
        items: list[Any] = []
        while True:
            self._skip_ws()
            if self._pos >= len(self._text):
                raise self._fail("unbalanced parenthesis")
            if self._text[self._pos] == ")":
                self._pos += 1
                break
            items.append(self.parse_value())

        if head == "some" and len(items) == 1:
            return Some(items[0])
        if head == "list":
            return items
        raise self._fail(f"unsupported form ({head} ...)")

    def parse(self) -> Any:
        value = self.parse_value()
        self._skip_ws()
        if self._pos != len(self._text):
            raise self._fail("trailing characters")
        return value


def parse_literal(text: str) -> Any:
    if not isinstance(text, str):
        raise CallError(f"argument must be a clarity literal string, got {type(text).__name__}")
    return _Parser(text).parse()


def expect(value: Any, kind: str) -> Any:
    """Check a parsed literal against a parameter kind and unwrap it.

    Kinds: ``uint``, ``int``, ``bool``, ``principal``, ``string`` (ascii or utf8).
    """
    if kind == "uint" and isinstance(value, UInt):
        return value.value
    if kind == "int" and isinstance(value, Int):
        return value.value
    if kind == "bool" and isinstance(value, bool):
        return value
    if kind == "principal" and isinstance(value, Principal):
        return value.address
    if kind == "string" and isinstance(value, (Ascii, Utf8)):
        return value.value
    raise CallError(f"expected {kind}, got {render(value)}")


def require_principal(address: str) -> str:
    if not is_principal(address):
        raise ValueError(f"invalid principal {address!r}")
    return address
