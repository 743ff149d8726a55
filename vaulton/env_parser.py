"""Turn flat ``SECTION__KEY=value`` pairs into nested typed configuration."""

from __future__ import annotations

import math
import re
import string
from collections.abc import Iterable, Mapping
from typing import Any, Union

from vaulton.deserialize import FieldError, deserialize

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_U64_MAX = 2**64 - 1
_NOT_FLOAT = re.compile(r"[\s_]")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

Scalar = Union[int, float, bool, str]


class ParserError(ValueError):
    """Base error for environment parsing."""

    prefix = "Parser error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.prefix}: {message}")


class InvalidValueError(ParserError):
    """The keys cannot be arranged into a consistent tree."""

    prefix = "Invalid value"


class DeserializeError(ParserError):
    """The tree does not fit the target type."""

    prefix = "Deserialization error"


def convert_value(value: str) -> Scalar:
    """Interpret a raw string as an integer, finite float, boolean or string."""
    if _INTEGER.fullmatch(value):
        number = int(value)
        if _I64_MIN <= number <= _U64_MAX:
            return number
    if value.isascii() and not _NOT_FLOAT.search(value):
        try:
            real = float(value)
        except ValueError:
            pass
        else:
            if math.isfinite(real):
                return real
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return value


def _pairs(pairs: Iterable[tuple[str, str]] | Mapping[str, str]) -> Iterable[tuple[str, str]]:
    if isinstance(pairs, Mapping):
        return pairs.items()
    return pairs


def build_tree(
    pairs: Iterable[tuple[str, str]] | Mapping[str, str],
) -> dict[str, Any]:
    """Nest keys split on ``__``, lower-casing each ASCII segment."""
    tree: dict[str, Any] = {}
    for key, value in _pairs(pairs):
        *parents, last = key.split("__")
        node = tree
        for part in parents:
            child = node.setdefault(part.translate(_ASCII_LOWER), {})
            if not isinstance(child, dict):
                raise InvalidValueError(f"Invalid nesting: {part} is not an object")
            node = child
        name = last.translate(_ASCII_LOWER)
        if isinstance(node.get(name), dict):
            raise InvalidValueError(f"Attempted to set value on object at {last}")
        node[name] = convert_value(value)
    return tree


def from_iter(
    pairs: Iterable[tuple[str, str]] | Mapping[str, str], target: Any
) -> Any:
    """Build the nested tree from ``pairs`` and deserialize it into ``target``."""
    tree = build_tree(pairs)
    try:
        return deserialize(tree, target)
    except FieldError as error:
        raise DeserializeError(str(error)) from error