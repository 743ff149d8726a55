"""Build typed dataclass trees from plain nested data (dicts, lists, scalars)."""

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Optional, Union, get_args, get_origin

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class Bounds:
    """Inclusive integer range, attached to an ``int`` via ``Annotated``."""

    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def contains(self, value: int) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True


class FieldError(ValueError):
    """Raised when data does not fit the shape of the target type."""

    def __init__(self, path: "tuple[str, ...]", message: str) -> None:
        self.path = path
        self.message = message
        location = ".".join(path) if path else "<root>"
        super().__init__(f"{location}: {message}")


def deserialize(data: Any, target: Any) -> Any:
    """Convert ``data`` into an instance of ``target``.

    Dataclass fields typed ``X | None`` become ``None`` when missing; other
    missing fields take the dataclass default, or raise ``FieldError``.
    Unknown keys are ignored.
    """
    return _convert(data, target, ())


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def _is_optional(tp: Any) -> bool:
    tp = _strip_annotated(tp)
    return _is_union(tp) and _NONE_TYPE in get_args(tp)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _convert(value: Any, tp: Any, path: "tuple[str, ...]") -> Any:
    if tp is Any:
        return value

    if isinstance(tp, str):
        raise TypeError(f"string annotation {tp!r} is not supported")

    if get_origin(tp) is Annotated:
        base, *metadata = get_args(tp)
        result = _convert(value, base, path)
        if isinstance(result, int) and not isinstance(result, bool):
            for bound in metadata:
                if isinstance(bound, Bounds) and not bound.contains(result):
                    raise FieldError(
                        path,
                        f"value {result} out of range "
                        f"[{bound.minimum}, {bound.maximum}]",
                    )
        return result

    if _is_union(tp):
        args = get_args(tp)
        if value is None and _NONE_TYPE in args:
            return None
        variants = [arg for arg in args if arg is not _NONE_TYPE]
        if len(variants) == 1:
            return _convert(value, variants[0], path)
        for variant in variants:
            try:
                return _convert(value, variant, path)
            except FieldError:
                continue
        raise FieldError(path, f"no variant of {tp} matches {_type_name(value)}")

    if value is None:
        raise FieldError(path, f"invalid type: null, expected {_describe(tp)}")

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _convert_dataclass(value, tp, path)

    origin = get_origin(tp)
    if origin is list:
        (item_type,) = get_args(tp) or (Any,)
        if not isinstance(value, list):
            raise FieldError(path, f"invalid type: {_type_name(value)}, expected list")
        return [
            _convert(item, item_type, (*path, str(index)))
            for index, item in enumerate(value)
        ]
    if origin is dict:
        key_type, item_type = get_args(tp) or (str, Any)
        if not isinstance(value, Mapping):
            raise FieldError(path, f"invalid type: {_type_name(value)}, expected mapping")
        return {
            _convert(key, key_type, path): _convert(item, item_type, (*path, str(key)))
            for key, item in value.items()
        }

    if tp is bool:
        if isinstance(value, bool):
            return value
    elif tp is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif tp is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif tp is str:
        if isinstance(value, str):
            return value
    else:
        raise TypeError(f"unsupported target type {tp!r}")

    raise FieldError(path, f"invalid type: {_type_name(value)}, expected {_describe(tp)}")


def _describe(tp: Any) -> str:
    tp = _strip_annotated(tp)
    return getattr(tp, "__name__", repr(tp))


def _convert_dataclass(value: Any, cls: type, path: "tuple[str, ...]") -> Any:
    if not isinstance(value, Mapping):
        raise FieldError(
            path, f"invalid type: {_type_name(value)}, expected {cls.__name__}"
        )
    arguments: "dict[str, Any]" = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        hint = field.type
        if isinstance(hint, str):
            raise TypeError(
                f"field {cls.__name__}.{field.name} has a string annotation"
            )
        if field.name in value:
            arguments[field.name] = _convert(
                value[field.name], hint, (*path, field.name)
            )
        elif _is_optional(hint):
            arguments[field.name] = None
        elif field.default is not dataclasses.MISSING:
            arguments[field.name] = field.default
        elif field.default_factory is not dataclasses.MISSING:
            arguments[field.name] = field.default_factory()
        else:
            raise FieldError((*path, field.name), f"missing field `{field.name}`")
    return cls(**arguments)