"""JSON encoding and decoding with a snake_case wire convention.

Python objects are converted to JSON with every object key rewritten to
``snake_case``; decoding performs the reverse conversion and, when a target
type is supplied, checks the payload against it.  Supported targets are
dataclasses, the JSON scalar types, ``Optional``/``Union``, ``Literal``,
``Enum`` subclasses and the ``list``/``tuple``/``dict`` generics.
"""

from __future__ import annotations

import dataclasses
import json
import re
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Literal, TypeVar, Union, get_args, get_origin, get_type_hints

from .errors import DecodingError, EncodingError

T = TypeVar("T")

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


@dataclass(frozen=True)
class APIResponse(Generic[T]):
    """The ``{"data": ...}`` envelope wrapping every API response."""

    data: T


def _split_underscores(name: str) -> tuple[str, str, str]:
    core = name.strip("_")
    leading = name[: len(name) - len(name.lstrip("_"))]
    trailing = name[len(name.rstrip("_")) :] if core else ""
    return leading, core, trailing


def to_snake_case(name: str) -> str:
    """Convert ``camelCase`` names to ``snake_case``.

    Acronyms stay together (``myURLValue`` becomes ``my_url_value``) and
    leading or trailing underscores are preserved.
    """

    leading, core, trailing = _split_underscores(name)
    if not core:
        return name
    core = _ACRONYM_BOUNDARY.sub(r"\1_\2", core)
    core = _WORD_BOUNDARY.sub(r"\1_\2", core)
    return f"{leading}{core.lower()}{trailing}"


def from_snake_case(name: str) -> str:
    """Convert ``snake_case`` names to ``camelCase``."""

    leading, core, trailing = _split_underscores(name)
    if "_" not in core:
        return name
    words = [word for word in core.split("_") if word]
    camel = words[0] + "".join(word.capitalize() for word in words[1:])
    return f"{leading}{camel}{trailing}"


class JSONCodec:
    """Stateless JSON codec, safe to share between concurrent requests."""

    def encode(self, value: Any) -> bytes:
        """Serialise ``value`` to UTF-8 JSON bytes with snake_case keys."""

        try:
            wire = _to_wire(value, "$", frozenset())
        except RecursionError as exc:
            raise EncodingError("Request body is nested too deeply to encode") from exc
        try:
            text = json.dumps(wire, allow_nan=False, ensure_ascii=False, separators=(",", ":"))
        except ValueError as exc:
            raise EncodingError(f"Failed to encode request body: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, data: bytes | str, type_: Any = Any) -> Any:
        """Parse JSON ``data`` and convert it to ``type_``."""

        return _convert(_load(data), type_, "$")

    def decode_envelope(self, data: bytes | str, type_: Any = Any) -> APIResponse[Any]:
        """Parse a ``{"data": ...}`` envelope, ignoring any other fields."""

        payload = _load(data)
        if not isinstance(payload, dict) or "data" not in payload:
            raise DecodingError("Response envelope is missing the 'data' field")
        return APIResponse(data=_convert(payload["data"], type_, "data"))


def _load(data: bytes | str) -> Any:
    try:
        return json.loads(data)
    except ValueError as exc:
        raise DecodingError(f"Response body is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DecodingError("Response body is nested too deeply to decode") from exc


def _convert(value: Any, type_: Any, path: str) -> Any:
    try:
        return _from_wire(value, type_, path)
    except RecursionError as exc:
        raise DecodingError(f"Response body at {path} is nested too deeply to decode") from exc


def _to_wire(value: Any, path: str, seen: frozenset[int]) -> Any:
    if isinstance(value, Enum):
        return _to_wire(value.value, path, seen)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if id(value) in seen:
        raise EncodingError(f"Circular reference at {path}")
    seen = seen | {id(value)}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_snake_case(item.name): _to_wire(getattr(value, item.name), f"{path}.{item.name}", seen)
            for item in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        encoded = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodingError(f"Object keys must be strings, got {key!r} at {path}")
            encoded[to_snake_case(key)] = _to_wire(item, f"{path}.{key}", seen)
        return encoded
    if isinstance(value, (list, tuple)):
        return [_to_wire(item, f"{path}[{index}]", seen) for index, item in enumerate(value)]
    raise EncodingError(f"Value of type {type(value).__name__} at {path} is not JSON serialisable")


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {from_snake_case(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _mismatch(expected: Any, value: Any, path: str) -> DecodingError:
    name = getattr(expected, "__name__", None) or repr(expected)
    return DecodingError(f"Expected {name} at {path}, got {type(value).__name__}")


def _from_wire(value: Any, type_: Any, path: str) -> Any:
    if type_ is Any or type_ is object:
        return _plain(value)

    origin = get_origin(type_)
    args = get_args(type_)

    if origin is Union or origin is types.UnionType:
        for member in args:
            try:
                return _from_wire(value, member, path)
            except DecodingError:
                continue
        raise _mismatch(type_, value, path)
    if origin is Literal:
        for option in args:
            if value == option and type(value) is type(option):
                return value
        raise DecodingError(f"Expected one of {list(args)!r} at {path}, got {value!r}")

    if type_ is None or type_ is type(None):
        if value is None:
            return None
        raise _mismatch(type(None), value, path)
    if isinstance(type_, type) and issubclass(type_, Enum):
        try:
            return type_(value)
        except ValueError as exc:
            raise DecodingError(f"{value!r} at {path} is not a valid {type_.__name__}") from exc
    if isinstance(type_, type) and dataclasses.is_dataclass(type_):
        return _dataclass_from_wire(value, type_, path)

    if type_ is bool:
        if isinstance(value, bool):
            return value
        raise _mismatch(bool, value, path)
    if type_ is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise _mismatch(int, value, path)
    if type_ is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise _mismatch(float, value, path)
    if type_ is str:
        if isinstance(value, str):
            return value
        raise _mismatch(str, value, path)

    container = origin or type_
    if container in (list, Sequence):
        if not isinstance(value, list):
            raise _mismatch(list, value, path)
        item_type = args[0] if args else Any
        return [_from_wire(item, item_type, f"{path}[{index}]") for index, item in enumerate(value)]
    if container is tuple:
        if not isinstance(value, list):
            raise _mismatch(tuple, value, path)
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            item_type = args[0] if args else Any
            return tuple(_from_wire(item, item_type, f"{path}[{index}]") for index, item in enumerate(value))
        if len(args) != len(value):
            raise DecodingError(f"Expected {len(args)} items at {path}, got {len(value)}")
        return tuple(
            _from_wire(item, item_type, f"{path}[{index}]")
            for index, (item, item_type) in enumerate(zip(value, args))
        )
    if container in (dict, Mapping):
        if not isinstance(value, dict):
            raise _mismatch(dict, value, path)
        item_type = args[1] if len(args) == 2 else Any
        return {
            from_snake_case(key): _from_wire(item, item_type, f"{path}.{key}")
            for key, item in value.items()
        }

    raise DecodingError(f"Unsupported target type {type_!r} at {path}")


def _dataclass_from_wire(value: Any, type_: type, path: str) -> Any:
    if not isinstance(value, dict):
        raise _mismatch(type_, value, path)
    try:
        hints = get_type_hints(type_)
    except NameError as exc:
        raise DecodingError(f"Cannot resolve type hints for {type_.__name__}: {exc}") from exc
    kwargs = {}
    for item in dataclasses.fields(type_):
        if not item.init:
            continue
        key = to_snake_case(item.name)
        if key in value:
            kwargs[item.name] = _from_wire(value[key], hints.get(item.name, Any), f"{path}.{key}")
        elif item.default is dataclasses.MISSING and item.default_factory is dataclasses.MISSING:
            raise DecodingError(f"Missing field '{key}' at {path}")
    try:
        return type_(**kwargs)
    except (TypeError, ValueError) as exc:
        raise DecodingError(f"Could not build {type_.__name__} at {path}: {exc}") from exc


__all__ = [
    "APIResponse",
    "JSONCodec",
    "from_snake_case",
    "to_snake_case",
]
