"""JSON value model used for GraphQL variables."""
from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class JsonNull:
    def to_python(self) -> None:
        return None

    def encode(self) -> str:
        return "null"


@dataclass(frozen=True)
class JsonBool:
    value: bool

    def to_python(self) -> bool:
        return self.value

    def encode(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class JsonNumber:
    """A finite number. ``Decimal`` values are written with their own text."""

    value: Union[numbers.Real, Decimal]

    def to_python(self) -> Union[int, float, Decimal]:
        if isinstance(self.value, Decimal):
            return self.value
        if isinstance(self.value, numbers.Integral):
            return int(self.value)
        return float(self.value)

    def encode(self) -> str:
        if isinstance(self.value, Decimal):
            return str(self.value)
        if isinstance(self.value, numbers.Integral):
            return str(int(self.value))
        return json.dumps(float(self.value))


@dataclass(frozen=True)
class JsonString:
    value: str

    def to_python(self) -> str:
        return self.value

    def encode(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class JsonArray:
    items: tuple["JsonValue", ...] = ()

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]

    def encode(self) -> str:
        return "[" + ",".join(item.encode() for item in self.items) + "]"


@dataclass(frozen=True)
class JsonObject:
    """Ordered JSON object; ``members`` keeps insertion order."""

    members: tuple[tuple[str, "JsonValue"], ...] = ()

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members}

    def encode(self) -> str:
        return "{" + ",".join(
            f"{json.dumps(key, ensure_ascii=False)}:{value.encode()}" for key, value in self.members
        ) + "}"


@dataclass(frozen=True)
class RawJson:
    """A JSON document that was already encoded by the caller.

    The text is parsed once on construction so a malformed document is
    rejected here rather than producing an invalid request body. It is
    sent as written.
    """

    text: str
    _parsed: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_parsed", json.loads(self.text))

    def to_python(self) -> Any:
        return self._parsed

    def encode(self) -> str:
        return self.text.strip()


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject, RawJson]

JSON_VALUE_TYPES = (JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject, RawJson)

NULL = JsonNull()


def json_key(key: Any) -> str:
    """Object key for ``key``: ``None`` and booleans use their JSON spelling."""
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _is_finite(value: Union[numbers.Real, Decimal]) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value)


def to_json_value(value: Any) -> JsonValue:
    """Coerce an arbitrary Python value into a :data:`JsonValue`.

    Precedence: existing JSON values are passed through, then strings,
    numbers, booleans, mappings (keys converted with :func:`json_key`),
    lists and tuples. Anything else, including ``None``, becomes JSON null.

    Booleans are checked before numbers because ``bool`` subclasses
    ``int``. Any ``numbers.Real`` or ``Decimal`` counts as a number;
    non-finite ones become null.
    """
    if isinstance(value, JSON_VALUE_TYPES):
        return value
    if isinstance(value, str):
        return JsonString(value)
    if isinstance(value, bool):
        return JsonBool(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return JsonNumber(value) if _is_finite(value) else NULL
    if isinstance(value, Mapping):
        return JsonObject(tuple((json_key(k), to_json_value(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return JsonArray(tuple(to_json_value(item) for item in value))
    return NULL
