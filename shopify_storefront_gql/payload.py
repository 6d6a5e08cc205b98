"""GraphQL request payload construction."""
from __future__ import annotations

from typing import Any, Mapping

from .values import JsonObject, JsonString, json_key, to_json_value


def build_variables(variables: Mapping[str, Any] | None) -> JsonObject:
    """Return the ``variables`` object, empty when none are supplied."""
    if variables is None:
        return JsonObject()
    return JsonObject(tuple((json_key(name), to_json_value(value)) for name, value in variables.items()))


def build_json_payload(query: str, variables: Mapping[str, Any] | None = None) -> str:
    """Encode ``query`` and ``variables`` as a GraphQL JSON request body.

    The query is embedded verbatim as a JSON string. Variable values that
    cannot be represented in JSON are sent as ``null``.

    Example:
        >>> build_json_payload("{ shop { name } }")
        '{"query":"{ shop { name } }","variables":{}}'
    """
    payload = JsonObject(
        (
            ("query", JsonString(query)),
            ("variables", build_variables(variables)),
        )
    )
    return payload.encode()
