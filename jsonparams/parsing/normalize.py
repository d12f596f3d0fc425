from __future__ import annotations

from typing import Any, Union

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
Params = dict[str, JsonValue]

WRAP_KEY = "_json"


def deep_munge(params: dict[str, Any]) -> dict[str, Any]:
    """Strip nulls from arrays in-place, collapsing arrays left empty to None.

    Only mappings found inside arrays are walked further; arrays nested
    directly in arrays are compacted at their own level only.
    """

    for key, value in params.items():
        if isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    deep_munge(item)
            compacted = [item for item in value if item is not None]
            params[key] = compacted or None
        elif isinstance(value, dict):
            deep_munge(value)
    return params


def to_params(value: Any) -> Params:
    """Turn a decoded body into a parameter mapping.

    Anything other than a mapping is kept under the `_json` key.
    """

    if not isinstance(value, dict):
        value = {WRAP_KEY: value}
    return deep_munge(value)
