"""
Publish body construction.

The caller's publish body (platform payloads keyed by ``apns``, ``fcm``,
``web``...) is passed through untouched; the validated targets are merged
in under a reserved key on a new dict.
"""

import json
from typing import Any, Dict, List, Mapping, Union

from pushnotifications.errors import SerializationError

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


def build_publish_body(
    publish_body: Mapping[str, Any],
    key: str,
    targets: List[str],
) -> Dict[str, Any]:
    """
    Merge targets into a copy of the publish body.

    Caller keys keep their order; ``key`` is placed last and replaces any
    value the caller supplied under the same name.

    Raises:
        SerializationError: If publish_body is not a mapping with string keys
    """
    if not isinstance(publish_body, Mapping):
        raise SerializationError(
            f"Publish body must be a JSON object, got {type(publish_body).__name__}"
        )

    body: Dict[str, Any] = {}
    for name, value in publish_body.items():
        if not isinstance(name, str):
            raise SerializationError(f"Publish body keys must be strings, got {name!r}")
        if name != key:
            body[name] = value

    body[key] = list(targets)
    return body


def serialize_publish_body(body: Mapping[str, Any]) -> bytes:
    """
    Encode a publish body as compact UTF-8 JSON.

    Raises:
        SerializationError: If the body holds values JSON cannot represent
    """
    try:
        return json.dumps(
            body,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to marshal the publish request JSON body: {e}") from e
