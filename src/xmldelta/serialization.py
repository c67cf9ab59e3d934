"""DiffSet serialization: JSON round-trip for comparison results.

Useful for storing comparison results next to test artifacts or handing
them to tools that render failure reports.

All output is deterministic (sorted keys) so serialized results can be
compared textually.

Example:
    from xmldelta import compare
    from xmldelta.serialization import to_json, from_json

    diffs = compare("<Star>Sun</Star>", "<Star>Vega</Star>")
    restored = from_json(to_json(diffs))
    assert restored == diffs

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from xmldelta.diff import Diff, DiffSet

_DIFF_FIELDS = tuple(f.name for f in fields(Diff))


def to_dict(diffs: DiffSet) -> dict[str, Any]:
    """Convert a DiffSet to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    """
    return {
        "_type": "DiffSet",
        "items": [{name: getattr(diff, name) for name in _DIFF_FIELDS} for diff in diffs],
    }


def from_dict(data: dict[str, Any]) -> DiffSet:
    """Reconstruct a DiffSet from a dict produced by to_dict.

    Raises:
        ValueError: If ``_type`` is missing or wrong, or an item lacks a field.

    """
    type_name = data.get("_type")
    if type_name != "DiffSet":
        msg = f"Expected serialized DiffSet, got _type={type_name!r}"
        raise ValueError(msg)

    items: list[Diff] = []
    for raw in data.get("items", []):
        missing = [name for name in ("path", "message") if name not in raw]
        if missing:
            msg = f"Serialized diff is missing field(s): {', '.join(missing)}"
            raise ValueError(msg)
        items.append(Diff(**{name: raw[name] for name in _DIFF_FIELDS if name in raw}))

    return DiffSet(tuple(items)) if items else DiffSet.EMPTY


def to_json(diffs: DiffSet, *, indent: int | None = None) -> str:
    """Serialize a DiffSet to a JSON string.

    Args:
        diffs: DiffSet to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(diffs), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> DiffSet:
    """Deserialize a DiffSet from a JSON string (as produced by to_json)."""
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
