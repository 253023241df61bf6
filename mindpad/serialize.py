"""JSON persistence for MindPad trees.

The file format is the node itself, recursively::

    {"label": "...", "children": [...], "note": "...", "x": 0.0, "y": 0.0}

``parent``, ``depth`` and ``subtree_weight`` are never written; they are
rebuilt after every load.
"""

import json
from typing import Any, Dict, Optional

from mindpad.errors import ParseError
from mindpad.tree import Node, refresh_derived


def to_dict(node: Node) -> Dict[str, Any]:
    """Copy ``node`` and its subtree into plain dicts, dropping back-references."""
    return {
        "label": node.label,
        "children": [to_dict(child) for child in node.children],
        "note": node.note,
        "x": node.x,
        "y": node.y,
    }


def serialize(root: Node, indent: Optional[int] = None) -> str:
    """Encode a tree as JSON text."""
    return json.dumps(to_dict(root), indent=indent, ensure_ascii=False)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def from_dict(data: Any) -> Node:
    """Build a tree from decoded JSON.

    Raises ParseError if any level is not an object, lacks a string
    ``label`` or a ``children`` list, or carries a mistyped optional field.
    Derived fields are not filled in; see :func:`deserialize`.
    """
    if not isinstance(data, dict):
        raise ParseError(f"Expected a node object, got {type(data).__name__}")

    label = data.get("label")
    if not isinstance(label, str):
        raise ParseError("Node is missing a string 'label'")

    children = data.get("children")
    if not isinstance(children, list):
        raise ParseError(f"Node {label!r} is missing a 'children' array")

    note = data.get("note", "")
    if note is None:
        note = ""
    if not isinstance(note, str):
        raise ParseError(f"Node {label!r} has a non-string 'note'")

    x = data.get("x", 0.0)
    y = data.get("y", 0.0)
    if not (_is_number(x) and _is_number(y)):
        raise ParseError(f"Node {label!r} has non-numeric coordinates")

    return Node(
        label=label,
        children=[from_dict(child) for child in children],
        note=note,
        x=float(x),
        y=float(y),
    )


def deserialize(text: str) -> Node:
    """Decode JSON text into a tree with parent links, depth and weight rebuilt."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ParseError("Map is nested too deeply") from exc

    try:
        root = from_dict(data)
    except RecursionError as exc:
        raise ParseError("Map is nested too deeply") from exc

    return refresh_derived(root)
