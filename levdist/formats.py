"""
levdist.formats — Convert between real-world data and engine types.

Supported conversions:
    • bytes-like objects and str → bytes (the engines' input unit)
    • Edit scripts ↔ plain Python objects
    • Edit scripts ↔ JSON strings
    • Edit scripts → compact one-line text (for failure reports)
"""

import json
from typing import Any

from .edits import EditEntry, EditOp


# ═══════════════════════════════════════════════════════════════════
#  ENGINE INPUT
# ═══════════════════════════════════════════════════════════════════

def as_bytes(value: Any) -> bytes:
    """
    Coerce an engine argument to ``bytes``.

    Mapping:
        bytes                  → unchanged
        bytearray / memoryview → bytes copy
        str                    → UTF-8 encoding (compared byte by byte)
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"Expected bytes or str, got {type(value).__name__}")


# ═══════════════════════════════════════════════════════════════════
#  EDIT SCRIPT ↔ PYTHON OBJECTS
# ═══════════════════════════════════════════════════════════════════

_OP_NAMES = {op: op.name.lower() for op in EditOp}
_OPS_BY_NAME = {name: op for op, name in _OP_NAMES.items()}


def script_to_python(script: list[EditEntry]) -> list[dict[str, Any]]:
    """
    Convert an edit script to plain Python objects.

        [{"op": "replace", "old": 99, "new": 88}, ...]
    """
    return [
        {"op": _OP_NAMES[entry.op], "old": entry.old, "new": entry.new}
        for entry in script
    ]


def _byte_field(item: dict, key: str, required: bool) -> Any:
    value = item.get(key)
    if value is None:
        if required:
            raise ValueError(f"Edit entry {item!r} is missing {key!r}")
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"Edit entry {item!r}: {key!r} must be a byte value")
    return value


def script_from_python(obj: Any) -> list[EditEntry]:
    """
    Inverse of script_to_python.

    Raises ValueError for unknown operations or missing/invalid bytes.
    """
    if not isinstance(obj, list):
        raise ValueError(f"Edit script must be a list, got {type(obj).__name__}")

    script: list[EditEntry] = []
    for item in obj:
        if not isinstance(item, dict):
            raise ValueError(f"Edit entry must be a mapping, got {item!r}")
        op = _OPS_BY_NAME.get(item.get("op"))
        if op is None:
            raise ValueError(f"Unknown edit operation {item.get('op')!r}")

        old = _byte_field(item, "old", op is not EditOp.INSERT)
        new = _byte_field(item, "new", op is not EditOp.DELETE)

        if op is EditOp.KEEP and old != new:
            raise ValueError(f"KEEP entry with different bytes: {item!r}")
        script.append(EditEntry(op, old=old, new=new))
    return script


# ═══════════════════════════════════════════════════════════════════
#  EDIT SCRIPT ↔ JSON STRINGS
# ═══════════════════════════════════════════════════════════════════

def script_to_json(script: list[EditEntry], **kwargs) -> str:
    """Convert an edit script to a JSON string."""
    return json.dumps(script_to_python(script), **kwargs)


def script_from_json(text: str) -> list[EditEntry]:
    """Parse a JSON string into an edit script."""
    return script_from_python(json.loads(text))


# ═══════════════════════════════════════════════════════════════════
#  COMPACT TEXT
# ═══════════════════════════════════════════════════════════════════

def _show(ch: int) -> str:
    if 0x20 < ch < 0x7F and ch != 0x5C:
        return chr(ch)
    return f"\\x{ch:02x}"


def script_to_string(script: list[EditEntry]) -> str:
    """
    Render a script as space separated tokens:

        =a   keep a        -b   delete b
        +c   insert c      ~d>e replace d by e

    Bytes outside printable ASCII (and space, backslash) appear as ``\\xNN``.
    """
    tokens = []
    for entry in script:
        if entry.op is EditOp.KEEP:
            tokens.append("=" + _show(entry.old))
        elif entry.op is EditOp.DELETE:
            tokens.append("-" + _show(entry.old))
        elif entry.op is EditOp.INSERT:
            tokens.append("+" + _show(entry.new))
        else:
            tokens.append("~" + _show(entry.old) + ">" + _show(entry.new))
    return " ".join(tokens)
