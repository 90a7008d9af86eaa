"""
levdist.edits — Edit scripts: backtrace and replay
===================================================

An edit script is the answer to "HOW do we get from A to B?" rather than
"how far apart are they?".  It is a left-to-right list of operations,
each consuming bytes of A and/or B:

    KEEP     consume A[i] and B[j] (equal), emit it        cost 0
    DELETE   consume A[i]                                   cost 1
    INSERT   consume B[j], emit it                          cost 1
    REPLACE  consume A[i] and B[j] (different), emit B[j]   cost 1

The backtrace is Wagner & Fischer's "Algorithm Y": walk the filled
distance matrix from the bottom-right corner back to (0, 0), at every
cell asking which neighbour the value was derived from.  Several
minimal scripts usually exist; the checks are made in the fixed order

    DELETE  >  INSERT  >  DIAGONAL (REPLACE / KEEP)

and the first match wins, which selects exactly one canonical script.

Replay is the inverse direction: apply the script to A while checking
every recorded byte against A and B.  A replay that does not produce B
means the engine contradicts itself, and is reported by raising
InternalConsistencyError, never by returning a value.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional


class InternalConsistencyError(AssertionError):
    """The backtrace or replay disagrees with the computed distance matrix.

    Signals a defect in the engine itself, not a bad argument.
    """


class EditOp(Enum):
    """Types of edit operations."""
    KEEP = auto()       # No change
    DELETE = auto()     # Remove a byte of A
    INSERT = auto()     # Insert a byte of B
    REPLACE = auto()    # Replace a byte of A by a byte of B


@dataclass(frozen=True, slots=True)
class EditEntry:
    """
    A single edit operation with the bytes it involves.

    ``old`` is the byte taken from A (KEEP, DELETE, REPLACE),
    ``new`` is the byte taken from B (KEEP, INSERT, REPLACE).
    """
    op: EditOp
    old: Optional[int] = None
    new: Optional[int] = None

    @classmethod
    def keep(cls, ch: int) -> "EditEntry":
        return cls(EditOp.KEEP, old=ch, new=ch)

    @classmethod
    def delete(cls, ch: int) -> "EditEntry":
        return cls(EditOp.DELETE, old=ch)

    @classmethod
    def insert(cls, ch: int) -> "EditEntry":
        return cls(EditOp.INSERT, new=ch)

    @classmethod
    def replace(cls, old: int, new: int) -> "EditEntry":
        return cls(EditOp.REPLACE, old=old, new=new)

    @property
    def cost(self) -> int:
        return 0 if self.op is EditOp.KEEP else 1

    def __repr__(self) -> str:
        if self.op is EditOp.KEEP:
            return f"KEEP {bytes([self.old])!r}"
        if self.op is EditOp.DELETE:
            return f"DELETE {bytes([self.old])!r}"
        if self.op is EditOp.INSERT:
            return f"INSERT {bytes([self.new])!r}"
        return f"REPLACE {bytes([self.old])!r} → {bytes([self.new])!r}"


def script_cost(script: list[EditEntry]) -> int:
    """Total cost of an edit script (KEEP entries are free)."""
    return sum(entry.cost for entry in script)


# ═══════════════════════════════════════════════════════════════════
#  BACKTRACE
# ═══════════════════════════════════════════════════════════════════

def backtrace(cell: Callable[[int, int], int], a: bytes, b: bytes) -> list[EditEntry]:
    """
    Reconstruct the canonical minimum edit script from a filled matrix.

    ``cell(row, col)`` must return the distance between ``a[:row]`` and
    ``b[:col]`` for 0 <= row <= len(a), 0 <= col <= len(b).
    """
    ia = len(a)
    ib = len(b)

    # Collected bottom-right to top-left, reversed at the end
    ops: list[EditEntry] = []

    while ia and ib:
        current = cell(ia, ib)
        if current == cell(ia - 1, ib) + 1:
            ia -= 1
            ops.append(EditEntry.delete(a[ia]))
        elif current == cell(ia, ib - 1) + 1:
            ib -= 1
            ops.append(EditEntry.insert(b[ib]))
        else:
            ia -= 1
            ib -= 1
            if a[ia] != b[ib]:
                ops.append(EditEntry.replace(a[ia], b[ib]))
            else:
                ops.append(EditEntry.keep(a[ia]))

    while ia:
        ia -= 1
        ops.append(EditEntry.delete(a[ia]))

    while ib:
        ib -= 1
        ops.append(EditEntry.insert(b[ib]))

    ops.reverse()
    return ops


# ═══════════════════════════════════════════════════════════════════
#  REPLAY
# ═══════════════════════════════════════════════════════════════════

def _next_byte(source: bytes, index: int, name: str) -> int:
    if index >= len(source):
        raise InternalConsistencyError(f"Edit script runs past the end of {name}")
    return source[index]


def _must_match(recorded: Optional[int], actual: int, name: str, position: int) -> None:
    if recorded != actual:
        raise InternalConsistencyError(
            f"Byte mismatch in edit script: recorded {recorded!r}, "
            f"{name}[{position}] is {actual!r}"
        )


def replay(a: bytes, b: bytes, script: list[EditEntry]) -> bytes:
    """
    Apply ``script`` to ``a``, cross-checking every byte against ``a`` and ``b``.

    Returns the edited text, which must equal ``b``.  Raises
    InternalConsistencyError if any recorded byte disagrees with the
    source it claims to come from, if the script does not consume both
    inputs exactly, or if the result differs from ``b``.
    """
    text = bytearray()
    ia = 0
    ib = 0

    for entry in script:
        if entry.op is EditOp.DELETE:
            _must_match(entry.old, _next_byte(a, ia, "a"), "a", ia)
            ia += 1

        elif entry.op is EditOp.INSERT:
            ch = _next_byte(b, ib, "b")
            _must_match(entry.new, ch, "b", ib)
            ib += 1
            text.append(ch)

        elif entry.op is EditOp.REPLACE:
            _must_match(entry.old, _next_byte(a, ia, "a"), "a", ia)
            ia += 1
            ch = _next_byte(b, ib, "b")
            _must_match(entry.new, ch, "b", ib)
            ib += 1
            text.append(ch)

        elif entry.op is EditOp.KEEP:
            ch = _next_byte(a, ia, "a")
            _must_match(entry.old, ch, "a", ia)
            _must_match(ch, _next_byte(b, ib, "b"), "b", ib)
            ia += 1
            ib += 1
            text.append(ch)

        else:
            raise InternalConsistencyError(f"Invalid operation in edit script: {entry.op!r}")

    if ia != len(a) or ib != len(b):
        raise InternalConsistencyError(
            f"Edit script consumed {ia}/{len(a)} bytes of a and {ib}/{len(b)} bytes of b"
        )

    if text != b:
        raise InternalConsistencyError("Edited result not as expected")

    return bytes(text)
