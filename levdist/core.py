"""
levdist.core — Levenshtein distance engines
===========================================

§1  THE RECURRENCE
──────────────────

Levenshtein (1965) defined the edit distance between two strings as the
minimum number of single-character insertions, deletions and
replacements needed to transform one into the other.  Wagner & Fischer
(The String-to-String Correction Problem, JACM 21:168-178, 1974,
https://doi.org/10.1145/321796.321811) compute it with a
(|A|+1) × (|B|+1) matrix:

    D[i][0] = i                     delete the first i bytes of A
    D[0][j] = j                     insert the first j bytes of B
    D[i][j] = min(
        D[i-1][j]   + 1,            delete A[i-1]
        D[i][j-1]   + 1,            insert B[j-1]
        D[i-1][j-1] + (A[i-1] ≠ B[j-1]),   replace / keep
    )

    distance(A, B) = D[|A|][|B|]

Inputs are treated as raw bytes: every byte counts as one character.


§2  TWO ENGINES
───────────────

BoundedDistance   — "Algorithm X" with a single rolling row.
                    O(min(n, m)) space.  The shorter argument may not be
                    longer than a configurable limit; otherwise the
                    sentinel INPUT_TOO_LARGE (-1) is returned.  This is an
                    ordinary, expected result and callers check for it.

ReferenceEngine   — the full matrix, kept after the call so that the
                    "Algorithm Y" backtrace (levdist.edits) can rebuild an
                    explicit edit script.  With verify=True the script is
                    replayed against both inputs; a failed replay raises
                    InternalConsistencyError.  Intended as the gold
                    standard against which faster versions are tested.

Both engines own mutable scratch state: use one instance per thread.
"""

from typing import Optional

from loguru import logger

from .config import settings
from .edits import EditEntry, InternalConsistencyError, backtrace, replay, script_cost
from .formats import as_bytes


# Default limit for the shorter argument of the bounded engine
MAX_INPUT_SIZE = 100

# Returned by the bounded engine when the shorter argument is over the limit
INPUT_TOO_LARGE = -1


# ═══════════════════════════════════════════════════════════════════
#  BOUNDED (ROLLING ROW) ENGINE
# ═══════════════════════════════════════════════════════════════════

class BoundedDistance:
    """
    Fast, space-optimized Levenshtein distance for short inputs.

    Only the shorter argument is bounded (by ``max_input_size``); there is
    no restriction on the size of the longer one.
    """

    def __init__(self, max_input_size: Optional[int] = None):
        if max_input_size is None:
            max_input_size = settings.max_input_size
        if max_input_size < 0:
            raise ValueError(f"max_input_size must be >= 0, got {max_input_size}")
        self.max_input_size = max_input_size

    def distance(self, word_a, word_b) -> int:
        """
        Levenshtein distance between ``word_a`` and ``word_b``.

        Returns INPUT_TOO_LARGE if the shorter argument is longer than
        ``max_input_size``.
        """
        text_a = as_bytes(word_a)
        text_b = as_bytes(word_b)

        # Make sure text_b is the shorter one
        if len(text_b) > len(text_a):
            text_a, text_b = text_b, text_a
        size_a = len(text_a)
        size_b = len(text_b)

        if size_b == 0:
            return size_a

        if size_b > self.max_input_size:
            logger.debug(
                "Shorter input has {} bytes, over the limit of {}",
                size_b, self.max_input_size,
            )
            return INPUT_TOO_LARGE

        # Row 0 of the distance matrix; rewritten in place for every byte of text_a
        row = list(range(size_b + 1))

        distance = 0
        for ia in range(size_a):
            ch = text_a[ia]
            distance = ia + 1
            for ib in range(size_b):
                # Upper-left neighbour, read before it is overwritten
                next_distance = row[ib]
                if ch != text_b[ib]:
                    next_distance += 1

                row[ib] = distance

                distance += 1
                if next_distance < distance:
                    distance = next_distance

                next_distance = row[ib + 1] + 1
                if next_distance < distance:
                    distance = next_distance

            row[size_b] = distance

        return distance


def distance_bounded(word_a, word_b, max_input_size: Optional[int] = None) -> int:
    """
    Levenshtein distance with the rolling-row engine.

        distance_bounded(b"kitten", b"sitting")  → 3
        distance_bounded(b"x" * 101, b"y" * 101)  → -1  (INPUT_TOO_LARGE)
    """
    return BoundedDistance(max_input_size).distance(word_a, word_b)


# ═══════════════════════════════════════════════════════════════════
#  REFERENCE (FULL MATRIX) ENGINE
# ═══════════════════════════════════════════════════════════════════

class ReferenceEngine:
    """
    Full-matrix Wagner-Fischer engine with edit script reconstruction.

    The distance matrix is stored row-major in a flat list that is reused
    across calls.  Its storage only ever grows; the active region of the
    current call is given by ``(rows, columns)``.
    """

    def __init__(self):
        self._distances: list[int] = []
        self._rows = 0
        self._columns = 0

    @property
    def capacity(self) -> int:
        """Number of matrix cells currently allocated."""
        return len(self._distances)

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, columns) of the matrix filled by the last call."""
        return self._rows, self._columns

    def _cell(self, row: int, col: int) -> int:
        return self._distances[row * self._columns + col]

    def matrix(self) -> list[list[int]]:
        """Copy of the active region of the distance matrix, as a list of rows."""
        cols = self._columns
        return [
            self._distances[row * cols:(row + 1) * cols]
            for row in range(self._rows)
        ]

    def distance(self, word_a, word_b, verify: bool = False) -> int:
        """
        Levenshtein distance between ``word_a`` and ``word_b``.

        With ``verify=True`` the edit script is rebuilt from the matrix and
        replayed; InternalConsistencyError is raised if it does not turn
        ``word_a`` into ``word_b`` at exactly the computed cost.
        """
        text_a = as_bytes(word_a)
        text_b = as_bytes(word_b)
        result = self._fill(text_a, text_b)

        if verify:
            self.verify(text_a, text_b, result)

        return result

    def _fill(self, text_a: bytes, text_b: bytes) -> int:
        size_a = len(text_a)
        size_b = len(text_b)

        # Matrix dimensions are one larger than the corresponding text sizes
        rows = size_a + 1
        cols = size_b + 1
        self._rows = rows
        self._columns = cols

        required_size = rows * cols
        if required_size > len(self._distances):
            logger.debug(
                "Growing distance matrix from {} to {} cells",
                len(self._distances), required_size,
            )
            self._distances.extend([0] * (required_size - len(self._distances)))

        d = self._distances

        # Column 0 represents deletions from text_a
        for ia in range(rows):
            d[ia * cols] = ia

        # Row 0 represents insertions of text_b
        for ib in range(1, cols):
            d[ib] = ib

        # Row by row, left to right: every cell depends only on its
        # upper, left and upper-left neighbours.
        for ia in range(1, rows):
            here = ia * cols
            above = here - cols
            ch = text_a[ia - 1]
            for ib in range(1, cols):
                deletion = d[above + ib] + 1
                insertion = d[here + ib - 1] + 1
                replacement = d[above + ib - 1] + (0 if ch == text_b[ib - 1] else 1)
                d[here + ib] = min(deletion, insertion, replacement)

        # Rightmost value on the last row is the final result
        return d[required_size - 1]

    def edit_script(self, word_a, word_b) -> list[EditEntry]:
        """
        The canonical minimum edit script turning ``word_a`` into ``word_b``.

        Ties are broken DELETE > INSERT > REPLACE/KEEP (see levdist.edits).
        """
        text_a = as_bytes(word_a)
        text_b = as_bytes(word_b)
        self._fill(text_a, text_b)
        return backtrace(self._cell, text_a, text_b)

    def verify(self, text_a: bytes, text_b: bytes, expected: int) -> None:
        """
        Double check the last result by editing ``text_a`` along the backtrace.

        Must be called right after the matrix was filled for
        (``text_a``, ``text_b``).
        """
        try:
            if self.shape != (len(text_a) + 1, len(text_b) + 1):
                raise InternalConsistencyError(
                    f"Matrix shape {self.shape} does not match inputs of "
                    f"{len(text_a)} and {len(text_b)} bytes"
                )

            script = backtrace(self._cell, text_a, text_b)
            replay(text_a, text_b, script)

            cost = script_cost(script)
            if cost != expected:
                raise InternalConsistencyError(
                    f"Edit script costs {cost}, computed distance is {expected}"
                )
        except InternalConsistencyError as exc:
            logger.critical(
                "Fatal error in ReferenceEngine: {} (a={!r}, b={!r})",
                exc, text_a, text_b,
            )
            raise
