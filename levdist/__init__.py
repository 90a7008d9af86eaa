"""
levdist — Levenshtein Edit Distance
===================================

Two implementations of the Wagner-Fischer edit distance on byte strings:

    distance_bounded(b"kitten", b"sitting")              → 3
    ReferenceEngine().distance(b"ab", b"cd", verify=True) → 2
    ReferenceEngine().edit_script(b"ab", b"ba")
        → [INSERT b'b', KEEP b'a', DELETE b'b']

The bounded engine is the fast path: one rolling row, and a -1 result
(INPUT_TOO_LARGE) when the shorter input is over the configured limit.
The reference engine keeps the whole matrix, reconstructs the edit
script, and can replay it to double check its own answer.

Logging goes through loguru and is disabled for this package by default;
call ``logger.enable("levdist")`` to see it.
"""

from loguru import logger

from levdist.core import (
    MAX_INPUT_SIZE,
    INPUT_TOO_LARGE,
    BoundedDistance,
    ReferenceEngine,
    distance_bounded,
)
from levdist.edits import (
    EditOp,
    EditEntry,
    InternalConsistencyError,
    backtrace,
    replay,
    script_cost,
)
from levdist.formats import (
    as_bytes,
    script_to_python, script_from_python,
    script_to_json, script_from_json,
    script_to_string,
)
from levdist.config import Settings, settings

logger.disable("levdist")

__version__ = "0.1.0"
__all__ = [
    "MAX_INPUT_SIZE", "INPUT_TOO_LARGE",
    "BoundedDistance", "ReferenceEngine", "distance_bounded",
    "EditOp", "EditEntry", "InternalConsistencyError",
    "backtrace", "replay", "script_cost",
    "as_bytes",
    "script_to_python", "script_from_python",
    "script_to_json", "script_from_json",
    "script_to_string",
    "Settings", "settings",
]
