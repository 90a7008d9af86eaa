"""
Test suite for levdist edit scripts.

    §1  Backtrace: canonical script and tie-break order
    §2  Replay: round trip and consistency violations
    §3  Verification inside the reference engine
    §4  Script formats (Python objects, JSON, compact text)
"""

import sys
import os
import random
import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from levdist.core import ReferenceEngine
from levdist.edits import (
    EditOp, EditEntry, InternalConsistencyError,
    backtrace, replay, script_cost,
)
from levdist.formats import (
    as_bytes,
    script_to_python, script_from_python,
    script_to_json, script_from_json,
    script_to_string,
)


K = EditEntry.keep
D = EditEntry.delete
I = EditEntry.insert
R = EditEntry.replace


def ops(script):
    return [entry.op for entry in script]


# ═══════════════════════════════════════════════════════════════════
#  §1  BACKTRACE
# ═══════════════════════════════════════════════════════════════════

class TestBacktrace:

    def test_empty_to_empty(self):
        assert ReferenceEngine().edit_script(b"", b"") == []

    def test_delete_only(self):
        assert ReferenceEngine().edit_script(b"ab", b"") == [D(ord("a")), D(ord("b"))]

    def test_insert_only(self):
        assert ReferenceEngine().edit_script(b"", b"ab") == [I(ord("a")), I(ord("b"))]

    def test_identical(self):
        script = ReferenceEngine().edit_script(b"abc", b"abc")
        assert script == [K(ord("a")), K(ord("b")), K(ord("c"))]
        assert script_cost(script) == 0

    def test_single_deletion(self):
        script = ReferenceEngine().edit_script(b"abcdefg", b"abdefg")
        assert ops(script).count(EditOp.DELETE) == 1
        assert D(ord("c")) in script
        assert script_cost(script) == 1

    def test_replacement(self):
        assert ReferenceEngine().edit_script(b"ab", b"cd") == [
            R(ord("a"), ord("c")), R(ord("b"), ord("d")),
        ]

    def test_deletion_preferred_over_insertion(self):
        # "ab" → "ba": at the corner both DELETE b and INSERT a are optimal
        script = ReferenceEngine().edit_script(b"ab", b"ba")
        assert script == [I(ord("b")), K(ord("a")), D(ord("b"))]

    def test_insertion_preferred_over_diagonal(self):
        # "a" → "bc": at the corner INSERT c and REPLACE a>c both give 2
        script = ReferenceEngine().edit_script(b"a", b"bc")
        assert script == [R(ord("a"), ord("b")), I(ord("c"))]

    def test_deletion_preferred_over_diagonal(self):
        script = ReferenceEngine().edit_script(b"bc", b"a")
        assert script == [R(ord("b"), ord("a")), D(ord("c"))]

    def test_leftover_prefixes(self):
        script = ReferenceEngine().edit_script(b"xyabc", b"abc")
        assert script == [D(ord("x")), D(ord("y")), K(ord("a")), K(ord("b")), K(ord("c"))]

    def test_script_reads_left_to_right(self):
        script = ReferenceEngine().edit_script(b"abcdefg", b"ABbXdfg")
        assert script_cost(script) == 4
        assert replay(b"abcdefg", b"ABbXdfg", script) == b"ABbXdfg"

    def test_backtrace_on_hand_built_matrix(self):
        # Distance matrix of "a" vs "b"
        m = [[0, 1], [1, 1]]
        assert backtrace(lambda r, c: m[r][c], b"a", b"b") == [R(ord("a"), ord("b"))]


# ═══════════════════════════════════════════════════════════════════
#  §2  REPLAY
# ═══════════════════════════════════════════════════════════════════

class TestReplay:

    @pytest.mark.parametrize("a,b", [
        (b"", b""), (b"a", b""), (b"", b"a"),
        (b"kitten", b"sitting"), (b"intention", b"execution"),
        (b"abcdefg", b"acYABfg"), (b"\x00\x01\x02", b"\x02\x01\x00"),
    ])
    def test_round_trip(self, a, b):
        engine = ReferenceEngine()
        expected = engine.distance(a, b)
        script = engine.edit_script(a, b)
        assert replay(a, b, script) == b
        assert script_cost(script) == expected

    def test_random_round_trips(self):
        rng = random.Random(321)
        engine = ReferenceEngine()
        for _ in range(200):
            a = bytes(rng.choice(b"abc") for _ in range(rng.randint(0, 15)))
            b = bytes(rng.choice(b"abc") for _ in range(rng.randint(0, 15)))
            script = engine.edit_script(a, b)
            assert replay(a, b, script) == b
            assert script_cost(script) == engine.distance(a, b)

    def test_wrong_deleted_byte(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"a", b"", [D(ord("x"))])

    def test_wrong_inserted_byte(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"", b"a", [I(ord("x"))])

    def test_wrong_replacement_bytes(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"a", b"b", [R(ord("a"), ord("c"))])
        with pytest.raises(InternalConsistencyError):
            replay(b"a", b"b", [R(ord("c"), ord("b"))])

    def test_keep_of_different_bytes(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"a", b"b", [K(ord("a"))])

    def test_script_too_short(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"ab", b"ab", [K(ord("a"))])

    def test_script_too_long(self):
        with pytest.raises(InternalConsistencyError):
            replay(b"a", b"a", [K(ord("a")), K(ord("a"))])

    def test_consistency_error_is_assertion(self):
        assert issubclass(InternalConsistencyError, AssertionError)
        assert not issubclass(InternalConsistencyError, ValueError)


# ═══════════════════════════════════════════════════════════════════
#  §3  VERIFICATION
# ═══════════════════════════════════════════════════════════════════

class TestVerification:

    def test_verify_passes(self):
        engine = ReferenceEngine()
        assert engine.distance(b"abcdefg", b"ABbXdfg", verify=True) == 4

    def test_verify_detects_corrupted_matrix(self):
        engine = ReferenceEngine()
        engine.distance(b"abc", b"abd")
        # Bottom-right cell now matches the cell above plus one, so the
        # backtrace takes a DELETE + INSERT path costing 2
        engine._distances[engine.capacity - 1] = 2
        with pytest.raises(InternalConsistencyError):
            engine.verify(b"abc", b"abd", 1)

    def test_verify_detects_wrong_distance(self):
        engine = ReferenceEngine()
        engine.distance(b"abc", b"abd")
        with pytest.raises(InternalConsistencyError):
            engine.verify(b"abc", b"abd", 2)

    def test_verify_detects_shape_mismatch(self):
        engine = ReferenceEngine()
        engine.distance(b"abc", b"abd")
        with pytest.raises(InternalConsistencyError):
            engine.verify(b"abcd", b"abd", 1)

    def test_broken_backtrace_is_fatal(self, monkeypatch):
        import levdist.core

        monkeypatch.setattr(levdist.core, "backtrace", lambda cell, a, b: [])
        with pytest.raises(InternalConsistencyError):
            ReferenceEngine().distance(b"a", b"b", verify=True)


# ═══════════════════════════════════════════════════════════════════
#  §4  FORMATS
# ═══════════════════════════════════════════════════════════════════

class TestFormats:

    def test_as_bytes(self):
        assert as_bytes(b"abc") == b"abc"
        assert as_bytes(bytearray(b"abc")) == b"abc"
        assert as_bytes(memoryview(b"abc")) == b"abc"
        assert as_bytes("é") == b"\xc3\xa9"
        with pytest.raises(TypeError):
            as_bytes(None)

    def test_python_objects(self):
        script = ReferenceEngine().edit_script(b"ab", b"cb")
        assert script_to_python(script) == [
            {"op": "replace", "old": ord("a"), "new": ord("c")},
            {"op": "keep", "old": ord("b"), "new": ord("b")},
        ]
        assert script_from_python(script_to_python(script)) == script

    def test_json(self):
        script = ReferenceEngine().edit_script(b"kitten", b"sitting")
        assert script_from_json(script_to_json(script)) == script

    @pytest.mark.parametrize("obj", [
        "not a list",
        [{"op": "swap", "old": 1, "new": 2}],
        [{"op": "delete"}],
        [{"op": "insert", "new": 256}],
        [{"op": "replace", "old": 1}],
        [{"op": "keep", "old": 1, "new": 2}],
        [{"op": "delete", "old": True}],
        ["delete"],
    ])
    def test_malformed_scripts(self, obj):
        with pytest.raises(ValueError):
            script_from_python(obj)

    def test_compact_text(self):
        script = [K(ord("a")), D(ord("b")), I(ord("c")), R(ord("d"), ord("e")), I(0)]
        assert script_to_string(script) == "=a -b +c ~d>e +\\x00"

    def test_repr(self):
        assert repr(R(ord("a"), ord("b"))) == "REPLACE b'a' → b'b'"
        assert repr(K(ord("a"))) == "KEEP b'a'"
