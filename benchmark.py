"""
Benchmark: bounded (rolling row) engine vs reference (full matrix) engine.

The point is NOT that either engine is fast in pure Python — the point is
the relative cost of:
    1. BoundedDistance.distance          — one row, no history
    2. ReferenceEngine.distance          — full matrix
    3. ReferenceEngine.distance(verify)  — full matrix + backtrace + replay
"""

import sys
import os
import random
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from levdist.core import INPUT_TOO_LARGE, BoundedDistance, ReferenceEngine


STRING_PAIRS = [
    (b"kitten", b"sitting"),
    (b"saturday", b"sunday"),
    (b"intention", b"execution"),
    (b"pneumonoultramicroscopicsilicovolcanoconiosis",
     b"pseudopseudohypoparathyroidism"),
    (b"abcdefghijklmnopqrstuvwxyz", b"zyxwvutsrqponmlkjihgfedcba"),
]


def _time(fn, *args, repeat=20):
    """Best-of wall clock for fn(*args), in milliseconds."""
    best = float("inf")
    result = None
    for _ in range(repeat):
        t0 = time.perf_counter()
        result = fn(*args)
        best = min(best, time.perf_counter() - t0)
    return result, best * 1000


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_pairs():
    """Known pairs through all three code paths."""
    print("=" * 70)
    print("  §1  KNOWN PAIRS")
    print("=" * 70)
    print()

    bounded = BoundedDistance()
    engine = ReferenceEngine()

    for a, b in STRING_PAIRS:
        d_fast, t_fast = _time(bounded.distance, a, b)
        d_ref, t_ref = _time(engine.distance, a, b)
        d_ver, t_ver = _time(engine.distance, a, b, True)

        match = "✓" if d_fast == d_ref == d_ver else "✗"
        print(f"  {match} d({a[:20]!r}, {b[:20]!r}) = {d_ref:<3}"
              f" bounded {t_fast:7.3f}ms  reference {t_ref:7.3f}ms"
              f"  verified {t_ver:7.3f}ms")
    print()


def benchmark_scaling():
    """How the engines scale with input size."""
    print("=" * 70)
    print("  §2  SCALING")
    print("=" * 70)
    print()

    rng = random.Random(2024)
    bounded = BoundedDistance()
    engine = ReferenceEngine()

    for n in [10, 50, 100, 200, 400]:
        a = bytes(rng.choice(b"acgt") for _ in range(n))
        b = bytes(rng.choice(b"acgt") for _ in range(n))

        d_fast, t_fast = _time(bounded.distance, a, b, repeat=3)
        d_ref, t_ref = _time(engine.distance, a, b, repeat=3)
        _, t_ver = _time(engine.distance, a, b, True, repeat=3)

        fast = "too large" if d_fast == INPUT_TOO_LARGE else f"{t_fast:8.2f}ms"
        print(f"  Length {n:>4}: d={d_ref:>4}  bounded {fast:>10}"
              f"  reference {t_ref:8.2f}ms  verified {t_ver:8.2f}ms"
              f"  cells={engine.capacity}")
    print()


def main():
    print()
    benchmark_pairs()
    benchmark_scaling()


if __name__ == "__main__":
    main()
