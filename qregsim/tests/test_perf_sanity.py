# qregsim/tests/test_perf_sanity.py
import time
import numpy as np
import pytest

pytest.importorskip("numba")

from qregsim.bench import random_gates, run_once

def test_bench_runs_and_times():
    n, depth = 12, 5     # ~moderate but quick in CI/local
    gates = random_gates(n, depth, seed=0)
    run_once(n, gates[:1], "numba")  # JIT warmup

    t0 = time.perf_counter()
    s1 = run_once(n, gates, "serial")
    t1 = time.perf_counter() - t0

    t0 = time.perf_counter()
    s2 = run_once(n, gates, "numba")
    t2 = time.perf_counter() - t0

    # correctness
    assert np.allclose(s1.as_numpy(), s2.as_numpy(), atol=1e-9, rtol=0)
    assert abs(1.0 - s1.norm2()) < 1e-9
    # sanity: both timings are positive
    assert t1 > 0 and t2 > 0
