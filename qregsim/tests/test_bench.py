# qregsim/tests/test_bench.py
import csv
import logging

from qregsim.bench import HEADER, main, random_gates


def test_random_gates_are_reproducible():
    assert [str(g) for g in random_gates(4, 6, seed=3)] == [str(g) for g in random_gates(4, 6, seed=3)]


def test_qubits_run_writes_csv_under_out_dir(tmp_path):
    try:
        main(["--log-level", "WARNING", "--out-dir", str(tmp_path),
              "qubits", "--ns", "2,3", "--depth", "2", "--backend", "serial"])
    finally:
        logging.getLogger("qregsim").handlers.clear()
    path = tmp_path / "serial" / "qubits.csv"
    assert path.exists()
    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0].keys()) == HEADER
    assert [int(r["qubits"]) for r in rows] == [2, 3]
    assert all(float(r["wall_ms"]) >= 0 for r in rows)
