# qregsim/bench.py
import argparse, csv, os, socket, subprocess, time
from datetime import datetime
import numpy as np

from .config import SimulatorConfig
from .executor import Executor
from .gates import Gate
from .logging_config import get_logger, setup_logging

DATA_DIR = "data"  # relative to the working directory

logger = get_logger(__name__)

def backend_dir(backend, root=DATA_DIR):
    path = os.path.join(root, backend)
    os.makedirs(path, exist_ok=True)
    return path

def warmup(n, gates, backend, threads=None):
    # one dummy run to JIT-compile & warm caches
    _ = run_once(n, gates, backend, threads)

# ---------------------------------------------------------------------

def meta_row():
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "dtype": "complex128",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

HEADER = ["qubits","depth","backend","threads","gates","wall_ms","hostname","commit","dtype","timestamp"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_gates(n, depth, seed=0):
    """Layers alternating H/X on every qubit with CNOTs on neighbour pairs."""
    rng = np.random.default_rng(seed)
    gates = []
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                gates.append(Gate.h(k) if rng.integers(0, 2) == 0 else Gate.x(k))
        else:
            for k in range(0, n-1, 2):
                if rng.integers(0, 2) == 0:
                    gates.append(Gate.cnot(k, k+1))
                else:
                    gates.append(Gate.cnot(k+1, k))
    return gates

def run_once(n, gates, backend, threads=None):
    ex = Executor(SimulatorConfig(backend=backend, num_threads=threads))
    return ex.run(ex.zero(n), gates)

def time_run(n, gates, backend, threads=None):
    t0 = time.perf_counter()
    _ = run_once(n, gates, backend, threads)
    return (time.perf_counter() - t0) * 1e3  # ms

def numba_max_threads():
    from numba import config as numba_config
    return numba_config.NUMBA_NUM_THREADS

def _row(n, depth, backend, threads, gates, wall):
    m = meta_row()
    return {
        "qubits": n, "depth": depth, "backend": backend, "threads": threads,
        "gates": len(gates), "wall_ms": f"{wall:.3f}",
        "hostname": m["hostname"], "commit": m["commit"], "dtype": m["dtype"], "timestamp": m["timestamp"]
    }

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, backend, out_path):
    logger.info("Qubits scaling -> %s", out_path)
    new_csv(out_path)
    threads = 0 if backend == "serial" else numba_max_threads()
    for i, n in enumerate(ns):
        gates = random_gates(n, depth, seed=42)
        if i == 0:
            warmup(n, gates, backend)
        wall = time_run(n, gates, backend)
        write_row(out_path, _row(n, depth, backend, threads, gates, wall))
        logger.info("n=%d  wall=%.2f ms", n, wall)

def bench_threads(n, depth, threads_list, out_path):
    logger.info("Thread scaling -> %s", out_path)
    new_csv(out_path)
    gates = random_gates(n, depth, seed=123)
    warmup(n, gates, "numba", threads=1)
    t1 = time_run(n, gates, "numba", threads=1)
    pool = numba_max_threads()
    logger.info("pool=%d  T1=%.1f ms", pool, t1)

    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            logger.warning("requested t=%d > pool=%d; using t=%d", t, pool, tt)
        wall = time_run(n, gates, "numba", threads=tt)
        speedup = t1 / wall if wall > 0 else float("nan")
        write_row(out_path, _row(n, depth, "numba", tt, gates, wall))
        logger.info("t=%d  wall=%.2f ms  speedup=%.2fx", tt, wall, speedup)

def bench_depth(n, depths, backend, out_path):
    logger.info("Depth scaling -> %s", out_path)
    new_csv(out_path)
    threads = 0 if backend == "serial" else numba_max_threads()
    warmup(n, random_gates(n, min(depths), seed=7), backend)

    for d in depths:
        gates = random_gates(n, d, seed=7)
        wall = time_run(n, gates, backend)
        write_row(out_path, _row(n, d, backend, threads, gates, wall))
        logger.info("depth=%d  wall=%.2f ms", d, wall)

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="qregsim benchmarks -> <out-dir>/<backend>/*.csv")
    p.add_argument("--log-level", type=str, default="INFO")
    p.add_argument("--out-dir", type=str, default=DATA_DIR)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, required=True)
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=16)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=str, default="1,2,4,8,16")
    # threads always use numba backend
    p_threads.add_argument("--backend", type=str, default="numba", choices=["numba"])

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=12)
    p_depth.add_argument("--depths", type=str, default="10,50,100,300,600")
    p_depth.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    args = p.parse_args(argv)
    setup_logging(level=args.log_level.upper())

    base = backend_dir(args.backend, args.out_dir)

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        bench_qubits(ns, args.depth, args.backend, os.path.join(base, "qubits.csv"))

    elif args.cmd == "threads":
        ts = [int(x) for x in args.threads.split(",")]
        bench_threads(args.n, args.depth, ts, os.path.join(base, "threads.csv"))

    elif args.cmd == "depth":
        ds = [int(x) for x in args.depths.split(",")]
        bench_depth(args.n, ds, args.backend, os.path.join(base, "depth.csv"))

if __name__ == "__main__":
    main()
