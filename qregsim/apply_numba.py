# qregsim/apply_numba.py
import numpy as np
from numba import njit, prange, set_num_threads, get_num_threads

from .apply_serial import prepare
from .gates import Gate
from .logging_config import get_logger
from .state import State

logger = get_logger(__name__)

# ---------- low-level kernel (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _coset_kernel(psi, out, U, bases, offsets):
    dim = offsets.shape[0]
    # one coset per iteration; cosets write disjoint indices
    for c in prange(bases.shape[0]):
        base = bases[c]
        local = np.empty(dim, dtype=psi.dtype)
        for a in range(dim):
            local[a] = psi[base | offsets[a]]
        for r in range(dim):
            acc = local[0] * 0
            for a in range(dim):
                acc += U[r, a] * local[a]
            out[base | offsets[r]] = acc

# ---------- user-facing apply helpers ----------

def set_threads(n: int):
    set_num_threads(n)

def get_threads() -> int:
    return get_num_threads()

def apply(state: State, gate: Gate) -> State:
    """Same contract as apply_serial.apply, cosets spread over numba threads."""
    U, bases, offsets = prepare(state, gate)
    logger.debug("apply %s on n=%d (%d cosets, %d threads)",
                 gate, state.n, bases.shape[0], get_num_threads())
    if U is None:
        return state.copy()
    out = np.empty_like(state.psi)
    _coset_kernel(state.psi, out, U.to_numpy().astype(state.dtype), bases, offsets)
    return State(state.n, out)

def apply_single_qubit(state: State, U2: np.ndarray, k: int) -> State:
    return apply(state, Gate.u(U2, k))

def apply_two_qubit_4x4(state: State, U4: np.ndarray, k: int, l: int) -> State:
    return apply(state, Gate.u(U4, k, l))

def apply_H(state: State, k: int) -> State:
    return apply(state, Gate.h(k))

def apply_X(state: State, k: int) -> State:
    return apply(state, Gate.x(k))

def apply_CNOT(state: State, control: int, target: int) -> State:
    return apply(state, Gate.cnot(control, target))
