# qregsim/apply_serial.py
"""Coset-partitioned gate application, numpy baseline.

A k-qubit gate splits the 2^n indices into 2^(n-k) cosets: indices that
agree on every non-operand bit. Each coset is a 2^k sub-vector the gate
matrix acts on; cosets never overlap, so they can be done in any order.
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import DuplicateOperand, OperandOutOfRange
from .gates import Gate, resolve
from .linalg import DenseMatrix
from .logging_config import get_logger
from .state import State

logger = get_logger(__name__)


def validate_operands(n: int, operands: Sequence[int]):
    seen = set()
    for q in operands:
        if not 0 <= q < n:
            raise OperandOutOfRange(f"qubit {q} outside 0..{n - 1}")
        if q in seen:
            raise DuplicateOperand(f"qubit {q} appears more than once in {list(operands)}")
        seen.add(q)


def operand_mask(operands: Sequence[int]) -> int:
    mask = 0
    for q in operands:
        mask |= 1 << q
    return mask


def coset_bases(n: int, mask: int) -> np.ndarray:
    """Smallest index of every coset, i.e. every index with all `mask` bits clear."""
    idx = np.arange(1 << n, dtype=np.int64)
    return idx[(idx & mask) == 0]


def local_offsets(operands: Sequence[int]) -> np.ndarray:
    """offsets[local] = global bits set by local index `local`.

    operands[0] is the most significant local bit, operands[-1] the least.
    """
    k = len(operands)
    offsets = np.zeros(1 << k, dtype=np.int64)
    for local in range(1 << k):
        off = 0
        for j, q in enumerate(operands):
            if (local >> (k - 1 - j)) & 1:
                off |= 1 << q
        offsets[local] = off
    return offsets


def prepare(state: State, gate: Gate) -> Tuple[Optional[DenseMatrix], np.ndarray, np.ndarray]:
    """Validate `gate` against `state` and build (matrix, bases, offsets).

    Everything that can fail happens here, before any amplitude is read.
    matrix is None for the identity.
    """
    U = resolve(gate, dtype=state.dtype)
    validate_operands(state.n, gate.operands)
    bases = coset_bases(state.n, operand_mask(gate.operands))
    offsets = local_offsets(gate.operands)
    return U, bases, offsets


def coset_indices(bases: np.ndarray, offsets: np.ndarray) -> np.ndarray:
    """(cosets, 2^k) table of global indices; row c is coset c in local order."""
    return bases[:, None] | offsets[None, :]


def apply(state: State, gate: Gate) -> State:
    """Return the register after `gate`. `state` is left untouched."""
    U, bases, offsets = prepare(state, gate)
    logger.debug("apply %s on n=%d (%d cosets)", gate, state.n, bases.shape[0])
    if U is None:
        return state.copy()

    table = coset_indices(bases, offsets)
    # gather: column c of `local` is coset c
    local = DenseMatrix(state.psi[table].T, dtype=state.dtype)
    out = U.mul(local).to_numpy()

    psi = np.empty_like(state.psi)
    # scatter: cosets are disjoint so every index is written exactly once
    psi[table] = out.T
    return State(state.n, psi)


def apply_single_qubit(state: State, U2: np.ndarray, k: int) -> State:
    """Apply 2x2 gate U2 to qubit k (little-endian: bit k)."""
    return apply(state, Gate.u(U2, k))

def apply_two_qubit_4x4(state: State, U4: np.ndarray, k: int, l: int) -> State:
    """Apply 4x4 gate U4 to qubits (k, l), k being the high local bit."""
    return apply(state, Gate.u(U4, k, l))

def apply_X(state: State, k: int) -> State:
    return apply(state, Gate.x(k))

def apply_H(state: State, k: int) -> State:
    return apply(state, Gate.h(k))

def apply_CNOT(state: State, control: int, target: int) -> State:
    return apply(state, Gate.cnot(control, target))
