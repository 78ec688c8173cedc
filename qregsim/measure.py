# qregsim/measure.py
"""Single-qubit projective measurement.

Collapse shrinks the register: measuring qubit q of an n-qubit State gives
an (n-1)-qubit State in which qubits above q move down one bit position
(old qubit q+1 becomes qubit q, and so on). Qubits below q keep their index.
"""
from typing import Tuple

import numpy as np

from .config import DEFAULT_CONFIG, SimulatorConfig
from .errors import NumericalDegeneracy, OperandOutOfRange
from .linalg import DenseMatrix
from .logging_config import get_logger
from .state import State

logger = get_logger(__name__)

# one generator per seed, created on first use and shared by later calls
_DEFAULT_RNGS = {}


def default_rng(seed=None):
    """Process-wide generator for `seed`; repeated calls keep drawing from it."""
    rng = _DEFAULT_RNGS.get(seed)
    if rng is None:
        rng = _DEFAULT_RNGS[seed] = np.random.default_rng(seed)
    return rng


def _check_qubit(state: State, qubit: int):
    if not 0 <= qubit < state.n:
        raise OperandOutOfRange(f"qubit {qubit} outside 0..{state.n - 1}")


def split(state: State, qubit: int) -> Tuple[np.ndarray, np.ndarray]:
    """(zero_branch, one_branch), each of length 2^(n-1), relative order kept."""
    _check_qubit(state, qubit)
    # view psi as (high, bit q, low): the middle axis is the measured qubit
    low = 1 << qubit
    high = 1 << (state.n - qubit - 1)
    psi3 = state.psi.reshape(high, 2, low)
    return psi3[:, 0, :].reshape(-1), psi3[:, 1, :].reshape(-1)


def probability_of_one(state: State, qubit: int) -> float:
    _, one = split(state, qubit)
    return float(np.vdot(one, one).real)


def measure(state: State, qubit: int, rng=None, config: SimulatorConfig = DEFAULT_CONFIG) -> Tuple[bool, State]:
    """Measure `qubit`; returns (outcome, collapsed register of n-1 qubits).

    `rng` is anything with a random() method returning a float in [0, 1),
    e.g. numpy.random.Generator. It is called exactly once. When omitted,
    the shared generator for config.seed is used.
    """
    zero, one = split(state, qubit)
    p1 = float(np.vdot(one, one).real)

    if rng is None:
        rng = default_rng(config.seed)
    t = float(rng.random())

    outcome = t < p1
    branch = DenseMatrix.column(one if outcome else zero)
    norm = branch.norm()
    if not norm > config.zero_tol:
        raise NumericalDegeneracy(
            f"cannot collapse qubit {qubit} to {int(outcome)}: branch norm {norm:.3e} (p1={p1:.6f}, t={t:.6f})")

    psi = branch.scalmul(1.0 / norm).col(0)
    logger.debug("measure q=%d of n=%d: p1=%.6f t=%.6f -> %d", qubit, state.n, p1, t, outcome)
    return outcome, State(state.n - 1, psi)


def measure_all(state: State, rng=None, config: SimulatorConfig = DEFAULT_CONFIG) -> Tuple[bool, ...]:
    """Measure every qubit, highest index first so lower indices never shift.

    outcomes[q] is the result for qubit q of the input register.
    """
    if rng is None:
        rng = default_rng(config.seed)
    outcomes = [False] * state.n
    for q in reversed(range(state.n)):
        outcomes[q], state = measure(state, q, rng=rng, config=config)
    return tuple(outcomes)
