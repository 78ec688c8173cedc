# qregsim/tests/test_engine.py
import numpy as np
import pytest

from qregsim.apply_serial import apply, coset_bases, coset_indices, local_offsets, operand_mask
from qregsim.errors import (DimensionMismatch, DuplicateOperand, InvalidArity,
                            NumericalDegeneracy, OperandOutOfRange, UnsupportedGate)
from qregsim.gates import Gate, GateType, RZ
from qregsim.state import State


def random_state(n, seed=0):
    rng = np.random.default_rng(seed)
    v = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    return State.from_amplitudes(v / np.linalg.norm(v))


def test_cosets_partition_every_index_once():
    n = 5
    for operands in ([0], [3], [4, 1], [2, 0, 4]):
        table = coset_indices(coset_bases(n, operand_mask(operands)), local_offsets(operands))
        assert table.shape == (1 << (n - len(operands)), 1 << len(operands))
        assert sorted(table.ravel().tolist()) == list(range(1 << n))


def test_local_offsets_first_operand_is_high_bit():
    assert local_offsets([1, 0]).tolist() == [0b00, 0b01, 0b10, 0b11]
    assert local_offsets([0, 1]).tolist() == [0b00, 0b10, 0b01, 0b11]
    assert local_offsets([3, 0]).tolist() == [0, 1, 8, 9]


def test_norm_preserved():
    st = random_state(4, seed=1)
    for g in (Gate.h(2), Gate.x(0), Gate.z(3), Gate.cnot(3, 1), Gate.u(np.kron(RZ(0.7), RZ(1.1)), 0, 2)):
        st = apply(st, g)
        assert abs(1.0 - st.norm2()) < 1e-9


@pytest.mark.parametrize("gate", [Gate.x(1), Gate.z(2), Gate.h(0), Gate.cnot(2, 0), Gate.cnot(0, 1)])
def test_involutions(gate):
    st = random_state(3, seed=2)
    back = apply(apply(st, gate), gate)
    assert np.allclose(back.as_numpy(), st.as_numpy(), atol=1e-9)


@pytest.mark.parametrize("n", [1, 2, 4])
def test_hadamard_layer_twice_restores_zero(n):
    st = State.zero(n)
    for _ in range(2):
        for q in range(n):
            st = apply(st, Gate.h(q))
    p = np.abs(st.as_numpy())
    assert p[0] >= 0.99
    assert np.all(p[1:] < 0.01)


def test_input_register_not_mutated():
    st = random_state(3, seed=3)
    before = st.psi.copy()
    apply(st, Gate.h(1))
    assert np.array_equal(st.psi, before)


def test_u_matches_full_kron_for_adjacent_pair():
    # gate on (q1, q0) of a 2-qubit register is the matrix itself
    rng = np.random.default_rng(4)
    U, _ = np.linalg.qr(rng.normal(size=(4, 4)) + 1j * rng.normal(size=(4, 4)))
    st = random_state(2, seed=5)
    out = apply(st, Gate.u(U, 1, 0))
    assert np.allclose(out.as_numpy(), U @ st.as_numpy(), atol=1e-12)


@pytest.mark.parametrize("gate, exc", [
    (Gate(GateType.X, (0, 1)), InvalidArity),
    (Gate(GateType.CNOT, (0,)), InvalidArity),
    (Gate.y(0), UnsupportedGate),
    (Gate.x(3), OperandOutOfRange),
    (Gate.x(-1), OperandOutOfRange),
    (Gate.cnot(1, 1), DuplicateOperand),
    (Gate.u(np.eye(3), 0), DimensionMismatch),
    (Gate.u(np.eye(4)[:, :2], 0), DimensionMismatch),
    (Gate.u(np.eye(4), 0), InvalidArity),
    (Gate.u([[np.nan, 0], [0, 1]], 0), NumericalDegeneracy),
    (Gate.u([[np.inf, 0], [0, 1]], 0), NumericalDegeneracy),
])
def test_invalid_gates_leave_register_identical(gate, exc):
    st = random_state(3, seed=6)
    before = st.psi.tobytes()
    with pytest.raises(exc):
        apply(st, gate)
    assert st.psi.tobytes() == before


def test_identity_still_validates():
    with pytest.raises(OperandOutOfRange):
        apply(State.zero(1), Gate.i(1))


def test_register_length_must_be_power_of_two():
    with pytest.raises(DimensionMismatch):
        State.from_amplitudes([1, 0, 0])
