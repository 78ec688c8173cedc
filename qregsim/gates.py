# qregsim/gates.py
"""Gate catalog: gate descriptors and the matrices they resolve to.

Operand order convention shared with the engines: for a k-qubit gate on
operands (q0, q1, ..., q_{k-1}), row/column index `local` of the matrix has
q0 as its most significant bit and q_{k-1} as its least significant bit.
So Gate.cnot(control, target) is the usual |c t> CNOT matrix.
"""
import enum
import operator
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .errors import (DimensionMismatch, InvalidArity, NumericalDegeneracy,
                     OperandOutOfRange, UnsupportedGate)
from .linalg import DenseMatrix


# ---------- matrices ----------

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return np.array([[s, s],
                     [s, -s]], dtype=dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=dtype)

def CNOT(dtype=np.complex128) -> np.ndarray:
    # 4x4 in order 00,01,10,11 with the control as the high bit
    mat = np.eye(4, dtype=dtype)
    # swap |10> <-> |11>
    mat[2,2] = 0; mat[3,3] = 0
    mat[2,3] = 1; mat[3,2] = 1
    return mat

# Parametrized rotations, for use with Gate.u
def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[np.exp(-0.5j*theta), 0],
                     [0, np.exp(+0.5j*theta)]], dtype=dtype)

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return np.array([[c, s],
                     [s, c]], dtype=dtype)


# ---------- descriptors ----------

class GateType(enum.Enum):
    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    CNOT = "CNOT"
    U = "U"  # caller-supplied unitary


_FIXED_ARITY = {
    GateType.I: 1,
    GateType.X: 1,
    GateType.Y: 1,
    GateType.Z: 1,
    GateType.H: 1,
    GateType.CNOT: 2,
}

_CATALOG = {
    GateType.X: X,
    GateType.Z: Z,
    GateType.H: H,
    GateType.CNOT: CNOT,
}


def _qubit_index(q) -> int:
    # ints and numpy integers only; 1.7 or "1" is not a qubit
    try:
        return operator.index(q)
    except TypeError:
        raise OperandOutOfRange(f"qubit index {q!r} is not an integer") from None


@dataclass(frozen=True, eq=False)
class Gate:
    kind: GateType
    operands: Tuple[int, ...]
    matrix: Optional[np.ndarray] = None  # only for GateType.U

    def __post_init__(self):
        object.__setattr__(self, "operands", tuple(_qubit_index(q) for q in self.operands))
        if self.matrix is not None:
            # owned copy, independent of the caller's array
            object.__setattr__(self, "matrix", np.array(self.matrix, copy=True))

    @staticmethod
    def i(q: int) -> "Gate": return Gate(GateType.I, (q,))
    @staticmethod
    def x(q: int) -> "Gate": return Gate(GateType.X, (q,))
    @staticmethod
    def y(q: int) -> "Gate": return Gate(GateType.Y, (q,))
    @staticmethod
    def z(q: int) -> "Gate": return Gate(GateType.Z, (q,))
    @staticmethod
    def h(q: int) -> "Gate": return Gate(GateType.H, (q,))
    @staticmethod
    def cnot(control: int, target: int) -> "Gate": return Gate(GateType.CNOT, (control, target))

    @staticmethod
    def u(matrix, *operands: int) -> "Gate":
        if isinstance(matrix, DenseMatrix):
            matrix = matrix.to_numpy()
        return Gate(GateType.U, operands, matrix)

    def __str__(self):
        return f"{self.kind.value}{list(self.operands)}"


def arity(gate: Gate) -> int:
    if gate.kind is GateType.U:
        m = gate.matrix
        if m is None or m.ndim != 2 or m.shape[0] != m.shape[1] or m.shape[0] < 2:
            shape = None if m is None else m.shape
            raise DimensionMismatch(f"U needs a square 2^k x 2^k matrix, got {shape}")
        dim = m.shape[0]
        if dim & (dim - 1):
            raise DimensionMismatch(f"U matrix dimension {dim} is not a power of two")
        if not np.all(np.isfinite(m)):
            raise NumericalDegeneracy("U matrix contains non-finite entries")
        return dim.bit_length() - 1
    return _FIXED_ARITY[gate.kind]


def resolve(gate: Gate, dtype=np.complex128) -> Optional[DenseMatrix]:
    """Matrix for `gate`, or None for the identity pass-through."""
    k = arity(gate)
    if len(gate.operands) != k:
        raise InvalidArity(f"{gate.kind.value} takes {k} operand(s), got {len(gate.operands)}")
    if gate.kind is GateType.I:
        return None
    if gate.kind is GateType.U:
        return DenseMatrix(gate.matrix, dtype=dtype)
    build = _CATALOG.get(gate.kind)
    if build is None:
        raise UnsupportedGate(f"no matrix defined for gate {gate.kind.value}")
    return DenseMatrix(build(dtype=dtype))
