# qregsim/state.py
import numpy as np
from dataclasses import dataclass

from .errors import DimensionMismatch, NumericalDegeneracy


def num_qubits_for(length: int) -> int:
    """log2(length), or DimensionMismatch if length is not a power of two."""
    if length < 1 or length & (length - 1):
        raise DimensionMismatch(f"register length {length} is not a power of two")
    return length.bit_length() - 1


@dataclass(frozen=True, eq=False)
class State:
    """Register of n qubits: psi[i] is the amplitude of basis state i,
    bit q of i being qubit q (little-endian, qubit 0 = LSB).

    Treated as a value. Gates and measurements return a new State and
    never write into an existing psi.
    """
    n: int
    psi: np.ndarray  # shape (2**n,), dtype complex64/128

    def __post_init__(self):
        if self.psi.ndim != 1 or self.psi.shape[0] != (1 << self.n):
            raise DimensionMismatch(f"psi of shape {self.psi.shape} does not hold {self.n} qubits")

    @staticmethod
    def from_amplitudes(amplitudes, dtype=np.complex128) -> "State":
        psi = np.array(amplitudes, dtype=dtype).ravel()
        n = num_qubits_for(psi.shape[0])
        if not np.all(np.isfinite(psi)):
            raise NumericalDegeneracy("register contains non-finite amplitudes")
        return State(n=n, psi=psi)

    @staticmethod
    def zero(n: int, dtype=np.complex128) -> "State":
        return State.basis(n, 0, dtype=dtype)

    @staticmethod
    def basis(n: int, index: int, dtype=np.complex128) -> "State":
        N = 1 << n
        if not 0 <= index < N:
            raise DimensionMismatch(f"basis index {index} outside 0..{N - 1}")
        psi = np.zeros(N, dtype=dtype)
        psi[index] = 1.0 + 0.0j
        return State(n=n, psi=psi)

    @property
    def dtype(self):
        return self.psi.dtype

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=1e-9):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise NumericalDegeneracy(f"Normalization failed: ||psi||^2={n2}")

    def probabilities(self) -> np.ndarray:
        return np.abs(self.psi) ** 2

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        """Read-only view of the amplitudes."""
        view = self.psi.view()
        view.flags.writeable = False
        return view
