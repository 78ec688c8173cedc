# qregsim/linalg.py
"""Dense complex matrix used by the gate catalog, the engines and measurement.

Thin value wrapper over a 2-D numpy array. The flat `data` view is
column-major: element (i, j) of an [r, c] matrix sits at i + r*j.
"""
import numpy as np

from .errors import DimensionMismatch


class DenseMatrix:
    __slots__ = ("_a",)

    def __init__(self, data, dtype=None):
        a = np.asarray(data)
        if dtype is None:
            dtype = np.result_type(a.dtype, np.complex64)
        a = np.array(a, dtype=dtype)
        if a.ndim == 1:
            a = a.reshape(-1, 1)
        if a.ndim != 2:
            raise DimensionMismatch(f"expected a 2-D matrix, got ndim={a.ndim}")
        self._a = a

    # ---------- construction ----------

    @classmethod
    def from_column_major(cls, rows: int, cols: int, values, dtype=np.complex128) -> "DenseMatrix":
        flat = np.asarray(values, dtype=dtype).ravel()
        if flat.size != rows * cols:
            raise DimensionMismatch(f"{flat.size} values cannot fill a {rows}x{cols} matrix")
        return cls(flat.reshape((rows, cols), order="F"))

    @classmethod
    def column(cls, values, dtype=None) -> "DenseMatrix":
        """[len, 1] column vector."""
        a = np.asarray(values, dtype=dtype)
        return cls(a.reshape(-1, 1), dtype=a.dtype)

    @classmethod
    def identity(cls, size: int, dtype=np.complex128) -> "DenseMatrix":
        return cls(np.eye(size, dtype=dtype))

    # ---------- queries ----------

    @property
    def shape(self):
        return self._a.shape

    @property
    def dtype(self):
        return self._a.dtype

    @property
    def data(self) -> np.ndarray:
        """Column-major flat copy."""
        return self._a.ravel(order="F").copy()

    def to_numpy(self) -> np.ndarray:
        return self._a.copy()

    def _check_row(self, i):
        if not 0 <= i < self._a.shape[0]:
            raise IndexError(f"row {i} out of range for shape {self.shape}")

    def _check_col(self, j):
        if not 0 <= j < self._a.shape[1]:
            raise IndexError(f"column {j} out of range for shape {self.shape}")

    def at(self, i: int, j: int):
        self._check_row(i)
        self._check_col(j)
        return self._a[i, j]

    def row(self, i: int) -> np.ndarray:
        self._check_row(i)
        return self._a[i, :].copy()

    def col(self, j: int) -> np.ndarray:
        self._check_col(j)
        return self._a[:, j].copy()

    # ---------- algebra ----------

    def mul(self, other: "DenseMatrix") -> "DenseMatrix":
        """Matrix-matrix (or matrix-vector, for a [k, 1] operand) product."""
        m, k = self.shape
        k1, n = other.shape
        if k != k1:
            raise DimensionMismatch(f"cannot multiply {m}x{k} by {k1}x{n}")
        return DenseMatrix(self._a @ other._a)

    def scalmul(self, scalar) -> "DenseMatrix":
        return DenseMatrix(self._a * scalar)

    def kron(self, other: "DenseMatrix") -> "DenseMatrix":
        # out[i1*r2 + i2, j1*c2 + j2] = self[i1, j1] * other[i2, j2]
        r1, c1 = self.shape
        r2, c2 = other.shape
        out = np.einsum("ab,cd->acbd", self._a, other._a)
        return DenseMatrix(out.reshape(r1 * r2, c1 * c2))

    def norm(self) -> float:
        """sqrt(<v, v>), the Frobenius norm for a matrix."""
        return float(np.sqrt(np.vdot(self._a, self._a).real))

    # ---------- python protocol ----------

    def __eq__(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._a, other._a))

    __hash__ = None

    def __repr__(self):
        return f"DenseMatrix(shape={self.shape}, dtype={self.dtype})"
