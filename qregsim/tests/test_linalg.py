# qregsim/tests/test_linalg.py
import numpy as np
import pytest

from qregsim.errors import DimensionMismatch
from qregsim.linalg import DenseMatrix


def test_kron_column_major_layout():
    a = DenseMatrix.from_column_major(2, 2, [1, 3, 2, 4])  # [[1,2],[3,4]]
    b = DenseMatrix.from_column_major(2, 2, [5, 7, 6, 8])  # [[5,6],[7,8]]
    c = a.kron(b)
    assert c.shape == (4, 4)
    expect = np.array([[ 5,  6, 10, 12],
                       [ 7,  8, 14, 16],
                       [15, 18, 20, 24],
                       [21, 24, 28, 32]])
    assert np.array_equal(c.to_numpy(), expect)
    assert np.array_equal(c.data, expect.ravel(order="F"))


def test_mul_matrix_and_vector():
    a = DenseMatrix.from_column_major(4, 3, [1, 4, 7, 10, 2, 5, 8, 11, 3, 6, 9, 12])
    b = DenseMatrix.from_column_major(3, 2, [1, 3, 5, 2, 4, 6])
    c = a.mul(b)
    assert c.shape == (4, 2)
    assert np.array_equal(c.col(0), [22, 49, 76, 103])
    assert np.array_equal(c.col(1), [28, 64, 100, 136])

    v = a.mul(DenseMatrix.column([1, 0, 0]))
    assert v.shape == (4, 1)
    assert np.array_equal(v.col(0), a.col(0))


def test_mul_dimension_mismatch():
    with pytest.raises(DimensionMismatch):
        DenseMatrix.identity(2).mul(DenseMatrix.identity(3))


def test_access_and_bounds():
    m = DenseMatrix([[1, 2], [3, 4]])
    assert m.at(1, 0) == 3
    assert np.array_equal(m.row(0), [1, 2])
    assert np.array_equal(m.col(1), [2, 4])
    with pytest.raises(IndexError):
        m.at(2, 0)
    with pytest.raises(IndexError):
        m.col(-1)


def test_scalmul_and_norm():
    v = DenseMatrix.column([3, 4j])
    assert v.norm() == pytest.approx(5.0)
    assert v.scalmul(0.2).norm() == pytest.approx(1.0)


def test_precision_is_kept():
    m = DenseMatrix(np.eye(2, dtype=np.complex64))
    assert m.mul(m).dtype == np.complex64
    assert m.scalmul(2.0).dtype == np.complex64
    assert m.kron(m).dtype == np.complex64
