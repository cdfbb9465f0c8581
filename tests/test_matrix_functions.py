# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from denselinalg.exceptions import InvalidShape
from denselinalg.matrix_functions import adj, det, inverse, matrix_power, trace
from denselinalg.utils import matrix_pseudo_equals, minor, random_nonsingular_upper

MAT = np.array(
    [
        [3, 0, 0, 3, 0],
        [-3, 0, -2, 0, 0],
        [0, -1, 0, 0, -3],
        [0, 0, 0, 3, 3],
        [0, -1, 2, 0, 1],
    ]
)

MAT_INV = np.array(
    [
        [4 / 3, 1, -1, -4 / 3, 1],
        [-3, -3, 2, 3, -3],
        [-2, -2, 3 / 2, 2, -3 / 2],
        [-1, -1, 1, 4 / 3, -1],
        [1, 1, -1, -1, 1],
    ]
)


def test_determinant_of_integer_matrix():
    assert math.isclose(det(MAT), -18.0, abs_tol=1e-5)
    assert math.isclose(det(minor(MAT, 0, 1)), -54.0, abs_tol=1e-5)


def test_determinants():
    rng = np.random.default_rng(0)
    A = rng.normal(size=(8, 8))
    our_det = det(A)
    numpy_det = np.linalg.det(A)
    assert math.isclose(our_det, numpy_det, rel_tol=1e-6)


@pytest.mark.parametrize("n", [1, 2, 3, 6])
def test_determinant_of_transpose(n):
    rng = np.random.default_rng(n)
    A = rng.normal(size=(n, n))
    assert math.isclose(det(A), det(A.T), rel_tol=1e-6, abs_tol=1e-12)


def test_complex_determinant():
    rng = np.random.default_rng(1)
    A = rng.normal(size=(5, 5)) + 1j * rng.normal(size=(5, 5))
    assert abs(det(A) - np.linalg.det(A)) < 1e-8


def test_determinant_row_switch_sign():
    # one transposition (rows 0 and 2) flips the sign once, real or complex
    A = np.array([[0, 0, 1], [0, 1, 0], [1, 0, 0]])
    assert det(A) == -1.0
    assert det(A.astype(complex)) == -1.0
    assert det(1j * A) == pytest.approx(np.linalg.det(1j * A))


def test_determinant_zero_first_column():
    A = np.array([[0, 1, 2], [0, 3, 4], [0, 5, 7]])
    assert det(A) == 0.0


def test_determinant_does_not_modify_input():
    A = np.array([[0.0, 2.0, 1.0], [1.0, 1.0, 1.0], [4.0, 0.0, 3.0]])
    before = A.copy()
    det(A)
    np.testing.assert_array_equal(A, before)


def test_determinant_non_square_raises():
    with pytest.raises(InvalidShape):
        det(np.ones((2, 3)))
    with pytest.raises(ValueError):
        det(np.ones((3, 2)))


def test_adjugate():
    rng = np.random.default_rng(2)
    A = rng.normal(size=(5, 5))

    our_adj = adj(A)
    numpy_adj = np.linalg.det(A) * np.linalg.inv(A)
    assert np.allclose(our_adj, numpy_adj, atol=1e-8)


def test_adjugate_of_singular_matrix():
    A = np.array([[1.0, 2.0], [2.0, 4.0]])
    np.testing.assert_allclose(adj(A), [[4.0, -2.0], [-2.0, 1.0]])
    np.testing.assert_array_equal(adj([[7.0]]), [[1.0]])


def test_inverse():
    np.testing.assert_allclose(inverse(MAT), MAT_INV, atol=1e-10)


def test_inverse_gives_identity():
    A = random_nonsingular_upper(6, seed=3)
    assert matrix_pseudo_equals(A @ inverse(A), np.eye(6))


def test_complex_inverse():
    rng = np.random.default_rng(4)
    A = rng.normal(size=(4, 4)) + 1j * rng.normal(size=(4, 4))
    np.testing.assert_allclose(inverse(A), np.linalg.inv(A), atol=1e-10)


def test_inverse_of_singular_matrix_is_identity():
    A = np.array([[1, 2, 3], [2, 4, 6], [1, 1, 1]])
    np.testing.assert_array_equal(inverse(A), np.eye(3))

    A_inv, singular = inverse(A, return_singular=True)
    assert singular
    np.testing.assert_array_equal(A_inv, np.eye(3))

    _, singular = inverse(MAT, return_singular=True)
    assert not singular


def test_inverse_non_square_raises():
    with pytest.raises(InvalidShape):
        inverse(np.ones((2, 3)))


def test_trace_and_power():
    rng = np.random.default_rng(5)
    A = rng.normal(size=(4, 4))
    assert math.isclose(trace(A), np.trace(A))
    for k in [0, 1, 2, 5]:
        np.testing.assert_allclose(
            matrix_power(A, k), np.linalg.matrix_power(A, k), rtol=1e-10, atol=1e-12
        )


def test_trace_and_power_reject_bad_input():
    with pytest.raises(InvalidShape):
        trace(np.ones((2, 3)))
    with pytest.raises(InvalidShape):
        matrix_power(np.ones((2, 3)), 2)
    with pytest.raises(ValueError):
        matrix_power(np.eye(2), -1)
