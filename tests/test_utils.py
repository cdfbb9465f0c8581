# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from denselinalg.exceptions import IndexOutOfBounds, InvalidShape
from denselinalg.utils import (
    as_matrix,
    matrix_pseudo_equals,
    minor,
    normalize,
    proj,
    pseudo_equals,
    random_nonsingular_upper,
    row_switching_matrix,
)


def test_pseudo_equals():
    assert pseudo_equals(1.0, 1.00005)
    assert not pseudo_equals(1.0, 1.0002)
    assert pseudo_equals(1 + 1j, 1 + 1.00001j)
    assert pseudo_equals(1.0, 1.0009, tol=1e-3)


def test_matrix_pseudo_equals_uses_mean_squared_difference():
    A = np.zeros((2, 2))
    B = np.array([[0.01, 0.0], [0.0, 0.0]])  # mean squared diff 2.5e-5
    assert matrix_pseudo_equals(A, B)
    assert not matrix_pseudo_equals(A, np.ones((2, 2)))
    assert not matrix_pseudo_equals(A, np.zeros((2, 3)))


def test_as_matrix_widens_and_copies():
    ints = np.array([[1, 2], [3, 4]])
    A = as_matrix(ints)
    assert A.dtype == float
    A[0, 0] = 10
    assert ints[0, 0] == 1
    assert as_matrix([[1j]]).dtype == complex


@pytest.mark.parametrize("bad", [[1.0, 2.0], np.zeros((0, 3)), np.zeros((2, 2, 2))])
def test_as_matrix_rejects_non_matrices(bad):
    with pytest.raises(InvalidShape):
        as_matrix(bad)


def test_minor():
    A = np.arange(9.0).reshape(3, 3)
    np.testing.assert_array_equal(minor(A, 1, 0), [[1.0, 2.0], [7.0, 8.0]])
    with pytest.raises(IndexOutOfBounds):
        minor(A, 3, 0)
    with pytest.raises(IndexOutOfBounds):
        minor(np.ones((1, 1)), 0, 0)


def test_row_switching_matrix():
    P = row_switching_matrix(3, 0, 2)
    np.testing.assert_array_equal(P, [[0, 0, 1], [0, 1, 0], [1, 0, 0]])
    np.testing.assert_array_equal(row_switching_matrix(2, 1, 1), np.eye(2))
    with pytest.raises(IndexOutOfBounds):
        row_switching_matrix(3, 0, 3)


def test_proj_and_normalize():
    v = np.array([3.0, 4.0])
    np.testing.assert_allclose(normalize(v), [0.6, 0.8])
    np.testing.assert_allclose(proj(v, np.array([2.0, 0.0])), [3.0, 0.0])


def test_random_nonsingular_upper():
    U = random_nonsingular_upper(5, seed=0)
    assert np.all(np.tril(U, -1) == 0)
    assert np.all(np.abs(np.diag(U)) >= 1)
