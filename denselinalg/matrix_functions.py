# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .utils import EQUALITY_TOL, as_matrix, minor, pseudo_equals, require_square

logger = logging.getLogger(__name__)


def det(A):
    """
    Calculate the determinant of an n-by-n matrix A by repeatedly
    eliminating the first column (LU through Schur complements), O(n³).

    The pivot is the first entry of column 0 that is exactly non-zero.
    Moving it to the top is a single row transposition, so the sign
    flips once whenever the pivot was not already in row 0.
    """
    A = as_matrix(A)
    require_square(A, "det")

    result = A.dtype.type(1)
    while True:
        n = A.shape[0]
        if n == 1:
            return result * A[0, 0]
        if n == 2:
            return result * (A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])

        nonzero = np.flatnonzero(A[:, 0] != 0)
        if nonzero.size == 0:
            # first column is entirely zero
            return A.dtype.type(0)

        pivot_row = int(nonzero[0])
        if pivot_row != 0:
            A[[0, pivot_row]] = A[[pivot_row, 0]]
            result = -result

        a = A[0, 0]
        v = A[1:, :1]
        wT = A[:1, 1:]
        result = result * a
        A = A[1:, 1:] - (v @ wT) / a


def adj(A: np.ndarray):
    """
    Adjugate (classical adjoint) of a square matrix A: the transpose of
    the cofactor matrix C[i, j] = (-1)^(i+j) det(minor(A, i, j)).

    Every entry costs one determinant, so this is O(n⁵).
    """
    A = as_matrix(A)
    n = require_square(A, "adj")
    if n == 1:
        return np.ones((1, 1), dtype=A.dtype)

    C = np.empty_like(A)
    for i in range(n):
        for j in range(n):
            C[i, j] = ((-1) ** (i + j)) * det(minor(A, i, j))
    return C.T


def inverse(A, tol: float = EQUALITY_TOL, return_singular: bool = False):
    """
    Inverse of a square matrix through its adjugate, A⁻¹ = adj(A) / det(A).

    A singular matrix (determinant within `tol` of zero) does not raise:
    the identity matrix of the same order is returned instead.

    Parameters
    ----------
    A : (n, n) array_like
    tol : float
        Absolute tolerance for treating det(A) as zero.
    return_singular : bool
        If True, also return a flag telling whether the identity
        fallback was taken.

    Returns
    -------
    A_inv : (n, n) ndarray
    singular : bool, optional
        Only when return_singular=True.
    """
    A = as_matrix(A)
    n = require_square(A, "inverse")

    d = det(A)
    singular = pseudo_equals(d, 0.0, tol)
    if singular:
        logger.warning(
            "inverse(): determinant %s is zero within %g, returning identity", d, tol
        )
        A_inv = np.eye(n, dtype=A.dtype)
    else:
        A_inv = adj(A) / d

    return (A_inv, singular) if return_singular else A_inv


def trace(A) -> complex:
    A = as_matrix(A)
    require_square(A, "trace")
    return np.trace(A)


def matrix_power(A, k: int) -> np.ndarray:
    """A multiplied by itself k times (k ≥ 0); A⁰ is the identity."""
    A = as_matrix(A)
    n = require_square(A, "matrix_power")
    if k < 0:
        raise ValueError("matrix_power: only non-negative powers are supported")
    result = np.eye(n, dtype=A.dtype)
    for _ in range(k):
        result = result @ A
    return result
