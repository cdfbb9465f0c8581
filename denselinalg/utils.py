# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .exceptions import IndexOutOfBounds, InvalidShape

# Absolute tolerance for "these two numbers are the same"
EQUALITY_TOL: float = 1e-4
# Mean root displacement at which Durand-Kerner stops
CONV_TOL: float = 1e-5
DEFAULT_MAX_ITER: int = 10_000


def as_matrix(A) -> np.ndarray:
    """
    Return a fresh 2-D float64 (or complex128) copy of A.
    """
    A = np.asarray(A)
    if A.ndim != 2 or A.size == 0:
        raise InvalidShape(f"expected a non-empty 2-D matrix, got shape {A.shape}")
    dtype = complex if np.iscomplexobj(A) else float
    return A.astype(dtype, copy=True)


def require_square(A: np.ndarray, name: str) -> int:
    m, n = A.shape
    if m != n:
        raise InvalidShape(f"{name}: only available for square matrices, got {m}x{n}")
    return n


def pseudo_equals(x, y, tol: float = EQUALITY_TOL) -> bool:
    """Scalar equality up to an absolute tolerance (works for complex too)."""
    return bool(abs(x - y) < tol)


def matrix_pseudo_equals(A, B, tol: float = EQUALITY_TOL) -> bool:
    """
    True if A and B have the same shape and the mean squared
    element-wise difference is below `tol`.
    """
    A = np.asarray(A)
    B = np.asarray(B)
    if A.shape != B.shape:
        return False
    return pseudo_equals(frobenius_norm_squared(A - B) / A.size, 0.0, tol)


def snap_zeros(A: np.ndarray, tol: float = EQUALITY_TOL) -> np.ndarray:
    """Replace every pseudo-zero entry of A (in place) with an exact zero."""
    A[np.abs(A) < tol] = 0
    return A


def frobenius_norm_squared(A) -> float:
    A = np.asarray(A)
    return float(np.sum(np.abs(A) ** 2))


def normalize(v: np.ndarray) -> np.ndarray:
    return v / np.sqrt(frobenius_norm_squared(v))


def proj(v: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Projection of v onto `direction`: (dᴴv / ‖d‖²) d
    """
    return (np.vdot(direction, v) / frobenius_norm_squared(direction)) * direction


def minor(A: np.ndarray, i: int, j: int) -> np.ndarray:
    """Return A with row i and column j removed."""
    m, n = A.shape
    if m < 2 or n < 2 or not (0 <= i < m) or not (0 <= j < n):
        raise IndexOutOfBounds(f"minor({i}, {j}) is undefined for a {m}x{n} matrix")
    return np.delete(np.delete(A, i, axis=0), j, axis=1)


def row_switching_matrix(n: int, first: int, second: int, dtype=float) -> np.ndarray:
    """Identity of order n with rows `first` and `second` exchanged."""
    if not (0 <= first < n) or not (0 <= second < n):
        raise IndexOutOfBounds(
            f"row_switching_matrix: rows ({first}, {second}) outside order {n}"
        )
    P = np.eye(n, dtype=dtype)
    P[[first, second]] = P[[second, first]]
    return P


def random_nonsingular_upper(n, low=-100, high=100, seed=None) -> np.ndarray:
    """
    Build a matrix U that is upper-triangular with random entries
    everywhere and put only non-zero values on its diagonal

    Returns
    -------
    Matrix with float64 dtype
    """
    rng = np.random.default_rng(seed)
    U = rng.uniform(low, high, size=(n, n))
    U = np.triu(U)
    # keep the diagonal away from zero
    diag = rng.uniform(1, high, size=n) * rng.choice([-1.0, 1.0], size=n)
    U[np.diag_indices(n)] = diag
    return np.asarray(U)
