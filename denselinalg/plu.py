# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .utils import as_matrix, require_square, row_switching_matrix


def plu(A) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    PLU decomposition of a square matrix, A = P @ L @ U.

    Recursive Schur-complement elimination on the first column:

        P1 A = [ a  wᵀ ]        S = A' - v wᵀ / a = P' L' U'
               [ v  A' ]

        P = P1 diag(1, P')
        L = [ 1         0  ]     U = [ a  wᵀ ]
            [ P'ᵀ v / a  L' ]         [ 0  U' ]

    The pivot is the first exactly non-zero entry in column 0. A zero
    column needs no swap and contributes a zero pivot, so singular
    matrices decompose too.

    Returns
    -------
    P : (n, n) ndarray  permutation matrix
    L : (n, n) ndarray  unit lower-triangular
    U : (n, n) ndarray  upper-triangular
    """
    A = as_matrix(A)
    n = require_square(A, "plu")
    dtype = A.dtype

    if n == 1:
        return np.eye(1, dtype=dtype), np.eye(1, dtype=dtype), A

    nonzero = np.flatnonzero(A[:, 0] != 0)
    switch_index = int(nonzero[0]) if nonzero.size else 0

    P1 = row_switching_matrix(n, 0, switch_index, dtype=dtype)
    P1A = P1 @ A
    a = P1A[0, 0]
    v = P1A[1:, :1]
    wT = P1A[:1, 1:]
    c = 1 / a if a != 0 else 0
    A_prime = P1A[1:, 1:]

    P_prime, L_prime, U_prime = plu(A_prime - (v @ wT) * c)

    P = np.eye(n, dtype=dtype)
    P[1:, 1:] = P_prime
    P = P1 @ P

    L = np.eye(n, dtype=dtype)
    L[1:, 1:] = L_prime
    L[1:, :1] = c * (P_prime.T @ v)

    U = np.eye(n, dtype=dtype)
    U[0, 0] = a
    U[:1, 1:] = wT
    U[1:, 1:] = U_prime

    return P, L, U
