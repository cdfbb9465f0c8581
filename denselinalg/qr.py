# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import List, Tuple

import numpy as np

from .utils import (
    EQUALITY_TOL,
    as_matrix,
    frobenius_norm_squared,
    normalize,
    pseudo_equals,
    require_square,
)


def qr(A, tol: float = EQUALITY_TOL) -> Tuple[np.ndarray, np.ndarray]:
    """
    Classical Gram-Schmidt orthogonalization (QR decomposition)
    Parameters:
    A : array_like
        Square input matrix, real or complex.
    tol : float
        A column whose remainder has squared norm below `tol` is
        treated as linearly dependent.
    Returns:
    Q : ndarray
        Orthogonal (unitary) column matrix. Dependent columns of A
        come out as zero columns.
    R : ndarray
        Upper-triangular matrix, R = Qᴴ A
    """
    A = as_matrix(A)
    n = require_square(A, "qr")

    units: List[np.ndarray] = []
    for j in range(n):
        a = A[:, j]
        u = a.copy()
        # every earlier e is unit length (or zero), so proj_e(a) = (eᴴa) e
        for e in units:
            u -= np.vdot(e, a) * e
        if pseudo_equals(frobenius_norm_squared(u), 0.0, tol):
            units.append(np.zeros_like(a))
        else:
            units.append(normalize(u))

    Q = np.column_stack(units)
    R = Q.conj().T @ A
    return Q, R
