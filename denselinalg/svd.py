# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .eigen import eig
from .qr import qr
from .utils import CONV_TOL, DEFAULT_MAX_ITER, EQUALITY_TOL, as_matrix

logger = logging.getLogger(__name__)


def svd(
    A,
    tol: float = EQUALITY_TOL,
    conv_tol: float = CONV_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
):
    """
        Full Singular Value Decomposition built on the eigensolver.

        For an m-by-n matrix A this routine returns three complex matrices:
            U : m-by-m matrix whose columns are orthonormal
            S : m-by-n rectangular diagonal matrix of singular values,
                largest first
            Vh: n-by-n matrix whose rows are orthonormal (Vᵀ for real A)

        Algorithm outline
        -----------------
        1.  Eigen-decompose A Aᴴ (left singular vectors U) and Aᴴ A
            (right singular vectors V).
        2.  The singular values are the square roots of the eigenvalues of
            whichever product is smaller; eigenvalues within `tol` of zero
            are taken as exactly zero.
        3.  The two eigensolves know nothing about each other's signs, so
            V is re-orthonormalised and every column of U with a non-zero
            singular value is rebuilt as u = A v / sigma. The rest of U
            (the null space of Aᴴ) stays as eig(A Aᴴ) found it, made
            orthonormal to the rebuilt columns.
        4.  Return U, S and V.T (conjugated for complex A).
    """
    A = as_matrix(A)
    m, n = A.shape
    Ah = A.conj().T

    # Step-1: both eigenproblems
    U, D_left = eig(A @ Ah, tol=tol, conv_tol=conv_tol, max_iter=max_iter)
    V, D_right = eig(Ah @ A, tol=tol, conv_tol=conv_tol, max_iter=max_iter)

    # Step-2: singular values from the smaller product
    eigenvalues = np.diag(D_left if m <= n else D_right).copy()
    eigenvalues[np.abs(eigenvalues) < tol] = 0
    sigma = np.sqrt(eigenvalues)

    k = min(m, n)
    S = np.zeros((m, n), dtype=complex)
    S[np.arange(k), np.arange(k)] = sigma

    # Step-3: tie U to V
    V, _ = qr(V, tol)
    U = U.copy()
    for i, s in enumerate(sigma):
        if s != 0:
            U[:, i] = (A @ V[:, i]) / s
    U, _ = qr(U, tol)

    logger.debug("svd: singular values %s", sigma)
    return U, S, V.conj().T
