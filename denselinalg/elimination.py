# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .utils import EQUALITY_TOL, as_matrix, snap_zeros

logger = logging.getLogger(__name__)


def row_echelon_form(A, tol: float = EQUALITY_TOL) -> np.ndarray:
    """
    Reduced row echelon form of an m by n matrix A, computed with
    Gauss-Jordan elimination and partial pivoting.

    Parameters
    ----------
    A   : (m, n) array_like, real or complex
    tol : float
        Entries with magnitude below `tol` count as zero, both when
        looking for a pivot and in the final clean-up.

    Returns
    -------
    R : (m, n) ndarray
        Every pivot is 1 and is the only non-zero entry of its column;
        all-zero rows are moved to the bottom, the remaining rows keep
        their order.
    """
    R = as_matrix(A)
    m, n = R.shape

    h = 0  # pivot row
    k = 0  # pivot column
    while h < m and k < n:
        # Pick the largest magnitude in column k, row h and below;
        # argmax keeps the first one on ties.
        i_max = h + int(np.abs(R[h:, k]).argmax())
        if abs(R[i_max, k]) < tol:
            # nothing usable in this column
            k += 1
            continue

        if i_max != h:
            R[[h, i_max]] = R[[i_max, h]]

        R[h, k:] /= R[h, k]
        R[h, k] = 1

        others = np.arange(m) != h
        factors = R[others, k].copy()
        R[others, k + 1 :] -= factors[:, None] * R[h, k + 1 :]
        R[others, k] = 0

        h += 1
        k += 1

    snap_zeros(R, tol)

    # stable partition: non-zero rows first, zero rows last
    nonzero = np.any(R != 0, axis=1)
    order = np.concatenate([np.flatnonzero(nonzero), np.flatnonzero(~nonzero)])
    logger.debug("row_echelon_form: rank %d of %dx%d", int(nonzero.sum()), m, n)
    return R[order]


def rank(A, tol: float = EQUALITY_TOL) -> int:
    """Matrix rank is the number of non-zero rows in its reduced form"""
    R = row_echelon_form(A, tol)
    return int(np.count_nonzero(np.any(R != 0, axis=1)))
