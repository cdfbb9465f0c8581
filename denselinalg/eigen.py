# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import functools
import logging
from typing import Dict, List, Tuple

import numpy as np

from .elimination import row_echelon_form
from .exceptions import DidNotConverge
from .matrix_functions import inverse, matrix_power, trace
from .utils import (
    CONV_TOL,
    DEFAULT_MAX_ITER,
    EQUALITY_TOL,
    as_matrix,
    normalize,
    require_square,
)

logger = logging.getLogger(__name__)

# Singularity threshold for the back-solve systems inside eigenvectors_for.
# Their determinants are products of reduced-row entries, so only an
# (almost) exact zero means the system really is singular.
_SOLVE_TOL: float = 1e-12


def characteristic_polynomial(A) -> np.ndarray:
    """
    Coefficients of the monic characteristic polynomial of A, lowest
    power first: p(x) = c[0] + c[1] x + ... + c[n] xⁿ with c[n] = 1.

    Uses Newton's identities on the power sums pₖ = trace(Aᵏ):

        c[n-m] = -(1/m) Σ_{k=1..m} c[n-m+k] pₖ,    m = 1..n
    """
    A = as_matrix(A)
    n = require_square(A, "characteristic_polynomial")

    power_sums = [trace(matrix_power(A, k)) for k in range(1, n + 1)]
    coeffs = np.zeros(n + 1, dtype=A.dtype)
    coeffs[n] = 1
    for m in range(1, n + 1):
        s = sum(coeffs[n - m + k] * power_sums[k - 1] for k in range(1, m + 1))
        coeffs[n - m] = -s / m
    return coeffs


def _polynomial(coeffs: np.ndarray):
    highest_first = coeffs[::-1]
    return lambda x: np.polyval(highest_first, x)


def durand_kerner(
    coeffs,
    tol: float = CONV_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
    return_history: bool = False,
):
    """
    Find every root of a polynomial at once with the Durand-Kerner
    (Weierstrass) iteration.

    Parameters
    ----------
    coeffs : (n+1,) array_like
        Polynomial coefficients, lowest power first. The polynomial is
        made monic before iterating.
    tol : float
        Stop once the mean absolute root displacement of one sweep is
        below `tol`.
    max_iter : int
        Maximum number of sweeps.
    return_history : bool
        If True, also return (num_iters, displacement_history).

    Returns
    -------
    roots : (n,) complex ndarray
    (iters, hist) : optional
        Iteration count and displacement array if return_history=True.

    Raises
    ------
    DidNotConverge
        If `max_iter` sweeps were not enough or the iterate blew up.
    """
    coeffs = np.asarray(coeffs, dtype=complex)
    n = coeffs.size - 1
    if n < 1:
        raise ValueError("durand_kerner needs a polynomial of degree ≥ 1")
    coeffs = coeffs / coeffs[-1]
    f = _polynomial(coeffs)

    # The seeds are powers of p0, none of them may already be a root.
    p0 = 0.4 + 0.9j
    while any(f(p0**i) == 0 for i in range(1, n + 1)):
        p0 *= 2
    roots = p0 ** np.arange(1, n + 1)

    hist = []
    for iters in range(1, max_iter + 1):
        prev = roots
        # Π_{j≠i} (zᵢ - zⱼ), all taken from the previous sweep
        diffs = prev[:, None] - prev[None, :]
        np.fill_diagonal(diffs, 1)
        roots = prev - f(prev) / diffs.prod(axis=1)

        if not np.all(np.isfinite(roots)):
            raise DidNotConverge(
                f"durand_kerner diverged after {iters} iterations",
                roots=prev,
                iterations=iters,
            )

        displacement = float(np.mean(np.abs(roots - prev)))
        hist.append(displacement)
        if displacement < tol:
            break
    else:
        last = hist[-1] if hist else float("nan")
        raise DidNotConverge(
            f"durand_kerner did not reach {tol:g} in {max_iter} iterations "
            f"(last displacement {last:g})",
            roots=roots,
            iterations=max_iter,
        )

    logger.debug("durand_kerner: converged in %d iterations", iters)
    return (roots, iters, np.array(hist)) if return_history else roots


def cluster_eigenvalues(
    values, tol: float = EQUALITY_TOL
) -> List[Tuple[complex, int]]:
    """
    Group eigenvalues that lie within `tol` of each other.

    Closeness is made transitive with a union-find over all pairs, so a
    chain a ~ b ~ c lands in one cluster whatever order the solver
    returned the roots in. Each cluster is represented by the mean of
    its members; imaginary parts smaller than `tol` are dropped.

    Returns
    -------
    clusters : list of (eigenvalue, multiplicity)
        Sorted by descending real part (real parts closer than `tol`
        count as equal), then descending imaginary part.
    """
    values = np.asarray(values, dtype=complex)
    n = values.size
    parent = list(range(n))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i in range(n):
        for j in range(i + 1, n):
            if abs(values[i] - values[j]) < tol:
                parent[find(j)] = find(i)

    groups: Dict[int, List[int]] = {}
    for i in range(n):
        groups.setdefault(find(i), []).append(i)

    clusters = []
    for members in groups.values():
        lam = complex(np.mean(values[members]))
        if abs(lam.imag) < tol:
            lam = complex(lam.real, 0.0)
        clusters.append((lam, len(members)))

    # real parts within tol tie (conjugate pairs), then imaginary decides
    def descending(a, b):
        x, y = a[0], b[0]
        if abs(x.real - y.real) >= tol:
            return -1 if x.real > y.real else 1
        if x.imag != y.imag:
            return -1 if x.imag > y.imag else 1
        return 0

    clusters.sort(key=functools.cmp_to_key(descending))

    logger.debug("cluster_eigenvalues: %s", clusters)
    return clusters


def _free_columns(R: np.ndarray, tol: float) -> List[int]:
    """
    Columns of a reduced matrix that can be set to 1 in a null-space
    basis vector.
    """
    m, n = R.shape
    nonzero = np.abs(R) >= tol
    # keep only the first non-zero of every column
    for j in range(n):
        rows = np.flatnonzero(nonzero[:, j])
        if rows.size:
            nonzero[rows[0] + 1 :, j] = False

    free: List[int] = []
    for i in range(m):
        cols = np.flatnonzero(nonzero[i])
        # the last non-zero of a row is solved for, the others are free
        free.extend(int(c) for c in cols[:-1])
    free.extend(int(j) for j in np.flatnonzero(~nonzero.any(axis=0)))
    return free


def eigenvectors_for(
    A, eigenvalue: complex, multiplicity: int, tol: float = EQUALITY_TOL
) -> List[np.ndarray]:
    """
    Unit eigenvectors of A for one eigenvalue, read off the null space
    of A - λI.

    Every free column of the reduced matrix gets a one-hot row written
    over a trailing zero row. Solving the resulting square system with
    a unit right-hand side for each free column in turn gives one basis
    vector of the null space per column.

    Returns
    -------
    vectors : list of (n,) complex ndarray
        Exactly `multiplicity` vectors.
    """
    A = as_matrix(A)
    n = require_square(A, "eigenvectors_for")

    R = row_echelon_form(A - eigenvalue * np.eye(n), tol)
    free = _free_columns(R, tol)

    if not free:
        logger.warning(
            "eigenvectors_for(%s): A - λI reduced to full rank, "
            "treating column %d as free",
            eigenvalue,
            n - 1,
        )
        free = [n - 1]
    if len(free) != multiplicity:
        logger.warning(
            "eigenvectors_for(%s): %d free columns for multiplicity %d",
            eigenvalue,
            len(free),
            multiplicity,
        )

    vectors = []
    for slot in range(min(len(free), multiplicity)):
        modified = R.copy()
        rhs = np.zeros(n, dtype=complex)
        row = n - 1
        for idx, col in enumerate(free):
            modified[row] = 0
            modified[row, col] = 1
            rhs[row] = 1 if idx == slot else 0
            row -= 1
        vectors.append(normalize(inverse(modified, tol=_SOLVE_TOL) @ rhs))

    # defective eigenvalue: fewer directions than its multiplicity
    while len(vectors) < multiplicity:
        vectors.append(vectors[len(vectors) % len(free)].copy())
    return vectors


def eig(
    A,
    tol: float = EQUALITY_TOL,
    conv_tol: float = CONV_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Eigen-decomposition of a square matrix, A V = V D.

    1.  Characteristic polynomial from Newton's identities.
    2.  All of its roots at once with Durand-Kerner.
    3.  Roots closer than `tol` are merged into one eigenvalue with a
        multiplicity (degeneracy).
    4.  For each eigenvalue, `multiplicity` unit eigenvectors from the
        null space of A - λI.

    Parameters
    ----------
    A : (n, n) array_like
        Real or complex square matrix.
    tol : float
        Equality tolerance for clustering and for the reduced form.
    conv_tol : float
        Durand-Kerner convergence tolerance.
    max_iter : int
        Durand-Kerner iteration budget.

    Returns
    -------
    V : (n, n) complex ndarray
        Eigenvectors as columns.
    D : (n, n) complex ndarray
        Diagonal matrix of eigenvalues, descending real part.

    Raises
    ------
    InvalidShape
        If A is not square.
    DidNotConverge
        If the root finder runs out of iterations.
    """
    A = as_matrix(A)
    require_square(A, "eig")

    coeffs = characteristic_polynomial(A)
    roots = durand_kerner(coeffs, tol=conv_tol, max_iter=max_iter)
    clusters = cluster_eigenvalues(roots, tol)

    values: List[complex] = []
    vectors: List[np.ndarray] = []
    for lam, multiplicity in clusters:
        values.extend([lam] * multiplicity)
        vectors.extend(eigenvectors_for(A, lam, multiplicity, tol))

    V = np.column_stack(vectors).astype(complex)
    D = np.diag(np.array(values, dtype=complex))
    return V, D
