# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
denselinalg
===========

Exact, general-purpose dense linear algebra over real and complex
scalars, written for small matrices rather than speed.

Public API
~~~~~~~~~~
- Decompositions
    - `plu`, `qr`
    - `eig`, `svd`
- Matrix utilities
    - `det`, `adj`, `inverse`, `trace`, `matrix_power`
- Elimination
    - `row_echelon_form`, `rank`
- Eigen building blocks
    - `characteristic_polynomial`, `durand_kerner`, `cluster_eigenvalues`
- Comparisons
    - `pseudo_equals`, `matrix_pseudo_equals`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import numpy as np, denselinalg as la
>>> A = np.array([[8, 1, 6], [3, 5, 7], [4, 9, 2]])
>>> V, D = la.eig(A)
>>> la.matrix_pseudo_equals(A @ V, V @ D)
True
"""

from importlib.metadata import version as _pkg_version

from .eigen import (
    characteristic_polynomial,
    cluster_eigenvalues,
    durand_kerner,
    eig,
    eigenvectors_for,
)
from .elimination import rank, row_echelon_form
from .exceptions import DidNotConverge, IndexOutOfBounds, InvalidShape, LinalgError
from .matrix_functions import (
    adj,
    det,
    inverse,
    matrix_power,
    trace,
)
from .plu import plu

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .qr import qr
from .svd import svd
from .utils import (
    CONV_TOL,
    EQUALITY_TOL,
    matrix_pseudo_equals,
    pseudo_equals,
)

__all__ = [
    "plu",
    "qr",
    "eig",
    "svd",
    "det",
    "adj",
    "inverse",
    "trace",
    "matrix_power",
    "row_echelon_form",
    "rank",
    "characteristic_polynomial",
    "durand_kerner",
    "cluster_eigenvalues",
    "eigenvectors_for",
    "pseudo_equals",
    "matrix_pseudo_equals",
    "EQUALITY_TOL",
    "CONV_TOL",
    "LinalgError",
    "InvalidShape",
    "IndexOutOfBounds",
    "DidNotConverge",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show denselinalg”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
