#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time the decompositions against their NumPy counterparts.

    python -m denselinalg.benchmark
"""

import platform
import time

import numpy as np
import pandas as pd

from .eigen import eig
from .matrix_functions import det
from .plu import plu
from .qr import qr
from .svd import svd
from .utils import frobenius_norm_squared

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = [3, 5, 8]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def _residual(A, B) -> float:
    return float(np.sqrt(frobenius_norm_squared(np.asarray(A) - np.asarray(B))))


def run_benchmarks(sizes=SIZES, repeats: int = REPEATS, seed=0) -> pd.DataFrame:
    """
    One row per (kernel, size): our time, time relative to NumPy and
    the reconstruction residual ‖A - product of factors‖_F.
    """
    rng = np.random.default_rng(seed)
    records = []
    for n in sizes:
        A = rng.standard_normal((n, n))

        t_ours = min(wall(det, A) for _ in range(repeats))
        t_np = min(wall(np.linalg.det, A) for _ in range(repeats))
        err = abs(det(A) - np.linalg.det(A))
        records.append(("det", f"{n}x{n}", t_ours, t_ours / t_np, err))

        t_ours = min(wall(plu, A) for _ in range(repeats))
        # LAPACK getrf runs inside solve
        t_np = min(wall(np.linalg.solve, A, np.eye(n)) for _ in range(repeats))
        P, L, U = plu(A)
        records.append(("PLU", f"{n}x{n}", t_ours, t_ours / t_np, _residual(P @ L @ U, A)))

        t_ours = min(wall(qr, A) for _ in range(repeats))
        t_np = min(wall(np.linalg.qr, A) for _ in range(repeats))
        Q, R = qr(A)
        records.append(("CGS-QR", f"{n}x{n}", t_ours, t_ours / t_np, _residual(Q @ R, A)))

        t_ours = min(wall(eig, A) for _ in range(repeats))
        t_np = min(wall(np.linalg.eig, A) for _ in range(repeats))
        V, D = eig(A)
        records.append(("eig", f"{n}x{n}", t_ours, t_ours / t_np, _residual(A @ V, V @ D)))

        t_ours = min(wall(svd, A) for _ in range(repeats))
        t_np = min(wall(np.linalg.svd, A) for _ in range(repeats))
        U, S, Vh = svd(A)
        records.append(("svd", f"{n}x{n}", t_ours, t_ours / t_np, _residual(U @ S @ Vh, A)))

    return pd.DataFrame(
        records,
        columns=["kernel", "size", "sec", "sec/NumPy", "residual"],
    )


def main():
    df = run_benchmarks()
    print(f"# {platform.python_implementation()} {platform.python_version()}")
    print(df.to_markdown(index=False))
    df.to_csv("bench_results.csv", index=False)


if __name__ == "__main__":
    main()
