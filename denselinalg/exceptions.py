# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Error types raised by the decomposition routines.
"""


class LinalgError(Exception):
    """Base class for every error raised by denselinalg."""


class InvalidShape(LinalgError, ValueError):
    """The operand does not have the shape the operation requires."""


class IndexOutOfBounds(LinalgError, IndexError):
    """A row or column index falls outside the matrix."""


class DidNotConverge(LinalgError, RuntimeError):
    """
    An iterative method ran out of iterations (or diverged).

    The last iterate is kept on the exception so callers can inspect how
    far the method got.
    """

    def __init__(self, message, roots=None, iterations=0):
        super().__init__(message)
        self.roots = roots
        self.iterations = iterations
