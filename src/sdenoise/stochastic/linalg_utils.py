# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Linear Algebra Utilities for Noise Analysis
"""

import numpy as np
from scipy import linalg

from sdenoise.types.core import ArrayLike

DEFAULT_INVERTIBILITY_TOL = 1e-10


def is_invertible(matrix: ArrayLike, tol: float = DEFAULT_INVERTIBILITY_TOL) -> bool:
    """
    Check whether a matrix is invertible via its determinant.

    The determinant magnitude is taken from a pivoted LU factorization,
    |prod(diag(U))|, which never raises on singular input. Matrices whose
    determinant magnitude is at or below ``tol`` are reported singular, as
    is any input that is not a 2-D square matrix.

    Parameters
    ----------
    matrix : ArrayLike
        Square matrix
    tol : float
        Determinant magnitude threshold

    Returns
    -------
    bool
        True if |det(matrix)| > tol

    Examples
    --------
    >>> is_invertible(np.eye(3))
    True
    >>> is_invertible(np.zeros((2, 2)))
    False
    """
    A = np.asarray(matrix)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        return False
    # check_finite=False: NaN input yields a NaN determinant (singular), not an error
    _, _, U = linalg.lu(A, check_finite=False)
    det = np.abs(np.prod(np.diag(U)))
    return bool(det > tol)


__all__ = ["is_invertible", "DEFAULT_INVERTIBILITY_TOL"]
