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
Core Types - Fundamental Building Blocks

Defines the basic array and function types used by the noise classifier:
- Array types (NumPy, with room for other array libraries)
- Semantic vector types (state, parameters)
- Matrix types (diffusion, covariance)
- Diffusion function signatures (in-place and out-of-place)

Usage
-----
>>> from sdenoise.types.core import StateVector, DiffusionMatrix
>>>
>>> def g(u: StateVector, p, t: float) -> DiffusionMatrix:
...     return 0.1 * np.eye(len(u))
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    import torch


# ============================================================================
# Basic Array Types
# ============================================================================

ArrayLike = Union[np.ndarray, "torch.Tensor"]
"""
Array-like type accepted by the classifier.

The classifier itself only ever calls ``numpy`` functions on the values
returned by the diffusion function, so any object ``np.asarray`` understands
will work.
"""

ScalarLike = Union[float, int, np.number]
"""Scalar numeric value (time, tolerance, scaling constant)."""


# ============================================================================
# Semantic Vector Types
# ============================================================================

StateVector = ArrayLike
"""
State vector u, shape (D,).

D = len(u0) is the state dimension and is fixed for the lifetime of a
single classification call.
"""

ParameterVector = Any
"""
Model parameters p.

Opaque to the classifier: passed through to the diffusion function
unchanged. May be an array, a dict, a dataclass or ``None``.
"""

TimeSpan = Sequence[float]
"""Integration interval (t0, tf). Only t0 is read by the classifier."""


# ============================================================================
# Matrix Types
# ============================================================================

DiffusionMatrix = ArrayLike
"""
Diffusion/noise gain matrix, shape (D, m) or (D,) for diagonal noise.

Examples
--------
>>> # Additive noise (constant)
>>> G_additive: DiffusionMatrix = 0.1 * np.eye(D)
>>>
>>> # Diagonal multiplicative noise
>>> G_diag: DiffusionMatrix = 0.2 * u
"""

CovarianceMatrix = ArrayLike
"""
Covariance matrix (symmetric, positive semidefinite), shape (D, D).

Formed as ``A @ A.conj().T`` from a square constant diffusion matrix A,
or as the identity when the diffusion output shape is unknown.
"""

NoisePrototype = ArrayLike
"""
Template array describing the output shape of the diffusion function.

Used as the buffer template for in-place diffusion functions and to decide
whether the diffusion output is square (and therefore whether a covariance
matrix A A' is defined).
"""


# ============================================================================
# Function Types
# ============================================================================

DiffusionFunction = Callable[[StateVector, ParameterVector, float], DiffusionMatrix]
"""
Out-of-place diffusion function g(u, p, t) -> G.

Examples
--------
>>> def g_additive(u, p, t):
...     return 0.1 * np.eye(2)
>>>
>>> def g_multiplicative(u, p, t):
...     return np.diag(0.1 * u)
"""

InPlaceDiffusionFunction = Callable[
    [DiffusionMatrix, StateVector, ParameterVector, float], Optional[Any]
]
"""
In-place diffusion function g(du, u, p, t) writing its result into du.

The return value is ignored.

Examples
--------
>>> def g_inplace(du, u, p, t):
...     du[:] = 0.1 * u
"""

AnyDiffusionFunction = Union[DiffusionFunction, InPlaceDiffusionFunction]
"""Either calling convention; which one is selected by ``is_in_place``."""


__all__ = [
    # Basic arrays
    "ArrayLike",
    "ScalarLike",
    # Vectors
    "StateVector",
    "ParameterVector",
    "TimeSpan",
    # Matrices
    "DiffusionMatrix",
    "CovarianceMatrix",
    "NoisePrototype",
    # Functions
    "DiffusionFunction",
    "InPlaceDiffusionFunction",
    "AnyDiffusionFunction",
]
