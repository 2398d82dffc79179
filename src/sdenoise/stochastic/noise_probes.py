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
Noise Probes - Sampling-Based Structure Tests

Black-box tests on a diffusion function g(u, p, t):
    - is_state_independent: does g ignore u?
    - is_time_independent: does g ignore t?
    - is_linear: is a single-argument function linear?

All comparisons use EXACT equality of outputs. A genuinely constant (or
exactly linear) function returns identical values at every sample point,
while a dependent one almost surely does not. No tolerance is applied:
loosening the comparison would change what counts as additive noise.

The probes are heuristic and can be wrong with (very) small probability.
"""

import warnings
from typing import Callable, List, Optional, Sequence

import numpy as np

from sdenoise.types.core import (
    ArrayLike,
    DiffusionFunction,
    ParameterVector,
    ScalarLike,
    StateVector,
)

# Irregular spacing avoids aliasing with periodic diffusion functions
TIME_OFFSETS = (0.0, 0.101, 1.01, 10.1, 101.0)

N_STATE_SAMPLES = 10


# ============================================================================
# Comparison Helpers
# ============================================================================


def outputs_equal(a: ArrayLike, b: ArrayLike, equal_nan: bool = True) -> bool:
    """
    Exact equality of two diffusion outputs.

    Shapes must match and every element must be identical. With
    ``equal_nan`` NaNs in the same position compare equal (same-value
    semantics); without it NaN never equals anything.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    equal_nan = equal_nan and a.dtype.kind in "fc" and b.dtype.kind in "fc"
    return bool(np.array_equal(a, b, equal_nan=equal_nan))


def all_equal(values: Sequence[ArrayLike]) -> bool:
    """True if every value equals the first (a single distinct value)."""
    first = values[0]
    return all(outputs_equal(first, v) for v in values[1:])


def _warn_if_nonfinite(values: Sequence[ArrayLike], probe: str) -> None:
    for v in values:
        arr = np.asarray(v)
        if arr.dtype.kind in "fc" and not np.all(np.isfinite(arr)):
            warnings.warn(
                f"Diffusion function returned non-finite values during {probe} probe; "
                f"noise classification may be unreliable.",
                UserWarning,
            )
            return


# ============================================================================
# Probes
# ============================================================================


def is_state_independent(
    g: DiffusionFunction,
    u: StateVector,
    p: ParameterVector,
    t: float,
    rng: Optional[np.random.Generator] = None,
    n_samples: int = N_STATE_SAMPLES,
) -> bool:
    """
    Check whether g depends on the state.

    Evaluates g at ``n_samples`` random states u + r - 0.5 with
    r ~ U[0, 1) elementwise, i.e. perturbations uniform on [-0.5, 0.5).

    Parameters
    ----------
    g : DiffusionFunction
        Adapted diffusion function g(u, p, t)
    u : StateVector
        Reference state
    p : ParameterVector
        Parameters (held fixed)
    t : float
        Time (held fixed)
    rng : np.random.Generator, optional
        Random source. A fresh unseeded generator is used if None.
    n_samples : int
        Number of perturbed states

    Returns
    -------
    bool
        True if all outputs are exactly equal
    """
    rng = np.random.default_rng() if rng is None else rng
    u = np.asarray(u)

    states = [u + rng.random(u.shape) - 0.5 for _ in range(n_samples)]
    values = [g(x, p, t) for x in states]

    _warn_if_nonfinite(values, "state-independence")
    return all_equal(values)


def is_time_independent(
    g: DiffusionFunction,
    u: StateVector,
    p: ParameterVector,
    t0: float,
    offsets: Sequence[float] = TIME_OFFSETS,
) -> bool:
    """
    Check whether g depends explicitly on time.

    Evaluates g at t0 + offset for each offset, by default
    t0 + (0.0, 0.101, 1.01, 10.1, 101.0).

    Returns
    -------
    bool
        True if all outputs are exactly equal
    """
    values = [g(u, p, t0 + dt) for dt in offsets]

    _warn_if_nonfinite(values, "time-independence")
    return all_equal(values)


def is_linear(
    f: Callable[[ArrayLike], ArrayLike],
    x: ArrayLike,
    y: ArrayLike,
    c: ScalarLike,
) -> bool:
    """
    Check additivity and homogeneity of f at the points x, y.

    f(x + y) == f(x) + f(y) and f(c x) == c f(x), both exactly. NaN never
    compares equal here, so a NaN output is never linear.

    Examples
    --------
    >>> is_linear(lambda u: np.diag(u), np.ones(2), 2 * np.ones(2), 2.0)
    True
    >>> is_linear(np.sin, np.ones(2), 2 * np.ones(2), 2.0)
    False
    """
    fx = np.asarray(f(x))
    additive = outputs_equal(f(x + y), fx + np.asarray(f(y)), equal_nan=False)
    homogeneous = outputs_equal(f(c * x), c * fx, equal_nan=False)
    return additive and homogeneous


def sample_linearity(
    f: Callable[[ArrayLike], ArrayLike],
    u0: StateVector,
    rng: np.random.Generator,
    n_samples: int = 10,
    c: ScalarLike = 2.0,
) -> bool:
    """
    Run ``is_linear`` at ``n_samples`` point pairs around u0.

    Pair i (1-based) is x = u0 + i r1, y = u0 + i r2 with fresh
    r1, r2 ~ U[0, 1). Every pair is evaluated; f is linear only if all pass.
    """
    u0 = np.asarray(u0)
    checks: List[bool] = []
    for i in range(1, n_samples + 1):
        x = u0 + i * rng.random(u0.shape)
        y = u0 + i * rng.random(u0.shape)
        checks.append(is_linear(f, x, y, c))
    return all(checks)


__all__ = [
    "TIME_OFFSETS",
    "N_STATE_SAMPLES",
    "outputs_equal",
    "all_equal",
    "is_state_independent",
    "is_time_independent",
    "is_linear",
    "sample_linearity",
]
