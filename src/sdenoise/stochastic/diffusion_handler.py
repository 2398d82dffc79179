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
Diffusion Handler - Calling Convention Adapter

Normalizes a user diffusion function into the single pure calling
convention ``diffusion(u, p, t) -> array``, whatever its native form:

    - out-of-place: g(u, p, t) -> array (returned unchanged)
    - in-place:     g(du, u, p, t) writing into du

Every probe in the noise classifier works against the adapted function.
"""

import copy
from typing import Optional

from sdenoise.types.core import (
    AnyDiffusionFunction,
    DiffusionFunction,
    DiffusionMatrix,
    NoisePrototype,
    ParameterVector,
    StateVector,
)
from sdenoise.stochastic.sde_problem import SDEProblemProtocol


def make_diffusion(
    g: AnyDiffusionFunction,
    is_in_place: bool,
    noise_prototype: Optional[NoisePrototype] = None,
) -> DiffusionFunction:
    """
    Build an out-of-place diffusion function from g.

    Parameters
    ----------
    g : callable
        User diffusion function
    is_in_place : bool
        True if g has the in-place signature g(du, u, p, t)
    noise_prototype : NoisePrototype, optional
        Buffer template for in-place calls. When None the state u is used
        as the template (diagonal noise).

    Returns
    -------
    DiffusionFunction
        Function (u, p, t) -> array. A fresh buffer is allocated on every
        call, so results retained by a caller are never overwritten.

    Examples
    --------
    >>> def g_inplace(du, u, p, t):
    ...     du[:] = 0.1 * u
    >>> diffusion = make_diffusion(g_inplace, is_in_place=True)
    >>> diffusion(np.array([1.0, 2.0]), None, 0.0)
    array([0.1, 0.2])
    """
    if not is_in_place:
        return g

    def diffusion(u: StateVector, p: ParameterVector, t: float) -> DiffusionMatrix:
        du = copy.deepcopy(u if noise_prototype is None else noise_prototype)
        g(du, u, p, t)
        return du

    return diffusion


def make_problem_diffusion(
    problem: SDEProblemProtocol,
    is_in_place: bool,
) -> DiffusionFunction:
    """
    Build the adapted diffusion function of an SDE problem.

    Uses the problem's ``g`` and ``noise_rate_prototype``.

    Parameters
    ----------
    problem : SDEProblemProtocol
        Problem exposing ``g`` and ``noise_rate_prototype``
    is_in_place : bool
        True if ``problem.g`` has the in-place signature

    Returns
    -------
    DiffusionFunction
        Function (u, p, t) -> array
    """
    return make_diffusion(problem.g, is_in_place, problem.noise_rate_prototype)


__all__ = ["make_diffusion", "make_problem_diffusion"]
