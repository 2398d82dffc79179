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
SDE Problem Container

Minimal read-only description of an SDE problem as consumed by the noise
classifier. Problem construction and validation belong to the caller; the
classifier only reads these fields.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from sdenoise.types.core import (
    AnyDiffusionFunction,
    NoisePrototype,
    ParameterVector,
    StateVector,
    TimeSpan,
)


@runtime_checkable
class SDEProblemProtocol(Protocol):
    """
    Interface of any SDE-problem-shaped object the classifier can read.

    Objects from other SDE libraries satisfy it as long as they expose
    these attributes.
    """

    g: Optional[AnyDiffusionFunction]
    u0: StateVector
    p: ParameterVector
    tspan: TimeSpan
    noise: Optional[Any]
    noise_rate_prototype: Optional[NoisePrototype]


@dataclass(frozen=True)
class SDEProblem:
    """
    Plain SDE problem container.

    Attributes
    ----------
    g : callable, optional
        Diffusion function, g(u, p, t) or g(du, u, p, t). None when the
        noise is specified purely through a covariance.
    u0 : StateVector
        Initial state, shape (D,)
    p : ParameterVector
        Model parameters (passed through to g)
    tspan : TimeSpan
        Integration interval (t0, tf)
    noise : NoiseDescriptor, optional
        External noise process description
    noise_rate_prototype : NoisePrototype, optional
        Template array for the output shape of g

    Examples
    --------
    >>> prob = SDEProblem(
    ...     g=lambda u, p, t: 0.1 * np.eye(2),
    ...     u0=np.ones(2),
    ...     tspan=(0.0, 10.0),
    ...     noise_rate_prototype=np.zeros((2, 2)),
    ... )
    """

    g: Optional[AnyDiffusionFunction]
    u0: StateVector
    p: ParameterVector = None
    tspan: TimeSpan = (0.0, 1.0)
    noise: Optional[Any] = None
    noise_rate_prototype: Optional[NoisePrototype] = None


__all__ = ["SDEProblem", "SDEProblemProtocol"]
