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
Noise Types - Classification Results

Result containers produced by the noise classifier:
- NoiseType: four structural properties of the diffusion term
- NoiseClassification: (noise_type, covariance) pair
- NoiseDescriptor: externally supplied noise process description
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from sdenoise.types.core import CovarianceMatrix


# ============================================================================
# Noise Type Record
# ============================================================================


@dataclass(frozen=True)
class NoiseType:
    """
    Structural properties of the noise term of an SDE.

    Produced fresh by every classification call and never mutated.

    Attributes
    ----------
    additive : bool
        True if the diffusion output does not depend on the state
    autonomous : bool
        True if the diffusion output does not depend on time
    linear : bool
        True if the diffusion function is linear in the state
        (always True for additive noise)
    invertible : bool
        True if the effective noise covariance is invertible

    Examples
    --------
    >>> nt = NoiseType(additive=True, autonomous=True, linear=True, invertible=True)
    >>> nt.recommended_solvers('numpy')
    ['SRA1', 'SRA2', 'SRA3']
    """

    additive: bool
    autonomous: bool
    linear: bool
    invertible: bool

    def recommended_solvers(self, backend: str) -> List[str]:
        """
        Recommend efficient SDE solvers based on the noise structure.

        Parameters
        ----------
        backend : str
            Integration backend ('numpy', 'jax', 'torch')

        Returns
        -------
        List[str]
            Recommended solver names, ordered by efficiency/accuracy.
            Empty for unknown backends.
        """
        if backend == "jax":
            # Diffrax
            if self.additive:
                return ["sea", "shark", "sra1"]
            return ["euler_heun", "spark", "general_shark"]

        elif backend == "torch":
            # TorchSDE
            if self.additive:
                return ["euler", "milstein", "srk"]
            return ["euler", "srk", "reversible_heun"]

        elif backend == "numpy":
            # Julia/DiffEqPy
            if self.additive:
                return ["SRA1", "SRA2", "SRA3"]
            return ["SOSRI", "SRI", "SRIW1", "SRIW2"]

        return []

    def describe(self) -> str:
        """Short human-readable summary, e.g. 'additive, autonomous, linear, invertible'."""
        return ", ".join(
            [
                "additive" if self.additive else "multiplicative",
                "autonomous" if self.autonomous else "non-autonomous",
                "linear" if self.linear else "nonlinear",
                "invertible" if self.invertible else "singular",
            ]
        )


class NoiseClassification(NamedTuple):
    """
    Result of a classification call.

    Unpacks like a tuple::

        noise_type, covariance = find_noise_type(g, u0, p, t0)

    Attributes
    ----------
    noise_type : NoiseType
        Structural noise properties
    covariance : Optional[CovarianceMatrix]
        Effective constant noise covariance (D, D), or None when it is
        undeterminable or not applicable
    """

    noise_type: NoiseType
    covariance: Optional[CovarianceMatrix]


# ============================================================================
# External Noise Description
# ============================================================================


@dataclass(frozen=True)
class NoiseDescriptor:
    """
    Description of a user-supplied noise process.

    Only the ``covariance`` field is inspected. Correlation between noise
    processes at this level is not supported; a non-None covariance here is
    rejected by the classifier in favour of the ``covariance`` argument.
    """

    covariance: Optional[CovarianceMatrix] = None


__all__ = [
    "NoiseType",
    "NoiseClassification",
    "NoiseDescriptor",
]
