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
Stochastic Noise Utilities
==========================

Classify the noise structure of an SDE before simulation.

Noise Classification
--------------------
>>> from sdenoise.stochastic import NoiseClassifier, find_noise_type
>>>
>>> # Quick classification
>>> noise_type, cov = find_noise_type(g, u0, p, t0)
>>> print(noise_type.additive, noise_type.recommended_solvers('numpy'))
>>>
>>> # Reproducible classification
>>> noise_type, cov = NoiseClassifier(seed=0).classify(g, u0, p, t0)

Diffusion Adaptation
--------------------
>>> from sdenoise.stochastic import make_diffusion
>>>
>>> diffusion = make_diffusion(g_inplace, is_in_place=True, noise_prototype=np.zeros((2, 2)))
>>> G = diffusion(u, p, t)

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

# Diffusion handling
from .diffusion_handler import make_diffusion, make_problem_diffusion

# Linear algebra
from .linalg_utils import is_invertible

# Noise analysis
from .noise_analysis import (
    ConfigurationConflictError,
    NoiseClassifier,
    find_noise_type,
    find_problem_noise_type,
)

# Probes
from .noise_probes import is_linear, is_state_independent, is_time_independent

# Problem container
from .sde_problem import SDEProblem, SDEProblemProtocol

__all__ = [
    # Diffusion handling
    "make_diffusion",
    "make_problem_diffusion",
    # Linear algebra
    "is_invertible",
    # Noise analysis
    "ConfigurationConflictError",
    "NoiseClassifier",
    "find_noise_type",
    "find_problem_noise_type",
    # Probes
    "is_state_independent",
    "is_time_independent",
    "is_linear",
    # Problem container
    "SDEProblem",
    "SDEProblemProtocol",
]
