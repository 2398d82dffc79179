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
sdenoise - Noise Structure Classification for SDEs
===================================================

>>> import numpy as np
>>> from sdenoise import find_noise_type
>>>
>>> noise_type, cov = find_noise_type(lambda u, p, t: 0.1 * np.eye(2), np.ones(2), None, 0.0)
>>> noise_type.additive
True
"""

from .stochastic import (
    ConfigurationConflictError,
    NoiseClassifier,
    SDEProblem,
    find_noise_type,
    find_problem_noise_type,
    is_invertible,
    is_linear,
    is_state_independent,
    is_time_independent,
    make_diffusion,
    make_problem_diffusion,
)
from .types import NoiseClassification, NoiseDescriptor, NoiseType

__version__ = "0.1.0"

__all__ = [
    "NoiseClassifier",
    "find_noise_type",
    "find_problem_noise_type",
    "make_diffusion",
    "make_problem_diffusion",
    "is_invertible",
    "is_state_independent",
    "is_time_independent",
    "is_linear",
    "ConfigurationConflictError",
    "NoiseType",
    "NoiseClassification",
    "NoiseDescriptor",
    "SDEProblem",
]
