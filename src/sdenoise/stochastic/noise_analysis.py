"""
Noise Structure Analysis for Stochastic Systems

Classifies the diffusion term of an SDE before simulation so that an
integrator can pick an efficient scheme (e.g. additive-noise solvers).

The diffusion function is treated as a black box and probed numerically.
The classification is heuristic: it is correct with high probability,
not with certainty.

Components:
    - ConfigurationConflictError: mutually exclusive inputs were given
    - NoiseClassifier: decision procedure producing a NoiseType and covariance
    - find_noise_type / find_problem_noise_type: convenience functions

Reuses:
    - make_diffusion for the in-place/out-of-place calling convention
    - noise_probes for state/time independence and linearity
    - is_invertible for the covariance check
"""

from typing import Any, Optional, Sequence, Tuple

import numpy as np

from sdenoise.types.core import (
    AnyDiffusionFunction,
    CovarianceMatrix,
    NoisePrototype,
    ParameterVector,
    StateVector,
)
from sdenoise.types.noise import NoiseClassification, NoiseType
from sdenoise.stochastic.diffusion_handler import make_diffusion
from sdenoise.stochastic.linalg_utils import DEFAULT_INVERTIBILITY_TOL, is_invertible
from sdenoise.stochastic.noise_probes import (
    N_STATE_SAMPLES,
    TIME_OFFSETS,
    is_state_independent,
    is_time_independent,
    sample_linearity,
)
from sdenoise.stochastic.sde_problem import SDEProblemProtocol


# ============================================================================
# Exceptions
# ============================================================================


class ConfigurationConflictError(ValueError):
    """Raised when mutually exclusive noise specifications are supplied."""

    pass


# ============================================================================
# Noise Classifier
# ============================================================================


class NoiseClassifier:
    """
    Determines the noise structure of an SDE from its diffusion function.

    Four properties are reported:
        - additive: g does not depend on the state
        - autonomous: g does not depend on time
        - linear: g is linear in the state (always True when additive)
        - invertible: the effective noise covariance is invertible

    along with the covariance matrix A A' when it can be derived (constant
    square diffusion A), the identity when the output shape is unknown, or
    None otherwise.

    The random source is owned by the classifier; pass ``seed`` (or an
    existing ``rng``) to make classification reproducible.

    Parameters
    ----------
    seed : int, optional
        Seed for a new ``np.random.default_rng``
    rng : np.random.Generator, optional
        Existing generator (mutually exclusive with ``seed``)
    invertibility_tol : float, optional
        Determinant magnitude threshold for ``is_invertible``
    n_state_samples : int, optional
        Number of random states for the state-independence probe
    time_offsets : sequence of float, optional
        Offsets from t0 for the time-independence probe
    n_linearity_samples : int, optional
        Number of point pairs for the linearity probe
    linearity_scale : float, optional
        Scalar used for the homogeneity check

    Examples
    --------
    >>> classifier = NoiseClassifier(seed=42)
    >>> noise_type, cov = classifier.classify(
    ...     lambda u, p, t: np.eye(2), np.ones(2), None, 0.0,
    ...     noise_prototype=np.zeros((2, 2)),
    ... )
    >>> noise_type.additive, noise_type.invertible
    (True, True)
    >>>
    >>> # Multiplicative noise
    >>> noise_type, cov = classifier.classify(
    ...     lambda u, p, t: np.diag(u), np.ones(2), None, 0.0,
    ... )
    >>> noise_type.additive, noise_type.linear, cov
    (False, True, None)
    """

    INVERTIBILITY_TOL = DEFAULT_INVERTIBILITY_TOL
    N_STATE_SAMPLES = N_STATE_SAMPLES
    TIME_OFFSETS = TIME_OFFSETS
    N_LINEARITY_SAMPLES = 10
    LINEARITY_SCALE = 2.0

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        invertibility_tol: Optional[float] = None,
        n_state_samples: Optional[int] = None,
        time_offsets: Optional[Sequence[float]] = None,
        n_linearity_samples: Optional[int] = None,
        linearity_scale: Optional[float] = None,
    ):
        if seed is not None and rng is not None:
            raise ValueError("Provide either seed or rng, not both")

        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.invertibility_tol = (
            self.INVERTIBILITY_TOL if invertibility_tol is None else invertibility_tol
        )
        self.n_state_samples = (
            self.N_STATE_SAMPLES if n_state_samples is None else n_state_samples
        )
        self.time_offsets = tuple(
            self.TIME_OFFSETS if time_offsets is None else time_offsets
        )
        self.n_linearity_samples = (
            self.N_LINEARITY_SAMPLES if n_linearity_samples is None else n_linearity_samples
        )
        self.linearity_scale = (
            self.LINEARITY_SCALE if linearity_scale is None else linearity_scale
        )

        if self.n_state_samples < 2:
            raise ValueError(f"n_state_samples must be >= 2, got {self.n_state_samples}")
        if len(self.time_offsets) < 2:
            raise ValueError(
                f"time_offsets needs at least 2 entries, got {len(self.time_offsets)}"
            )
        if self.n_linearity_samples < 1:
            raise ValueError(
                f"n_linearity_samples must be >= 1, got {self.n_linearity_samples}"
            )

    # ------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------

    def classify(
        self,
        g: Optional[AnyDiffusionFunction],
        u0: StateVector,
        p: ParameterVector,
        t0: float,
        noise: Optional[Any] = None,
        covariance: Optional[CovarianceMatrix] = None,
        noise_prototype: Optional[NoisePrototype] = None,
        is_in_place: bool = False,
    ) -> NoiseClassification:
        """
        Classify the noise of an SDE.

        Decision order (first match wins):
            1. ``noise`` carries its own covariance -> ConfigurationConflictError
            2. ``g`` is None -> additive, autonomous, linear; covariance is the
               identity or the given ``covariance``
            3. ``g`` and ``covariance`` both given -> ConfigurationConflictError
            4. otherwise probe ``g``

        Parameters
        ----------
        g : callable, optional
            Diffusion function g(u, p, t), or g(du, u, p, t) if ``is_in_place``
        u0 : StateVector
            Reference state, shape (D,)
        p : ParameterVector
            Parameters passed to g
        t0 : float
            Reference time
        noise : object, optional
            Noise process description with a ``covariance`` attribute
        covariance : CovarianceMatrix, optional
            Explicit covariance (only allowed when g is None)
        noise_prototype : NoisePrototype, optional
            Template for the output of g
        is_in_place : bool
            Calling convention of g

        Returns
        -------
        NoiseClassification
            (noise_type, covariance)

        Raises
        ------
        ConfigurationConflictError
            If ``noise`` has a covariance, or if both g and covariance are given
        TypeError
            If g is neither None nor callable
        ValueError
            If u0 is empty
        """
        noise_cov = None if noise is None else getattr(noise, "covariance", None)
        if noise_cov is not None:
            raise ConfigurationConflictError(
                "Correlation between noise processes through the noise process "
                "interface is not supported. Use the `covariance` argument instead."
            )

        u0 = np.asarray(u0)
        if u0.size == 0:
            raise ValueError("u0 must have at least one element")
        D = u0.size

        if g is None:
            if covariance is None:
                return NoiseClassification(
                    NoiseType(additive=True, autonomous=True, linear=True, invertible=True),
                    np.eye(D),
                )
            invertible = is_invertible(covariance, tol=self.invertibility_tol)
            return NoiseClassification(
                NoiseType(additive=True, autonomous=True, linear=True, invertible=invertible),
                covariance,
            )

        if covariance is not None:
            raise ConfigurationConflictError(
                "Both `g` and `covariance` are provided. Encode the covariance in "
                "the diffusion function `g` together with `noise_prototype` instead."
            )

        if not callable(g):
            raise TypeError(f"g must be callable or None, got {type(g).__name__}")

        return self._classify_diffusion(g, u0, p, t0, noise_prototype, is_in_place)

    def classify_problem(
        self,
        problem: SDEProblemProtocol,
        is_in_place: bool = False,
    ) -> NoiseClassification:
        """
        Classify the noise of an SDE problem.

        Reads ``g, u0, p, tspan[0], noise, noise_rate_prototype``. No explicit
        covariance is passed: it must already be encoded in ``g`` or ``noise``.
        """
        return self.classify(
            problem.g,
            problem.u0,
            problem.p,
            problem.tspan[0],
            noise=problem.noise,
            covariance=None,
            noise_prototype=problem.noise_rate_prototype,
            is_in_place=is_in_place,
        )

    # ------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------

    def _classify_diffusion(
        self,
        g: AnyDiffusionFunction,
        u0: np.ndarray,
        p: ParameterVector,
        t0: float,
        noise_prototype: Optional[NoisePrototype],
        is_in_place: bool,
    ) -> NoiseClassification:
        """Probe g and build the classification (general case)."""
        diffusion = make_diffusion(g, is_in_place, noise_prototype)

        time_independent = is_time_independent(
            diffusion, self.rng.random(u0.shape), p, t0, offsets=self.time_offsets
        )
        state_independent = is_state_independent(
            diffusion, u0, p, t0, rng=self.rng, n_samples=self.n_state_samples
        )

        # additive noise is state-independent noise
        additive = state_independent
        autonomous = time_independent

        linear = True
        if not state_independent:
            linear = sample_linearity(
                lambda u: diffusion(u, p, t0),
                u0,
                self.rng,
                n_samples=self.n_linearity_samples,
                c=self.linearity_scale,
            )

        invertible = False
        covariance = None
        if autonomous and additive:
            invertible, covariance = self._constant_noise_covariance(
                diffusion, u0, p, noise_prototype
            )

        return NoiseClassification(
            NoiseType(
                additive=additive,
                autonomous=autonomous,
                linear=linear,
                invertible=invertible,
            ),
            covariance,
        )

    def _constant_noise_covariance(
        self,
        diffusion,
        u0: np.ndarray,
        p: ParameterVector,
        noise_prototype: Optional[NoisePrototype],
    ) -> Tuple[bool, Optional[np.ndarray]]:
        """
        Covariance of constant (additive, autonomous) noise.

        Square prototype -> A A' with A = g(0, p, 0). Non-square prototype
        -> no covariance. No prototype -> identity.
        """
        if noise_prototype is None:
            return True, np.eye(u0.size)

        if not _is_square(np.shape(noise_prototype)):
            return False, None

        A = np.asarray(diffusion(np.zeros(u0.shape), p, 0.0))
        covariance = A @ A.conj().T
        return is_invertible(covariance, tol=self.invertibility_tol), covariance

    def __repr__(self) -> str:
        return (
            f"NoiseClassifier(invertibility_tol={self.invertibility_tol}, "
            f"n_state_samples={self.n_state_samples}, "
            f"n_linearity_samples={self.n_linearity_samples})"
        )


def _is_square(shape: Tuple[int, ...]) -> bool:
    return len(shape) == 2 and shape[0] == shape[1]


# ============================================================================
# Convenience Functions
# ============================================================================


def find_noise_type(
    g: Optional[AnyDiffusionFunction],
    u0: StateVector,
    p: ParameterVector,
    t0: float,
    noise: Optional[Any] = None,
    covariance: Optional[CovarianceMatrix] = None,
    noise_prototype: Optional[NoisePrototype] = None,
    is_in_place: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> NoiseClassification:
    """
    Classify the noise of an SDE with a fresh ``NoiseClassifier``.

    See ``NoiseClassifier.classify`` for the decision procedure.

    Examples
    --------
    >>> noise_type, cov = find_noise_type(None, np.zeros(3), None, 0.0)
    >>> noise_type.describe()
    'additive, autonomous, linear, invertible'
    >>> cov.shape
    (3, 3)
    """
    return NoiseClassifier(rng=rng).classify(
        g,
        u0,
        p,
        t0,
        noise=noise,
        covariance=covariance,
        noise_prototype=noise_prototype,
        is_in_place=is_in_place,
    )


def find_problem_noise_type(
    problem: SDEProblemProtocol,
    is_in_place: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> NoiseClassification:
    """Classify the noise of an SDE problem with a fresh ``NoiseClassifier``."""
    return NoiseClassifier(rng=rng).classify_problem(problem, is_in_place)


__all__ = [
    "ConfigurationConflictError",
    "NoiseClassifier",
    "find_noise_type",
    "find_problem_noise_type",
]
