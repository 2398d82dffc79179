# Copyright (C) 2025 Gil Benezer
# License: AGPL-3.0

"""
Unit Tests for Noise Probes

Tests state independence, time independence and linearity probes,
plus the exact-equality comparison helpers they rely on.
"""

import numpy as np
import pytest

from sdenoise.stochastic.noise_probes import (
    TIME_OFFSETS,
    all_equal,
    is_linear,
    is_state_independent,
    is_time_independent,
    outputs_equal,
    sample_linearity,
)


@pytest.fixture
def rng():
    return np.random.default_rng(2024)


# ============================================================================
# Test Comparison Helpers
# ============================================================================


class TestOutputsEqual:
    """Exact equality of diffusion outputs."""

    def test_identical_arrays(self):
        assert outputs_equal(np.eye(2), np.eye(2))

    def test_tiny_difference_is_not_equal(self):
        assert not outputs_equal(np.eye(2), np.eye(2) + 1e-15)

    def test_shape_mismatch(self):
        assert not outputs_equal(np.zeros(2), np.zeros((2, 1)))

    def test_nan_in_same_position(self):
        a = np.array([1.0, np.nan])
        assert outputs_equal(a, a.copy())

    def test_integer_arrays(self):
        assert outputs_equal(np.array([1, 2]), np.array([1, 2]))
        assert not outputs_equal(np.array([1, 2]), np.array([1, 3]))

    def test_scalars(self):
        assert outputs_equal(0.5, 0.5)

    def test_all_equal(self):
        assert all_equal([np.ones(3)] * 4)
        assert not all_equal([np.ones(3), np.ones(3), np.zeros(3)])


# ============================================================================
# Test State Independence
# ============================================================================


class TestStateIndependence:
    """is_state_independent"""

    def test_constant_is_independent(self, rng):
        assert is_state_independent(lambda u, p, t: 0.1 * np.eye(2), np.ones(2), None, 0.0, rng=rng)

    def test_state_dependent(self, rng):
        assert not is_state_independent(lambda u, p, t: np.diag(u), np.ones(2), None, 0.0, rng=rng)

    def test_dependence_on_single_component(self, rng):
        g = lambda u, p, t: np.array([[1.0, 0.0], [0.0, u[1]]])
        assert not is_state_independent(g, np.ones(2), None, 0.0, rng=rng)

    def test_perturbations_within_half_unit(self, rng):
        u = np.array([3.0, -2.0, 0.5])
        seen = []

        def g(x, p, t):
            seen.append(x)
            return np.zeros(3)

        is_state_independent(g, u, None, 0.0, rng=rng)

        assert len(seen) == 10
        for x in seen:
            assert x.shape == u.shape
            assert np.all(x - u >= -0.5)
            assert np.all(x - u < 0.5)

    def test_parameters_and_time_fixed(self, rng):
        calls = []

        def g(u, p, t):
            calls.append((p, t))
            return np.zeros(1)

        is_state_independent(g, np.zeros(1), "params", 4.2, rng=rng)

        assert all(c == ("params", 4.2) for c in calls)

    def test_sample_count(self, rng):
        calls = []
        is_state_independent(
            lambda u, p, t: calls.append(1) or np.zeros(1), np.zeros(1), None, 0.0,
            rng=rng, n_samples=4,
        )
        assert len(calls) == 4

    def test_unseeded_default(self):
        assert is_state_independent(lambda u, p, t: np.ones(2), np.ones(2), None, 0.0)

    def test_nonfinite_output_warns(self, rng):
        with pytest.warns(UserWarning, match="state-independence"):
            is_state_independent(
                lambda u, p, t: np.array([np.inf]), np.zeros(1), None, 0.0, rng=rng
            )


# ============================================================================
# Test Time Independence
# ============================================================================


class TestTimeIndependence:
    """is_time_independent"""

    def test_constant_is_independent(self):
        assert is_time_independent(lambda u, p, t: np.eye(2), np.ones(2), None, 0.0)

    def test_time_dependent(self):
        assert not is_time_independent(lambda u, p, t: t * np.eye(2), np.ones(2), None, 0.0)

    def test_evaluation_times(self):
        times = []

        def g(u, p, t):
            times.append(t)
            return np.zeros(1)

        is_time_independent(g, np.zeros(1), None, 2.0)

        np.testing.assert_allclose(times, 2.0 + np.array(TIME_OFFSETS))

    def test_default_offsets(self):
        assert TIME_OFFSETS == (0.0, 0.101, 1.01, 10.1, 101.0)

    def test_unit_period_function_detected(self):
        # Integer spacing would alias a period-1 function; the offsets do not
        g = lambda u, p, t: np.array([np.sin(2 * np.pi * t)])
        assert not is_time_independent(g, np.zeros(1), None, 0.0)

    def test_custom_offsets(self):
        g = lambda u, p, t: np.array([np.floor(t)])
        assert is_time_independent(g, np.zeros(1), None, 0.0, offsets=(0.0, 0.25, 0.5))
        assert not is_time_independent(g, np.zeros(1), None, 0.0)


# ============================================================================
# Test Linearity
# ============================================================================


class TestLinearity:
    """is_linear and sample_linearity"""

    def test_diagonal_is_linear(self):
        x = np.array([1.25, 2.5])
        y = np.array([0.75, 3.0])
        assert is_linear(np.diag, x, y, 2.0)

    def test_identity_is_linear(self):
        assert is_linear(lambda u: u, np.array([1.0]), np.array([2.0]), 2.0)

    def test_affine_is_not_linear(self):
        assert not is_linear(lambda u: u + 1.0, np.array([1.0]), np.array([2.0]), 2.0)

    def test_quadratic_is_not_linear(self):
        assert not is_linear(lambda u: u**2, np.array([1.0]), np.array([2.0]), 2.0)

    def test_homogeneity_required(self):
        # Additive over these points but not homogeneous for c = 2
        f = lambda u: np.where(u > 3.0, 0.0, u)
        x = np.array([2.0])
        y = np.array([0.5])
        assert not is_linear(f, x, y, 2.0)

    def test_nan_output_is_not_linear(self):
        f = lambda u: np.array([u[0], np.nan])
        assert not is_linear(f, np.ones(2), 2 * np.ones(2), 2.0)

    def test_nan_compared_strictly_only_on_request(self):
        a = np.array([1.0, np.nan])
        assert outputs_equal(a, a.copy())
        assert not outputs_equal(a, a.copy(), equal_nan=False)

    def test_sample_linearity_linear(self, rng):
        assert sample_linearity(lambda u: np.diag(u), np.ones(3), rng)

    def test_sample_linearity_nonlinear(self, rng):
        assert not sample_linearity(lambda u: np.sin(u), np.ones(3), rng)

    def test_sample_linearity_runs_all_pairs(self, rng):
        calls = []

        def f(u):
            calls.append(1)
            return u**2

        assert not sample_linearity(f, np.ones(2), rng, n_samples=10)
        assert len(calls) == 40

    def test_sample_points_grow_with_index(self):
        points = []

        def f(u):
            points.append(u.copy())
            return u

        sample_linearity(f, np.zeros(1), np.random.default_rng(0), n_samples=3)

        # is_linear evaluates f(x) first, then f(x + y), f(y), f(c x)
        xs = [points[4 * k][0] for k in range(3)]
        for i, x in enumerate(xs, start=1):
            assert 0.0 <= x < i
