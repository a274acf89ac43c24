import numpy as np
import pytest
from scipy.optimize import approx_fprime

from resonator_design.optimization.gradient import calculate_gradient


def _sum(x):
    return float(np.sum(x))


@pytest.mark.parametrize('x', [
    [0.0, 0.0, 0.0],
    [1.0, 2.0, 3.0],
    [-1.0, -2.0, -3.0],
    [1.0, -2.0, 3.0],
    [1e-12, 2e-12, 3e-12],
])
def test_sum_gradient_is_ones(x):
    assert calculate_gradient(_sum, x, 1e-6) == pytest.approx([1.0] * len(x), abs=0.01)


@pytest.mark.parametrize('step', [1e-12, 1e-9, 1e-6, 1e-3, 1.0, 1e3, 1e6])
def test_sum_gradient_across_step_sizes(step):
    assert calculate_gradient(_sum, [1.0, 2.0, 3.0], step) == pytest.approx([1.0, 1.0, 1.0], abs=0.01)


def test_large_step_is_exact():
    assert calculate_gradient(_sum, [1.0, 2.0, 3.0], 1e6).tolist() == [1.0, 1.0, 1.0]


def test_gradient_collapses_at_large_magnitudes():
    # x_i +/- 1e-6 rounds back to x_i near 1e12, so both evaluations coincide
    gradient = calculate_gradient(_sum, [1e12, 2e12, 3e12], 1e-6)
    assert gradient.tolist() == [0.0, 0.0, 0.0]


def test_linear():
    gradient = calculate_gradient(lambda x: x[0] + x[1], [2.0, 3.0])
    assert gradient == pytest.approx([1.0, 1.0], abs=0.01)


def test_quadratic():
    gradient = calculate_gradient(lambda x: x[0] ** 2 + x[1] ** 2, [2.0, 3.0])
    assert gradient == pytest.approx([4.0, 6.0], abs=0.1)


def test_matches_scipy_forward_difference():
    def f(x):
        return x[0] ** 3 - 2 * x[0] * x[1] + np.sin(x[1])

    point = np.array([0.7, -1.3])
    reference = approx_fprime(point, f, 1e-8)
    assert calculate_gradient(f, point) == pytest.approx(reference, rel=1e-5)


def test_does_not_modify_input():
    x = np.array([2.0, 3.0])
    calculate_gradient(lambda v: v[0] * v[1], x)
    assert x.tolist() == [2.0, 3.0]


def test_nan_propagates():
    gradient = calculate_gradient(lambda x: np.nan, [1.0, 2.0])
    assert np.all(np.isnan(gradient))


def test_output_length_follows_input():
    assert calculate_gradient(_sum, [1.0]).shape == (1,)
    assert calculate_gradient(_sum, [1.0] * 5).shape == (5,)
