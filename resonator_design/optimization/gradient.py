import numpy as np
from typing import Callable, Sequence

DEFAULT_GRADIENT_STEP = 1e-6

def calculate_gradient(input_function: Callable[[np.ndarray], float], x: Sequence[float],
                       step: float = DEFAULT_GRADIENT_STEP) -> np.ndarray:
    """
    Central-difference gradient of a scalar function.

    Component i is (f(x + step*e_i) - f(x - step*e_i)) / (2*step). NaN and inf
    returned by the function pass straight into the gradient.

    Note that when |x_i| is so large that x_i +/- step rounds back to x_i, the
    two evaluations coincide and the estimate collapses to 0.0. That is the
    floating-point precision boundary of the method, not an error.

    Args:
        input_function: Function of a point, returning a float.
        x: The point at which to calculate the gradient.
        step: Step size for numerical differentiation.

    Returns:
        np.ndarray: The gradient, same length as ``x``.
    """
    x = np.asarray(x, dtype=float)
    gradient = np.zeros(x.size)
    for i in range(x.size):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[i] += step
        x_minus[i] -= step
        with np.errstate(invalid='ignore', over='ignore'):
            gradient[i] = (input_function(x_plus) - input_function(x_minus)) / (2 * step)
    return gradient
