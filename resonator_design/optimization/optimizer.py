import math
import time
import numpy as np
from typing import Callable, Optional, Sequence, Tuple
from ..config.resonator_config import ResonatorConfig
from ..config.optimization_config import OptimizationConfig
from ..physics.constraints import CONSTRAINT_NAMES, evaluate_constraints
from .barrier import PerturbedBarrier
from .gradient import calculate_gradient, DEFAULT_GRADIENT_STEP
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_INITIAL_GUESS = (1e-6, 1.25e-6)  # [length, width] in meters

BarrierFamily = Callable[[np.ndarray, float], float]
IterationCallback = Callable[[int, float, np.ndarray, np.ndarray], None]


class ConvergenceError(RuntimeError):
    """
    Raised when barrier annealing exhausts its budget without a feasible design.

    ``barrier_strength`` is the strength of the last anneal step that was run.
    """

    def __init__(self, iterations: int, barrier_strength: float, constraints: Optional[np.ndarray] = None):
        self.iterations = iterations
        self.barrier_strength = barrier_strength
        self.constraints = constraints
        super().__init__(f"Optimization did not converge after {iterations} iterations "
                         f"(barrier strength t={barrier_strength:.3e})")


def _check_initial_guess(x0: Sequence[float]) -> np.ndarray:
    x0 = np.asarray(x0, dtype=float)
    if x0.shape != (2,):
        raise ValueError(f"Initial guess must be [length, width], got shape {x0.shape}")
    return x0


def minimize_perturbed_barrier_function(perturbed_barrier_func: BarrierFamily, x0: Sequence[float], t: float,
                                        config: ResonatorConfig, inner_iterations: int = 1000,
                                        gradient_step: float = DEFAULT_GRADIENT_STEP) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fixed-step gradient descent on the perturbed barrier at strength ``t``.

    Runs exactly ``inner_iterations`` steps from a copy of ``x0`` with the
    reduced Planck constant as learning rate. The descent works in the
    transmission-line frame, so the result is divided by the speed of light
    to get back to meters before the constraints are evaluated.

    Args:
        perturbed_barrier_func: Barrier family ``f(dims, t)``.
        x0: Initial guess for the resonator dimensions.
        t: Barrier strength.
        config (ResonatorConfig): Design whose constants and constraints apply.
        inner_iterations: Number of descent steps.
        gradient_step: Central-difference step.

    Returns:
        Tuple of the rescaled dimensions and their constraint values.
    """
    if inner_iterations < 0:
        raise ValueError(f"inner_iterations must be non-negative, got {inner_iterations}")

    x = _check_initial_guess(x0).copy()
    learning_rate = config.constants.reduced_planck_constant

    def barrier_at_t(dims: np.ndarray) -> float:
        return perturbed_barrier_func(dims, t)

    for _ in range(inner_iterations):
        gradient = calculate_gradient(barrier_at_t, x, gradient_step)
        x -= learning_rate * gradient

    x = x / config.constants.speed_of_light

    constraints = evaluate_constraints(x, config)
    return x, constraints


def perform_perturbation_analysis(perturbed_barrier_func: BarrierFamily, x0: Sequence[float],
                                  config: ResonatorConfig, max_iterations: int = 10000,
                                  epsilon: float = 1e-20, t_initial: float = 1.0,
                                  anneal_factor: float = math.e, inner_iterations: int = 1000,
                                  gradient_step: float = DEFAULT_GRADIENT_STEP, progress_interval: int = 100,
                                  callback: Optional[IterationCallback] = None) -> np.ndarray:
    """
    Barrier annealing: minimize, check feasibility, shrink ``t``, repeat.

    Each outer iteration restarts the inner minimizer from ``x0`` at the
    current barrier strength. The first result whose constraints are all
    ``>= epsilon`` is returned; otherwise ``t`` is divided by
    ``anneal_factor``. There is no other stopping rule.

    Args:
        perturbed_barrier_func: Barrier family ``f(dims, t)``.
        x0: Initial guess for the resonator dimensions.
        config (ResonatorConfig): Design whose constraints must be satisfied.
        max_iterations: Number of anneal steps before giving up.
        epsilon: Feasibility threshold for every constraint value.
        t_initial: Initial barrier strength.
        anneal_factor: Divisor applied to ``t`` after a failed step.
        inner_iterations: Descent steps per anneal step.
        gradient_step: Central-difference step.
        progress_interval: Log a progress line every N anneal steps.
        callback: Called as ``callback(iteration, t, dims, constraints)`` after every step.

    Returns:
        np.ndarray: Dimensions satisfying all constraints.

    Raises:
        ConvergenceError: If no anneal step produced a feasible design.
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    if not t_initial > 0:
        raise ValueError(f"t_initial must be positive, got {t_initial}")
    if not anneal_factor >= 1:
        raise ValueError(f"anneal_factor must be >= 1 so t never grows, got {anneal_factor}")
    x0 = _check_initial_guess(x0)

    t = t_initial
    t_tried = t
    constraints = None
    for iteration in range(1, max_iterations + 1):
        dims, constraints = minimize_perturbed_barrier_function(
            perturbed_barrier_func, x0, t, config,
            inner_iterations=inner_iterations, gradient_step=gradient_step
        )

        if callback is not None:
            callback(iteration, t, dims, constraints)

        if np.all(constraints >= epsilon):
            logger.info(f"Converged at iteration {iteration} (t={t:.3e}): "
                        f"length={dims[0]:.6e} m, width={dims[1]:.6e} m")
            return dims

        logger.debug(f"Iteration {iteration}: t={t:.3e}, dims={dims}, constraints={constraints}")
        if progress_interval and iteration % progress_interval == 0:
            violated = [name for name, value in zip(CONSTRAINT_NAMES, constraints) if not value >= epsilon]
            logger.info(f"Anneal step {iteration}/{max_iterations}: t={t:.3e}, violated={violated}")

        t_tried = t
        t /= anneal_factor

    logger.error(f"Optimization did not converge after {max_iterations} iterations")
    raise ConvergenceError(max_iterations, t_tried, constraints)


class ResonatorOptimizer:
    """
    Barrier-annealing optimizer for the dimensions of a readout resonator.
    """

    def __init__(self, resonator_config: ResonatorConfig, opt_config: Optional[OptimizationConfig] = None):
        """
        Args:
            resonator_config: The resonator design to optimize.
            opt_config: Settings for the annealing algorithm.
        """
        self.resonator_config = resonator_config
        self.opt_config = opt_config or OptimizationConfig()
        self.barrier = PerturbedBarrier(resonator_config, self.opt_config.perturbation_epsilon)

    def optimize(self, x0: Optional[Sequence[float]] = None) -> dict:
        """
        Run the barrier annealing.

        Args:
            x0: Initial ``[length, width]`` guess, ``DEFAULT_INITIAL_GUESS`` when omitted.

        Returns:
            A dictionary containing the results of the optimization.
        """
        if x0 is None:
            x0 = DEFAULT_INITIAL_GUESS
        cfg = self.opt_config

        logger.info(f"Optimizing design '{self.resonator_config.design_id}' from x0={list(x0)}")
        logger.info(f"  Budget: {cfg.max_iterations} anneal steps x {cfg.inner_iterations} descent steps, "
                    f"t0={cfg.t_initial}")

        progress = {'iterations': 0, 't': cfg.t_initial, 'constraints': None}

        def iteration_callback(iteration, t, dims, constraints):
            progress['iterations'] = iteration
            progress['t'] = t
            progress['constraints'] = constraints

        start_time = time.time()
        try:
            dims = perform_perturbation_analysis(
                self.barrier, x0, self.resonator_config,
                max_iterations=cfg.max_iterations,
                epsilon=cfg.feasibility_epsilon,
                t_initial=cfg.t_initial,
                anneal_factor=cfg.anneal_factor,
                inner_iterations=cfg.inner_iterations,
                gradient_step=cfg.gradient_step,
                progress_interval=cfg.progress_interval,
                callback=iteration_callback
            )
            success = True
            final_params = {'length': float(dims[0]), 'width': float(dims[1])}
            message = 'Optimization converged'
        except ConvergenceError as e:
            success = False
            final_params = None
            message = str(e)
        optimization_time = time.time() - start_time

        constraints = progress['constraints']
        return {
            'success': success,
            'final_params': final_params,
            'constraints': (dict(zip(CONSTRAINT_NAMES, (float(v) for v in constraints)))
                            if constraints is not None else {}),
            'outer_iterations': progress['iterations'],
            'barrier_strength': progress['t'],
            'time': optimization_time,
            'message': message,
            'statistics': self.barrier.get_statistics()
        }
