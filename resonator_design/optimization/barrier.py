import numpy as np
from typing import Sequence
from ..config.resonator_config import ResonatorConfig
from ..physics.constants import PhysicalConstants, MaterialProperties, DEFAULT_CONSTANTS, TANTALUM
from ..physics.constraints import constraint_vector, evaluate_constraints, objective
from ..utils.vector_ops import magnitude
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PERTURBATION_EPSILON = 1e-6


def log_penalty(constraints: Sequence[float]) -> float:
    """
    Combined logarithmic penalty of the seven constraint values.

    The grouping is ln(w) * ln(d0 * ln(d1) + ln(c) * ln(a) * ln(m0) * ln(m1)),
    with w the wavelength term, d0/d1 the dimension limits, c coherence,
    a anharmonicity and m0/m1 the material terms. Non-positive inputs give
    NaN or -inf; the barrier diverges instead of raising.
    """
    w, d0, d1, coh, anh, m0, m1 = constraints
    with np.errstate(divide='ignore', invalid='ignore'):
        inner = d0 * np.log(d1) + np.log(coh) * np.log(anh) * np.log(m0) * np.log(m1)
        return float(np.log(w) * np.log(inner))


def _compose(obj: float, constraints: np.ndarray, t: float, epsilon: float = 0.0) -> float:
    with np.errstate(invalid='ignore', over='ignore'):
        value = obj - t * log_penalty(constraints)
        if epsilon:
            value = value + epsilon * magnitude(constraints)
    return float(value)


def barrier_function(dims: Sequence[float], snr_target: float, frequency_target: float,
                     length_limit: float, width_limit: float, coherence_time_min: float,
                     anharmonicity_min: float, conductivity_min: float, loss_tangent_max: float,
                     t: float, constants: PhysicalConstants = DEFAULT_CONSTANTS,
                     material: MaterialProperties = TANTALUM) -> float:
    """
    Log-barrier value of a resonator design.

    Args:
        dims: ``[length, width]`` in meters.
        snr_target: Target signal-to-noise ratio.
        frequency_target: Target frequency of operation (Hz).
        length_limit: Length limit (m).
        width_limit: Width limit (m).
        coherence_time_min: Minimum coherence time (s).
        anharmonicity_min: Minimum anharmonicity.
        conductivity_min: Minimum effective conductivity (S/m).
        loss_tangent_max: Maximum effective loss tangent.
        t: Barrier strength; larger values weigh the constraints against the objective more.
        constants: Physical constants used by the constraint model.
        material: Film material.

    Returns:
        float: objective - t * log_penalty(constraints).
    """
    constraints = constraint_vector(dims, frequency_target, length_limit, width_limit, coherence_time_min,
                                    anharmonicity_min, conductivity_min, loss_tangent_max,
                                    constants.speed_of_light, constants.reduced_planck_constant,
                                    material.conductivity, material.loss_tangent)
    return _compose(objective(dims, snr_target), constraints, t)


def perturbed_barrier_function(dims: Sequence[float], snr_target: float, frequency_target: float,
                               length_limit: float, width_limit: float, coherence_time_min: float,
                               anharmonicity_min: float, conductivity_min: float, loss_tangent_max: float,
                               t: float, epsilon: float = DEFAULT_PERTURBATION_EPSILON,
                               constants: PhysicalConstants = DEFAULT_CONSTANTS,
                               material: MaterialProperties = TANTALUM) -> float:
    """Barrier value plus ``epsilon`` times the norm of all constraint values."""
    constraints = constraint_vector(dims, frequency_target, length_limit, width_limit, coherence_time_min,
                                    anharmonicity_min, conductivity_min, loss_tangent_max,
                                    constants.speed_of_light, constants.reduced_planck_constant,
                                    material.conductivity, material.loss_tangent)
    return _compose(objective(dims, snr_target), constraints, t, epsilon)


class PerturbedBarrier:
    """
    Perturbed barrier function bound to one resonator design.

    Calling the instance with ``(dims, t)`` evaluates the perturbed barrier at
    barrier strength ``t``. The design is carried explicitly, so several
    instances for different designs can be used side by side.
    """

    def __init__(self, config: ResonatorConfig, epsilon: float = DEFAULT_PERTURBATION_EPSILON):
        """
        Args:
            config (ResonatorConfig): The resonator design to evaluate.
            epsilon (float): Weight of the constraint-norm perturbation.
        """
        self.config = config
        self.epsilon = epsilon

        self.evaluation_count = 0
        self.nonfinite_evaluations = 0

    def evaluate(self, dims: Sequence[float], t: float = 1.0) -> float:
        self.evaluation_count += 1
        value = _compose(objective(dims, self.config.snr_target),
                         evaluate_constraints(dims, self.config), t, self.epsilon)

        if not np.isfinite(value):
            self.nonfinite_evaluations += 1
            if self.nonfinite_evaluations == 1:
                logger.warning(f"Barrier for design '{self.config.design_id}' is not finite "
                               f"at dims={list(np.asarray(dims, dtype=float))}, t={t:.3e}")
        return value

    def get_statistics(self) -> dict:
        """Evaluation counters for result reporting."""
        return {
            'total_evaluations': self.evaluation_count,
            'nonfinite_evaluations': self.nonfinite_evaluations,
            'finite_rate': (self.evaluation_count - self.nonfinite_evaluations) / max(1, self.evaluation_count),
        }

    def __call__(self, dims: Sequence[float], t: float = 1.0) -> float:
        return self.evaluate(dims, t)
