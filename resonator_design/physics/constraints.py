"""
Objective and constraint model for a rectangular qubit readout resonator.

Every function is a pure function of the dimension vector ``[length, width]``
(meters) and scalar design parameters. Arithmetic follows IEEE semantics:
division by zero gives inf and invalid operations give NaN instead of raising,
so degenerate geometries flow through the barrier rather than aborting it.
"""

import numpy as np
from typing import Sequence, Tuple
from .constants import (
    SPEED_OF_LIGHT,
    REDUCED_PLANCK_CONSTANT,
    TANTALUM_CONDUCTIVITY,
    TANTALUM_LOSS_TANGENT,
)

CONSTRAINT_NAMES = (
    'wavelength',
    'length_limit',
    'width_limit',
    'coherence_time',
    'anharmonicity',
    'conductivity',
    'loss_tangent',
)

CONSTRAINT_COUNT = len(CONSTRAINT_NAMES)


def _as_dims(dims: Sequence[float]) -> np.ndarray:
    return np.asarray(dims, dtype=float)


def objective(dims: Sequence[float], snr_target: float) -> float:
    """
    Noise-flux objective to minimize: resonator area per unit of target SNR.

    An SNR target of zero yields +inf (or NaN for a zero-area resonator).
    """
    d = _as_dims(dims)
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.divide(d[0] * d[1], snr_target))


def wavelength_constraint(dims: Sequence[float], frequency_target: float,
                          speed_of_light: float = SPEED_OF_LIGHT) -> float:
    """Deviation of the smaller dimension from the target wavelength, always >= 0."""
    d = _as_dims(dims)
    with np.errstate(divide='ignore', invalid='ignore'):
        wavelength = np.divide(speed_of_light, frequency_target)
        return float(np.abs(np.minimum(d[0], d[1]) - wavelength))


def dimension_limit_constraint(dims: Sequence[float], length_limit: float,
                               width_limit: float) -> Tuple[float, float]:
    """
    Distance of length and width to their limits.

    The distance is symmetric: undershooting a limit is penalized exactly like
    exceeding it.
    """
    d = _as_dims(dims)
    return float(np.abs(d[0] - length_limit)), float(np.abs(d[1] - width_limit))


def _linewidth(d: np.ndarray, frequency_target: float, speed_of_light: float) -> np.float64:
    wavelength_offset = wavelength_constraint(d, frequency_target, speed_of_light)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(wavelength_offset, np.pi * np.maximum(d[0], d[1]))


def coherence_time_constraint(dims: Sequence[float], frequency_target: float, coherence_time_min: float,
                              speed_of_light: float = SPEED_OF_LIGHT) -> float:
    """Implied coherence time 1/(pi*linewidth) minus the required minimum."""
    d = _as_dims(dims)
    linewidth = _linewidth(d, frequency_target, speed_of_light)
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.divide(1.0, np.pi * linewidth) - coherence_time_min)


def anharmonicity_constraint(dims: Sequence[float], frequency_target: float, anharmonicity_min: float,
                             speed_of_light: float = SPEED_OF_LIGHT,
                             reduced_planck_constant: float = REDUCED_PLANCK_CONSTANT) -> float:
    """Spacing between the 0-1 and 1-2 transitions, scaled by hbar, minus the required minimum."""
    d = _as_dims(dims)
    linewidth = _linewidth(d, frequency_target, speed_of_light)
    omega01 = 2 * np.pi * frequency_target
    omega12 = 2 * np.pi * (frequency_target + linewidth)
    with np.errstate(invalid='ignore'):
        return float((omega12 - omega01) / reduced_planck_constant - anharmonicity_min)


def material_property_constraint(dims: Sequence[float], conductivity_min: float, loss_tangent_max: float,
                                 conductivity: float = TANTALUM_CONDUCTIVITY,
                                 loss_tangent: float = TANTALUM_LOSS_TANGENT) -> Tuple[float, float]:
    """Distances of the area-scaled conductivity and loss tangent from their bounds."""
    d = _as_dims(dims)
    area = d[0] * d[1]
    effective_conductivity = conductivity * area
    effective_loss_tangent = loss_tangent * area
    return (float(np.abs(effective_conductivity - conductivity_min)),
            float(np.abs(loss_tangent_max - effective_loss_tangent)))


def constraint_vector(dims: Sequence[float], frequency_target: float, length_limit: float, width_limit: float,
                      coherence_time_min: float, anharmonicity_min: float, conductivity_min: float,
                      loss_tangent_max: float, speed_of_light: float = SPEED_OF_LIGHT,
                      reduced_planck_constant: float = REDUCED_PLANCK_CONSTANT,
                      conductivity: float = TANTALUM_CONDUCTIVITY,
                      loss_tangent: float = TANTALUM_LOSS_TANGENT) -> np.ndarray:
    """Concatenate every constraint value, ordered as ``CONSTRAINT_NAMES``."""
    return np.array([
        wavelength_constraint(dims, frequency_target, speed_of_light),
        *dimension_limit_constraint(dims, length_limit, width_limit),
        coherence_time_constraint(dims, frequency_target, coherence_time_min, speed_of_light),
        anharmonicity_constraint(dims, frequency_target, anharmonicity_min, speed_of_light, reduced_planck_constant),
        *material_property_constraint(dims, conductivity_min, loss_tangent_max, conductivity, loss_tangent),
    ])


def evaluate_constraints(dims: Sequence[float], config) -> np.ndarray:
    """
    Evaluate every constraint for a resonator design.

    Args:
        dims: ``[length, width]`` in meters.
        config (ResonatorConfig): Design targets, constants and material.

    Returns:
        np.ndarray: The concatenated constraint values, ordered as ``CONSTRAINT_NAMES``.
    """
    return constraint_vector(
        dims, config.frequency_target, config.length_limit, config.width_limit,
        config.coherence_time_min, config.anharmonicity_min, config.conductivity_min,
        config.loss_tangent_max, config.constants.speed_of_light,
        config.constants.reduced_planck_constant, config.material.conductivity,
        config.material.loss_tangent
    )
