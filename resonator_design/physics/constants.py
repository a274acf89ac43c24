"""
Physical and material constants for the readout resonator model.

The rounded values below are the ones the barrier optimizer is tuned with:
the reduced Planck constant doubles as the gradient-descent learning rate and
the speed of light sets the transmission-line rescaling of the result.
"""

from dataclasses import dataclass

from scipy import constants as sc

SPEED_OF_LIGHT = 3e8  # m/s
REDUCED_PLANCK_CONSTANT = 1.054e-34  # J*s

TANTALUM_CONDUCTIVITY = 1.5e6  # S/m
TANTALUM_LOSS_TANGENT = 0.01


@dataclass(frozen=True)
class PhysicalConstants:
    """Container for the fundamental constants used by the constraint model."""

    speed_of_light: float = SPEED_OF_LIGHT
    reduced_planck_constant: float = REDUCED_PLANCK_CONSTANT

    @classmethod
    def codata(cls) -> 'PhysicalConstants':
        """Exact CODATA values instead of the rounded defaults."""
        return cls(speed_of_light=sc.c, reduced_planck_constant=sc.hbar)


@dataclass(frozen=True)
class MaterialProperties:
    """Bulk properties of the resonator film."""

    name: str
    conductivity: float  # S/m
    loss_tangent: float


TANTALUM = MaterialProperties('Tantalum', TANTALUM_CONDUCTIVITY, TANTALUM_LOSS_TANGENT)

# Default instance shared by configs that do not override it
DEFAULT_CONSTANTS = PhysicalConstants()
