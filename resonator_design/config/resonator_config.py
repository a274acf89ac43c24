import math
from dataclasses import dataclass, field, fields
import pandas as pd
from ..physics.constants import PhysicalConstants, MaterialProperties, DEFAULT_CONSTANTS, TANTALUM

@dataclass(frozen=True)
class ResonatorConfig:
    """Configuration for a single readout resonator design."""

    design_id: str = 'default'
    length_limit: float = 3.0            # m
    width_limit: float = 1.0             # m
    frequency_target: float = 5e9        # Hz
    coherence_time_min: float = 1e-6     # s
    anharmonicity_min: float = 1e7       # rad/s per hbar
    conductivity_min: float = 1e6        # S/m (effective)
    loss_tangent_max: float = 0.02       # effective
    snr_target: float = 10000.0

    constants: PhysicalConstants = field(default=DEFAULT_CONSTANTS)
    material: MaterialProperties = field(default=TANTALUM)

    def __post_init__(self):
        """Reject non-finite targets and values the constraint model cannot divide by."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value}")
        if not self.frequency_target > 0:
            raise ValueError(f"frequency_target must be positive, got {self.frequency_target}")
        if not self.constants.speed_of_light > 0:
            raise ValueError(f"speed_of_light must be positive, got {self.constants.speed_of_light}")
        if not self.constants.reduced_planck_constant > 0:
            raise ValueError("reduced_planck_constant must be positive "
                             f"(it is the descent learning rate), got {self.constants.reduced_planck_constant}")

    @property
    def wavelength(self) -> float:
        """Free-space wavelength at the target frequency (m)."""
        return self.constants.speed_of_light / self.frequency_target

    @classmethod
    def from_csv_row(cls, row: pd.Series, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> 'ResonatorConfig':
        """Create configuration from a design catalog row."""
        try:
            material = TANTALUM
            if 'Material' in row.index and pd.notna(row['Material']):
                material = MaterialProperties(
                    name=str(row['Material']),
                    conductivity=float(row['Conductivity']),
                    loss_tangent=float(row['Loss Tangent'])
                )
            return cls(
                design_id=str(row['Design']),
                length_limit=float(row['Length Limit']),
                width_limit=float(row['Width Limit']),
                frequency_target=float(row['Frequency']),
                coherence_time_min=float(row['Coherence Min']),
                anharmonicity_min=float(row['Anharmonicity Min']),
                conductivity_min=float(row['Conductivity Min']),
                loss_tangent_max=float(row['Loss Tangent Max']),
                snr_target=float(row['SNR Target']),
                constants=constants,
                material=material
            )
        except KeyError as e:
            raise KeyError(f"Missing expected column in CSV row: {e}")
        except (ValueError, TypeError) as e:
            raise ValueError(f"Type conversion error for design {row.get('Design', 'Unknown')}: {e}")
