import dataclasses
import math

import pandas as pd
import pytest

from resonator_design.config.optimization_config import OptimizationConfig
from resonator_design.config.resonator_config import ResonatorConfig
from resonator_design.physics.constants import (
    DEFAULT_CONSTANTS,
    REDUCED_PLANCK_CONSTANT,
    SPEED_OF_LIGHT,
    TANTALUM,
    PhysicalConstants,
)


def test_resonator_defaults():
    config = ResonatorConfig()
    assert config.length_limit == 3.0
    assert config.width_limit == 1.0
    assert config.frequency_target == 5e9
    assert config.coherence_time_min == 1e-6
    assert config.anharmonicity_min == 1e7
    assert config.conductivity_min == 1e6
    assert config.loss_tangent_max == 0.02
    assert config.snr_target == 10000.0
    assert config.constants == DEFAULT_CONSTANTS
    assert config.material == TANTALUM
    assert config.wavelength == pytest.approx(0.06)


def test_default_constants():
    assert SPEED_OF_LIGHT == 3e8
    assert REDUCED_PLANCK_CONSTANT == 1.054e-34
    assert TANTALUM.conductivity == 1.5e6
    assert TANTALUM.loss_tangent == 0.01


def test_codata_constants():
    codata = PhysicalConstants.codata()
    assert codata.speed_of_light == 299792458.0
    assert codata.reduced_planck_constant == pytest.approx(1.054571817e-34)


def test_config_is_immutable():
    config = ResonatorConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.length_limit = 10.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        OptimizationConfig().max_iterations = 1


@pytest.mark.parametrize('kwargs', [
    {'frequency_target': 0.0},
    {'frequency_target': -5e9},
    {'constants': PhysicalConstants(speed_of_light=0.0)},
    {'constants': PhysicalConstants(reduced_planck_constant=0.0)},
])
def test_invalid_resonator_config(kwargs):
    with pytest.raises(ValueError):
        ResonatorConfig(**kwargs)


def test_zero_snr_target_is_allowed():
    assert ResonatorConfig(snr_target=0.0).snr_target == 0.0


def test_optimization_defaults():
    opt = OptimizationConfig()
    assert opt.inner_iterations == 1000
    assert opt.max_iterations == 10000
    assert opt.t_initial == 1.0
    assert opt.anneal_factor == math.e
    assert opt.feasibility_epsilon == 1e-20
    assert opt.perturbation_epsilon == 1e-6
    assert opt.gradient_step == 1e-6


def _row(**overrides):
    data = {
        'Design': 'R1', 'Length Limit': 3.0, 'Width Limit': 1.0, 'Frequency': 5e9,
        'Coherence Min': 1e-6, 'Anharmonicity Min': 1e7, 'Conductivity Min': 1e6,
        'Loss Tangent Max': 0.02, 'SNR Target': 1e4,
    }
    data.update(overrides)
    return pd.Series(data)


def test_from_csv_row():
    config = ResonatorConfig.from_csv_row(_row(Frequency=6e9))
    assert config.design_id == 'R1'
    assert config.frequency_target == 6e9
    assert config.material == TANTALUM


def test_from_csv_row_material_override():
    config = ResonatorConfig.from_csv_row(_row(Material='Niobium', Conductivity=6.6e6, **{'Loss Tangent': 1e-3}))
    assert config.material.name == 'Niobium'
    assert config.material.conductivity == 6.6e6
    assert config.material.loss_tangent == 1e-3


def test_from_csv_row_missing_column():
    with pytest.raises(KeyError):
        ResonatorConfig.from_csv_row(_row().drop('SNR Target'))


def test_from_csv_row_bad_value():
    with pytest.raises(ValueError):
        ResonatorConfig.from_csv_row(_row(Frequency='fast'))


@pytest.mark.parametrize('name', ['width_limit', 'length_limit', 'anharmonicity_min', 'snr_target'])
def test_non_finite_target_rejected(name):
    with pytest.raises(ValueError, match=name):
        ResonatorConfig(**{name: math.nan})
    with pytest.raises(ValueError, match=name):
        ResonatorConfig(**{name: math.inf})


def test_from_csv_row_blank_cell():
    with pytest.raises(ValueError, match='width_limit'):
        ResonatorConfig.from_csv_row(_row(**{'Width Limit': float('nan')}))
