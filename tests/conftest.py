import pytest
from resonator_design.config.resonator_config import ResonatorConfig
from resonator_design.physics.constants import PhysicalConstants, TANTALUM

# Unit speed of light removes the transmission-line rescaling, so a design
# that starts feasible stays feasible: every constraint is comfortably
# positive at BENCH_GUESS and the hbar learning rate barely moves it.
BENCH_GUESS = (2.0, 3.0)


@pytest.fixture
def bench_constants():
    return PhysicalConstants(speed_of_light=1.0, reduced_planck_constant=1.054e-34)


@pytest.fixture
def bench_config(bench_constants):
    return ResonatorConfig(
        design_id='bench',
        length_limit=5.0,
        width_limit=1.0,
        frequency_target=2.0,
        coherence_time_min=0.5,
        anharmonicity_min=1e7,
        conductivity_min=1e6,
        loss_tangent_max=10.0,
        snr_target=10000.0,
        constants=bench_constants,
        material=TANTALUM,
    )


@pytest.fixture
def bench_guess():
    return BENCH_GUESS
