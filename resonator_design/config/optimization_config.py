import math
from dataclasses import dataclass

@dataclass(frozen=True)
class OptimizationConfig:
    """Configuration for the barrier annealing algorithm."""

    # Iteration budgets (hard caps, no early exit)
    inner_iterations: int = 1000          # Gradient-descent steps per barrier strength
    max_iterations: int = 10000           # Outer anneal steps

    # Barrier schedule
    t_initial: float = 1.0                # Initial barrier strength
    anneal_factor: float = math.e         # t <- t / anneal_factor after each failed step
    feasibility_epsilon: float = 1e-20    # Every constraint must reach this value

    # Numerical settings
    perturbation_epsilon: float = 1e-6    # Weight of the constraint-norm perturbation
    gradient_step: float = 1e-6           # Central-difference step

    # Reporting
    progress_interval: int = 100          # Log progress every N outer iterations
