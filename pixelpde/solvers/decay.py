from typing import Optional

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition
from pixelpde.solvers.base import Equation


class ExponentialDecay(Equation):
    """
    Exponential decay law du/dt = -lambda * u.

    No spatial coupling: every cell is scaled by the same growth factor,
    so neither a Laplacian nor a boundary policy is involved.

    Forward Euler:  u^{n+1} = (1 - lambda*dt) u^n
    Backward Euler: u^{n+1} = u^n / (1 + lambda*dt)
    """
    kind = EquationKind.EXPONENTIAL_DECAY
    name = 'Exponential decay'
    levels = 2

    def coefficient(self, config: SimulationConfig) -> float:
        if config.is_explicit:
            return 1.0 - config.decay_rate * config.dt
        return 1.0 / (1.0 + config.decay_rate * config.dt)

    def stability_warning(self, config: SimulationConfig, coeff: float) -> Optional[str]:
        if config.decay_rate * config.dt > 2.0:
            return (f"Stability condition not satisfied for exponential decay "
                    f"({config.dt} > 2/lambda). The simulation may be unstable.")
        return None

    def advance(
        self,
        backend,
        grid: FieldGrid,
        coeff: float,
        config: SimulationConfig,
        boundary: BoundaryCondition
    ) -> int:
        backend.scale(grid, coeff)
        return 1
