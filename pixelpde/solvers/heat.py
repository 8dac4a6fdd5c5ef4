from typing import Optional

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition
from pixelpde.solvers.base import Equation


class Heat(Equation):
    """
    Heat (diffusion) equation du/dt = c * lap(u).

    Forward Euler uses the FTCS update
    u^{n+1} = u^n + coeff * lap(u^n), stable for coeff <= 1/2.
    Backward Euler solves (I - coeff * L) u^{n+1} = u^n with a bounded
    Jacobi relaxation.

    The coefficient is coeff = c * dt / dx².
    """
    kind = EquationKind.HEAT
    name = 'Heat'
    levels = 2

    def coefficient(self, config: SimulationConfig) -> float:
        return config.c * config.dt / (config.cell_spacing * config.cell_spacing)

    def stability_warning(self, config: SimulationConfig, coeff: float) -> Optional[str]:
        if coeff > 0.5:
            return (f"Stability condition not satisfied for the heat equation ({coeff} > 0.5). "
                    "The simulation may be unstable. Consider the backward-euler scheme.")
        return None

    def advance(
        self,
        backend,
        grid: FieldGrid,
        coeff: float,
        config: SimulationConfig,
        boundary: BoundaryCondition
    ) -> int:
        if config.is_explicit:
            backend.explicit_update(grid, coeff)
            boundary.apply(grid.next)
            return 1

        return backend.relax(grid, coeff, boundary, config.heat_max_iterations, config.tolerance)
