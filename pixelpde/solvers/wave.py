from typing import Optional
import numpy as np

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition
from pixelpde.solvers.base import Equation


class Wave(Equation):
    """
    Wave equation d²u/dt² = c² lap(u).

    The explicit scheme is the central-difference leapfrog
    u^{n+1} = 2u^n - u^{n-1} + coeff * lap(u^n), with coeff = (c*dt/dx)²,
    i.e. the squared Courant number. The implicit variant relaxes
    (I - coeff * L) u^{n+1} = 2u^n - u^{n-1} with a tighter sweep budget
    than the heat equation.

    Reads three time levels, so the grid is cycled after every step.
    """
    kind = EquationKind.WAVE
    name = 'Wave'
    levels = 3

    def coefficient(self, config: SimulationConfig) -> float:
        return (config.c * config.dt / config.cell_spacing) ** 2

    def stability_warning(self, config: SimulationConfig, coeff: float) -> Optional[str]:
        # coeff is already the squared Courant number
        if coeff > 1.0:
            return (f"CFL condition not satisfied for the wave equation ({np.sqrt(coeff)} > 1). "
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
            backend.explicit_update(grid, coeff, leapfrog=True)
            boundary.apply(grid.next)
            return 1

        return backend.relax(
            grid, coeff, boundary, config.wave_max_iterations, config.tolerance, leapfrog=True
        )
