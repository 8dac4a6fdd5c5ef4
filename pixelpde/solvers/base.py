from typing import Optional

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition


class Equation:
    """
    Base class for the supported evolution equations.

    Each equation knows its own coefficient, its explicit stability bound,
    how many time levels it reads and how to advance a grid by one step.
    The numerics are delegated to a backend (NumPy or JAX) so both
    execution paths share the same update rules.

    Attributes
    ----------
    kind : EquationKind
        Tag used to register the equation.
    name : str
        Human-readable label.
    levels : int
        2 for one-step schemes (current, next), 3 for leapfrog (previous,
        current, next). Selects the buffer rotation.
    """
    kind: Optional[EquationKind] = None
    name: str = ''
    levels: int = 2

    def coefficient(self, config: SimulationConfig) -> float:
        """Derive the update coefficient from constants and step sizes."""
        raise NotImplementedError("Child equation must implement coefficient")

    def stability_warning(self, config: SimulationConfig, coeff: float) -> Optional[str]:
        """
        Describe a violated explicit stability bound.

        Returns
        -------
        str or None
            Message for the diagnostic, or None when the bound holds.
        """
        raise NotImplementedError("Child equation must implement stability_warning")

    def advance(
        self,
        backend,
        grid: FieldGrid,
        coeff: float,
        config: SimulationConfig,
        boundary: BoundaryCondition
    ) -> int:
        """
        Fill ``grid.next`` for one time step, before rotation.

        Returns
        -------
        int
            Number of sweeps performed (1 for explicit updates).
        """
        raise NotImplementedError("Each equation must implement its own time-stepping logic.")

    def step(
        self,
        backend,
        grid: FieldGrid,
        coeff: float,
        config: SimulationConfig,
        boundary: BoundaryCondition
    ) -> int:
        """Advance the grid by one step and rotate its buffers."""
        sweeps = self.advance(backend, grid, coeff, config, boundary)
        grid.rotate(self.levels)
        return sweeps

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
