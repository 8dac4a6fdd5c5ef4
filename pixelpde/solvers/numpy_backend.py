import numpy as np

from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition

INTERIOR = (slice(1, -1), slice(1, -1))


def laplacian(u: np.ndarray) -> np.ndarray:
    """
    Unscaled 5-point Laplacian on the interior cells.

    Neighbours are summed left, right, up, down before subtracting 4u.

    Returns
    -------
    np.ndarray
        Array of shape (H-2, W-2).
    """
    return u[1:-1, :-2] + u[1:-1, 2:] + u[:-2, 1:-1] + u[2:, 1:-1] - 4 * u[1:-1, 1:-1]


def neighbor_sum(u: np.ndarray) -> np.ndarray:
    """Sum of the four neighbours of each interior cell."""
    return u[1:-1, :-2] + u[1:-1, 2:] + u[:-2, 1:-1] + u[2:, 1:-1]


class StencilBackend:
    """
    Interface shared by the CPU and accelerator stencil implementations.

    Every method reads ``grid.current`` (and ``grid.previous`` for leapfrog
    updates) and writes ``grid.next``. Rotation is left to the caller.
    """
    name = ''

    def explicit_update(self, grid: FieldGrid, coeff: float, leapfrog: bool = False) -> None:
        """
        Explicit interior update, clamped to [0, 1].

        next = base + coeff * lap(current), where base is ``current`` for
        one-step schemes and ``2*current - previous`` for leapfrog.
        Edge cells of ``next`` are left for the boundary policy.
        """
        raise NotImplementedError

    def relax(
        self,
        grid: FieldGrid,
        coeff: float,
        boundary: BoundaryCondition,
        max_iterations: int,
        tolerance: float,
        leapfrog: bool = False
    ) -> int:
        """
        Bounded Jacobi relaxation of (I - coeff*L) next = rhs.

        Starts from ``current``. Each sweep recomputes every interior cell
        from the previous sweep, clamps it, then reapplies the boundary
        policy. Stops once the largest unclamped change of a sweep drops
        below ``tolerance`` or the budget is spent; an unconverged result
        is kept as is.

        Returns
        -------
        int
            Number of sweeps performed.
        """
        raise NotImplementedError

    def scale(self, grid: FieldGrid, factor: float) -> None:
        """next = clamp(current * factor) on the whole grid."""
        raise NotImplementedError


class NumpyBackend(StencilBackend):
    """Vectorized NumPy stencils operating directly on the grid buffers."""
    name = 'cpu'

    def explicit_update(self, grid: FieldGrid, coeff: float, leapfrog: bool = False) -> None:
        current = grid.current
        out = grid.next[INTERIOR]

        if leapfrog:
            out[...] = 2 * current[INTERIOR] - grid.previous[INTERIOR] + coeff * laplacian(current)
        else:
            out[...] = current[INTERIOR] + coeff * laplacian(current)
        np.clip(out, 0.0, 1.0, out=out)

    def relax(
        self,
        grid: FieldGrid,
        coeff: float,
        boundary: BoundaryCondition,
        max_iterations: int,
        tolerance: float,
        leapfrog: bool = False
    ) -> int:
        current = grid.current
        if leapfrog:
            rhs = 2 * current[INTERIOR] - grid.previous[INTERIOR]
        else:
            rhs = current[INTERIOR].copy()

        guess = grid.next
        last = grid.scratch
        np.copyto(guess, current)
        denominator = 1.0 + 4.0 * coeff

        sweeps = 0
        for sweeps in range(1, max_iterations + 1):
            np.copyto(last, guess)

            updated = (rhs + coeff * neighbor_sum(last)) / denominator
            max_change = np.max(np.abs(updated - last[INTERIOR]))

            guess[INTERIOR] = np.clip(updated, 0.0, 1.0)
            boundary.apply(guess)

            if max_change < tolerance:
                break

        return sweeps

    def scale(self, grid: FieldGrid, factor: float) -> None:
        np.multiply(grid.current, factor, out=grid.next)
        np.clip(grid.next, 0.0, 1.0, out=grid.next)
