import dataclasses
from typing import Optional
import numpy as np

from pixelpde.core.config import (
    BoundaryKind,
    EquationKind,
    SchemeKind,
    SimulationConfig,
    coerce_kind,
)
from pixelpde.core.codec import normalize, denormalize
from pixelpde.core.grid import FieldGrid
from pixelpde.components.boundaries import BoundaryCondition, make_boundary
from pixelpde.solvers import check_stability, compute_coefficient, get_backend, get_equation


class PDESolver:
    """
    Finite difference solver that evolves a grayscale image as a scalar field.

    The image luminance is normalized to [0, 1] and advanced under the heat,
    wave or exponential decay equation. Every step returns the new state
    quantized back to an opaque grayscale RGBA image.

    Parameters
    ----------
    image : np.ndarray
        Seed image, (H, W) samples or (H, W, C) with R=G=B. Kept for reset.
    cell_spacing : float, default=1.0
        Grid spacing, equal in x and y.
    dt : float, default=0.1
        Time step.
    equation : str, default='heat'
        'heat', 'wave' or 'exponential-decay'.
    boundary : str, default='periodic'
        'dirichlet', 'zero', 'neumann', 'fixed', 'reflective', 'periodic'
        or 'robin'.
    scheme : str, default='forward-euler'
        'forward-euler' (explicit) or 'backward-euler' (implicit).
    use_gpu : bool, default=False
        Run the stencils through the JAX backend.
    config : SimulationConfig, optional
        Complete configuration. Overrides the keyword arguments above.
        Copied, so solvers built from one config evolve independently.

    Attributes
    ----------
    config : SimulationConfig
        Live configuration, owned by this solver.
    grid : FieldGrid
        Previous, current and next buffers.
    original_state : np.ndarray
        Edge source of the fixed boundary policy. Captured at construction
        and whenever the fixed policy is selected; ``reset`` keeps it.
    t : float
        Simulation time.
    step_count : int
        Steps taken since construction or the last reset.
    last_iterations : int
        Relaxation sweeps used by the last step (1 for explicit steps).
    """

    def __init__(
        self,
        image: np.ndarray,
        cell_spacing: float = 1.0,
        dt: float = 0.1,
        equation: str = 'heat',
        boundary: str = 'periodic',
        scheme: str = 'forward-euler',
        use_gpu: bool = False,
        config: Optional[SimulationConfig] = None
    ) -> None:
        if config is None:
            config = SimulationConfig(
                cell_spacing=cell_spacing,
                dt=dt,
                equation=equation,
                boundary=boundary,
                scheme=scheme,
                use_gpu=use_gpu,
            )
        self.config = dataclasses.replace(config)

        self.image = np.array(image, copy=True)
        self.grid = FieldGrid(normalize(self.image))
        self.original_state = self.grid.snapshot()

        self.t = 0.0
        self.step_count = 0
        self.last_iterations = 0

        self.backend = get_backend(self.config.use_gpu)
        self.boundary: BoundaryCondition = self._build_boundary()
        self.coefficient = 0.0
        self._update_coefficient()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def equation(self) -> EquationKind:
        return self.config.equation

    @property
    def boundary_type(self) -> BoundaryKind:
        return self.config.boundary

    @property
    def scheme(self) -> SchemeKind:
        return self.config.scheme

    @property
    def use_gpu(self) -> bool:
        return self.config.use_gpu

    @property
    def dt(self) -> float:
        return self.config.dt

    @dt.setter
    def dt(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"dt must be positive, got {value}")
        self.config.dt = value
        self._update_coefficient()

    @property
    def cell_spacing(self) -> float:
        return self.config.cell_spacing

    @cell_spacing.setter
    def cell_spacing(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"cell_spacing must be positive, got {value}")
        self.config.cell_spacing = value
        # Neumann and reflective policies scale with the spacing
        self.boundary = self._build_boundary()
        self._update_coefficient()

    @property
    def field(self) -> np.ndarray:
        """Normalized current field (read-only view)."""
        view = self.grid.current.view()
        view.flags.writeable = False
        return view

    @property
    def image_data(self) -> np.ndarray:
        """Current field as an (H, W, 4) uint8 image."""
        return denormalize(self.grid.current)

    def _build_boundary(self) -> BoundaryCondition:
        return make_boundary(self.config.boundary, self.config, self.original_state)

    def _update_coefficient(self) -> None:
        self.coefficient = compute_coefficient(self.config)
        check_stability(self.config, self.coefficient)

    def step(self) -> np.ndarray:
        """
        Advance the simulation by one time step.

        Returns
        -------
        np.ndarray
            New current field as an (H, W, 4) uint8 grayscale image.
        """
        equation = get_equation(self.config.equation)
        self.last_iterations = equation.step(
            self.backend, self.grid, self.coefficient, self.config, self.boundary
        )
        self.t += self.config.dt
        self.step_count += 1
        return denormalize(self.grid.current)

    def run(self, num_steps: int) -> np.ndarray:
        """
        Take several steps and return the last image.

        With ``num_steps == 0`` the current image is returned unchanged.
        """
        image = self.image_data
        for _ in range(num_steps):
            image = self.step()
        return image

    def reset(self) -> None:
        """
        Discard the step history and reseed from the original image.

        Safe between any two steps. The fixed-boundary snapshot is kept.
        """
        self.grid.reset()
        self.t = 0.0
        self.step_count = 0
        self.last_iterations = 0
        print("Solver reset to t=0.0s.")

    def set_boundary_type(self, kind) -> None:
        """
        Select the boundary policy for subsequent steps.

        Selecting 'fixed' re-captures the current field as the edge source.
        Invalid values are ignored with a warning.
        """
        parsed = coerce_kind(BoundaryKind, kind)
        if parsed is None:
            print(f"⚠️ Warning: Invalid boundary type '{kind}'. Keeping '{self.config.boundary.value}'.")
            return

        self.config.boundary = parsed
        if parsed is BoundaryKind.FIXED:
            self.original_state = self.grid.snapshot()
        self.boundary = self._build_boundary()

    def set_pde_type(self, kind) -> None:
        """Select the equation and recompute the coefficient. Invalid values are ignored."""
        parsed = coerce_kind(EquationKind, kind)
        if parsed is None:
            print(f"⚠️ Warning: Invalid PDE type '{kind}'. Keeping '{self.config.equation.value}'.")
            return

        self.config.equation = parsed
        self._update_coefficient()

    def set_scheme_type(self, kind) -> None:
        """Select explicit or implicit stepping. Invalid values are ignored."""
        parsed = coerce_kind(SchemeKind, kind)
        if parsed is None:
            print(f"⚠️ Warning: Invalid scheme type '{kind}'. Keeping '{self.config.scheme.value}'.")
            return

        self.config.scheme = parsed
        # The exponential decay coefficient depends on the scheme
        self._update_coefficient()

    def set_use_gpu_path(self, use_gpu: bool) -> None:
        """Switch between the NumPy and JAX backends. Buffers are kept."""
        use_gpu = bool(use_gpu)
        if use_gpu == self.config.use_gpu:
            return
        self.config.use_gpu = use_gpu
        self.backend = get_backend(use_gpu)

    def preview(self) -> None:
        """Plot the current field."""
        self.grid.preview(
            title=f"{get_equation(self.config.equation).name} ({self.config.scheme.value}, "
                  f"{self.config.boundary.value}) t={self.t:.3f}s"
        )

    def __repr__(self) -> str:
        return (
            f"PDESolver({self.width}x{self.height}, equation={self.config.equation.value}, "
            f"boundary={self.config.boundary.value}, scheme={self.config.scheme.value}, "
            f"coeff={self.coefficient:.4g}, backend={self.backend.name})"
        )
