from typing import Optional
import numpy as np

from pixelpde.core.config import BoundaryKind, SimulationConfig, coerce_kind

LEFT = (slice(None), 0)
RIGHT = (slice(None), -1)
TOP = (0, slice(None))
BOTTOM = (-1, slice(None))


def _assign(u, index, values):
    """
    Write ``values`` at ``index``.

    NumPy buffers are updated in place. JAX arrays are immutable, so a new
    array is returned instead; callers always use the return value.
    """
    if isinstance(u, np.ndarray):
        u[index] = values
        return u
    return u.at[index].set(values)


class BoundaryCondition:
    """
    Abstract base class for edge policies.

    A policy rewrites only the outermost ring of a freshly computed field,
    reading interior values that are already up to date. Columns are
    written first, then rows, so the row pass decides the corner values.

    Works on NumPy arrays (in place) and on JAX arrays (functional update).
    """
    kind: Optional[BoundaryKind] = None

    def apply(self, u):
        """Enforce the policy on ``u`` and return the patched array."""
        u = self.apply_columns(u)
        return self.apply_rows(u)

    def apply_columns(self, u):
        raise NotImplementedError

    def apply_rows(self, u):
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Periodic(BoundaryCondition):
    """Wrap-around edges: each edge copies the interior cell one in from the opposite edge."""
    kind = BoundaryKind.PERIODIC

    def apply_columns(self, u):
        u = _assign(u, LEFT, u[:, -2])
        return _assign(u, RIGHT, u[:, 1])

    def apply_rows(self, u):
        u = _assign(u, TOP, u[-2, :])
        return _assign(u, BOTTOM, u[1, :])


class Dirichlet(BoundaryCondition):
    """Constant value on every edge cell."""
    kind = BoundaryKind.DIRICHLET

    def __init__(self, value: float = 0.5) -> None:
        self.value = value

    def apply_columns(self, u):
        u = _assign(u, LEFT, self.value)
        return _assign(u, RIGHT, self.value)

    def apply_rows(self, u):
        u = _assign(u, TOP, self.value)
        return _assign(u, BOTTOM, self.value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value})"


class Zero(Dirichlet):
    kind = BoundaryKind.ZERO

    def __init__(self) -> None:
        super().__init__(0.0)


class Fixed(BoundaryCondition):
    """
    Edge cells frozen to a captured reference field.

    Parameters
    ----------
    reference : np.ndarray
        Field the edges are copied from, same shape as the grid.
    """
    kind = BoundaryKind.FIXED

    def __init__(self, reference: np.ndarray) -> None:
        self.reference = reference

    def apply_columns(self, u):
        u = _assign(u, LEFT, self.reference[LEFT])
        return _assign(u, RIGHT, self.reference[RIGHT])

    def apply_rows(self, u):
        u = _assign(u, TOP, self.reference[TOP])
        return _assign(u, BOTTOM, self.reference[BOTTOM])


class Neumann(BoundaryCondition):
    """
    Constant outward normal derivative.

    Each edge is extrapolated from its inner neighbour by ``flux * spacing``:
    the low edges (left, top) subtract it, the high edges (right, bottom) add it.

    Parameters
    ----------
    flux : float, default=1.0
        Normal derivative du/dn.
    spacing : float, default=1.0
        Grid spacing.
    """
    kind = BoundaryKind.NEUMANN

    def __init__(self, flux: float = 1.0, spacing: float = 1.0) -> None:
        self.flux = flux
        self.spacing = spacing

    @property
    def step(self) -> float:
        return self.spacing * self.flux

    def apply_columns(self, u):
        u = _assign(u, LEFT, u[:, 1] - self.step)
        return _assign(u, RIGHT, u[:, -2] + self.step)

    def apply_rows(self, u):
        u = _assign(u, TOP, u[1, :] - self.step)
        return _assign(u, BOTTOM, u[-2, :] + self.step)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(flux={self.flux}, spacing={self.spacing})"


class Reflective(Neumann):
    """Zero-flux walls: each edge mirrors its inner neighbour."""
    kind = BoundaryKind.REFLECTIVE

    def __init__(self, spacing: float = 1.0) -> None:
        super().__init__(flux=0.0, spacing=spacing)


class Robin(BoundaryCondition):
    """
    Mixed condition alpha*u + beta*du/dn = gamma.

    Discretized as ``u_edge = (beta * u_adjacent + gamma) / (beta + alpha)``.
    With the default alpha=beta=1, gamma=0 this halves the adjacent value.
    """
    kind = BoundaryKind.ROBIN

    def __init__(self, alpha: float = 1.0, beta: float = 1.0, gamma: float = 0.0) -> None:
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma

    def _edge(self, adjacent):
        return (self.beta * adjacent + self.gamma) / (self.beta + self.alpha)

    def apply_columns(self, u):
        u = _assign(u, LEFT, self._edge(u[:, 1]))
        return _assign(u, RIGHT, self._edge(u[:, -2]))

    def apply_rows(self, u):
        u = _assign(u, TOP, self._edge(u[1, :]))
        return _assign(u, BOTTOM, self._edge(u[-2, :]))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(alpha={self.alpha}, beta={self.beta}, gamma={self.gamma})"


def make_boundary(
    kind,
    config: SimulationConfig,
    reference: Optional[np.ndarray] = None
) -> BoundaryCondition:
    """
    Build the policy for ``kind`` from the solver configuration.

    Parameters
    ----------
    kind : BoundaryKind or str
        Requested policy.
    config : SimulationConfig
        Source of spacing and boundary tunables.
    reference : np.ndarray, optional
        Captured field for the fixed policy.

    Returns
    -------
    BoundaryCondition
        The policy. Unrecognized kinds get a periodic policy.
    """
    requested = kind
    kind = coerce_kind(BoundaryKind, requested)

    if kind is BoundaryKind.DIRICHLET:
        return Dirichlet(config.dirichlet_value)
    if kind is BoundaryKind.ZERO:
        return Zero()
    if kind is BoundaryKind.FIXED:
        if reference is None:
            raise ValueError("Fixed boundary requires a reference field.")
        return Fixed(reference)
    if kind is BoundaryKind.NEUMANN:
        return Neumann(config.neumann_flux, config.cell_spacing)
    if kind is BoundaryKind.REFLECTIVE:
        return Reflective(config.cell_spacing)
    if kind is BoundaryKind.ROBIN:
        return Robin(config.robin_alpha, config.robin_beta, config.robin_gamma)
    if kind is not BoundaryKind.PERIODIC:
        print(f"⚠️ Warning: Unrecognized boundary type '{requested}'. Using periodic boundaries.")
    return Periodic()
