from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, TypeVar, Union


class EquationKind(str, Enum):
    """Supported evolution equations."""
    HEAT = 'heat'
    WAVE = 'wave'
    EXPONENTIAL_DECAY = 'exponential-decay'


class BoundaryKind(str, Enum):
    """Edge policies applied to the outer ring of the grid."""
    DIRICHLET = 'dirichlet'
    ZERO = 'zero'
    NEUMANN = 'neumann'
    FIXED = 'fixed'
    REFLECTIVE = 'reflective'
    PERIODIC = 'periodic'
    ROBIN = 'robin'


class SchemeKind(str, Enum):
    """Time-stepping schemes."""
    FORWARD_EULER = 'forward-euler'
    BACKWARD_EULER = 'backward-euler'


# Physical constants
WAVE_SPEED = 50.0
DIFFUSIVITY = 10.0
DECAY_RATE = 10.0

# Step defaults
CELL_SPACING = 1.0
TIME_STEP = 0.1

# Boundary tunables
DIRICHLET_VALUE = 0.5
NEUMANN_FLUX = 1.0
ROBIN_ALPHA = 1.0
ROBIN_BETA = 1.0
ROBIN_GAMMA = 0.0

# Jacobi relaxation budget
HEAT_MAX_ITERATIONS = 50
WAVE_MAX_ITERATIONS = 25
RELAXATION_TOLERANCE = 1e-4


K = TypeVar('K', bound=Enum)


def coerce_kind(enum_cls: Type[K], value: Union[str, K, None]) -> Optional[K]:
    """
    Convert a user value into a member of ``enum_cls``.

    Parameters
    ----------
    enum_cls : type
        One of the kind enums.
    value : str or enum member
        Case-insensitive name such as ``'Heat'`` or ``'backward-euler'``.

    Returns
    -------
    enum member or None
        None when the value does not name a member.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return None


def parse_kind(enum_cls: Type[K], value: Union[str, K, None], default: K, label: str) -> K:
    """Like ``coerce_kind`` but falls back to ``default`` with a warning."""
    kind = coerce_kind(enum_cls, value)
    if kind is None:
        print(f"⚠️ Warning: Unknown {label} type '{value}'. Using '{default.value}' instead.")
        return default
    return kind


@dataclass
class SimulationConfig:
    """
    Mutable parameter set owned by a single solver.

    Parameters
    ----------
    cell_spacing : float, default=1.0
        Grid spacing, equal in x and y.
    dt : float, default=0.1
        Time step.
    equation, boundary, scheme : str or enum
        Active kinds. Unknown values fall back to heat, periodic and
        forward-euler respectively.
    use_gpu : bool, default=False
        Run the stencils through the JAX backend.
    c : float
        Wave speed, also used as the heat diffusivity.
    alpha : float
        Nominal diffusivity. Kept for reference, folded into ``c``.
    decay_rate : float
        Lambda of the exponential decay law du/dt = -lambda*u.
    """
    cell_spacing: float = CELL_SPACING
    dt: float = TIME_STEP
    equation: EquationKind = EquationKind.HEAT
    boundary: BoundaryKind = BoundaryKind.PERIODIC
    scheme: SchemeKind = SchemeKind.FORWARD_EULER
    use_gpu: bool = False

    c: float = WAVE_SPEED
    alpha: float = DIFFUSIVITY
    decay_rate: float = DECAY_RATE

    dirichlet_value: float = DIRICHLET_VALUE
    neumann_flux: float = NEUMANN_FLUX
    robin_alpha: float = ROBIN_ALPHA
    robin_beta: float = ROBIN_BETA
    robin_gamma: float = ROBIN_GAMMA

    heat_max_iterations: int = HEAT_MAX_ITERATIONS
    wave_max_iterations: int = WAVE_MAX_ITERATIONS
    tolerance: float = RELAXATION_TOLERANCE

    def __post_init__(self) -> None:
        if not self.cell_spacing > 0:
            raise ValueError(f"cell_spacing must be positive, got {self.cell_spacing}")
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")

        self.equation = parse_kind(EquationKind, self.equation, EquationKind.HEAT, 'PDE')
        self.boundary = parse_kind(BoundaryKind, self.boundary, BoundaryKind.PERIODIC, 'boundary')
        self.scheme = parse_kind(SchemeKind, self.scheme, SchemeKind.FORWARD_EULER, 'scheme')
        self.use_gpu = bool(self.use_gpu)

    @property
    def is_explicit(self) -> bool:
        return self.scheme is SchemeKind.FORWARD_EULER
