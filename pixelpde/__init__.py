from pixelpde.core import (
    EquationKind,
    BoundaryKind,
    SchemeKind,
    SimulationConfig,
    FieldGrid,
    normalize,
    denormalize,
    to_grayscale,
)
from pixelpde.pdesolver import PDESolver

__version__ = '0.1.0'
