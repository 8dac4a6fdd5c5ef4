from pixelpde.core.config import (
    EquationKind,
    BoundaryKind,
    SchemeKind,
    SimulationConfig,
    coerce_kind,
    parse_kind,
)
from pixelpde.core.codec import normalize, denormalize, to_grayscale
from pixelpde.core.grid import FieldGrid
