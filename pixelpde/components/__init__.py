from pixelpde.components.boundaries import (
    BoundaryCondition,
    Periodic,
    Dirichlet,
    Zero,
    Fixed,
    Neumann,
    Reflective,
    Robin,
    make_boundary,
)
