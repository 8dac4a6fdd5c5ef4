from typing import Dict

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.solvers.base import Equation
from pixelpde.solvers.heat import Heat
from pixelpde.solvers.wave import Wave
from pixelpde.solvers.decay import ExponentialDecay

EQUATIONS: Dict[EquationKind, Equation] = {
    eq.kind: eq for eq in (Heat(), Wave(), ExponentialDecay())
}


def get_equation(kind) -> Equation:
    """
    Look up the equation registered for ``kind``.

    Raises
    ------
    ValueError
        If no equation is registered. Kinds are validated when they are
        set, so reaching this means the configuration was corrupted.
    """
    equation = EQUATIONS.get(kind)
    if equation is None:
        raise ValueError(f"Unsupported PDE type: {kind!r}")
    return equation


def compute_coefficient(config: SimulationConfig) -> float:
    """
    Derive the update coefficient for the configured equation and scheme.

    Heat: c*dt/dx². Wave: (c*dt/dx)². Exponential decay: 1 - lambda*dt
    (explicit) or 1/(1 + lambda*dt) (implicit).
    """
    return get_equation(config.equation).coefficient(config)


def check_stability(config: SimulationConfig, coeff: float) -> bool:
    """
    Report a violated stability bound for explicit schemes.

    Diagnostic only: the simulation runs regardless.

    Returns
    -------
    bool
        False when a warning was emitted.
    """
    if not config.is_explicit:
        return True

    message = get_equation(config.equation).stability_warning(config, coeff)
    if message is not None:
        print(f"⚠️ Warning: {message}")
        return False
    return True
