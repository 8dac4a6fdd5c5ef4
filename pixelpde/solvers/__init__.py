from pixelpde.solvers.base import Equation
from pixelpde.solvers.heat import Heat
from pixelpde.solvers.wave import Wave
from pixelpde.solvers.decay import ExponentialDecay
from pixelpde.solvers.numpy_backend import StencilBackend, NumpyBackend
from pixelpde.solvers.stability import EQUATIONS, get_equation, compute_coefficient, check_stability


def get_backend(use_gpu: bool) -> StencilBackend:
    """
    Backend factory.

    Returns the JAX backend when the GPU path is requested, otherwise the
    NumPy backend.
    """
    if use_gpu:
        from pixelpde.solvers.jax_backend import JaxBackend
        return JaxBackend()
    return NumpyBackend()
