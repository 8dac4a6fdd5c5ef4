"""CPU/accelerator parity for the JAX stencil backend."""

import jax.numpy as jnp
import numpy as np
import pytest

from pixelpde import PDESolver
from pixelpde.core.config import SimulationConfig
from pixelpde.components.boundaries import make_boundary
from pixelpde.solvers import NumpyBackend, get_backend
from pixelpde.solvers.jax_backend import JaxBackend

DT = 0.005


@pytest.fixture
def config():
    return SimulationConfig(cell_spacing=1.0, dt=DT)


def test_factory_selects_backend():
    assert isinstance(get_backend(False), NumpyBackend)
    assert isinstance(get_backend(True), JaxBackend)


@pytest.mark.parametrize("kind", ['periodic', 'dirichlet', 'zero', 'fixed', 'neumann', 'reflective', 'robin'])
def test_boundary_policies_agree_on_jax_arrays(kind, config, random_field, rng):
    reference = rng.random(random_field.shape)
    boundary = make_boundary(kind, config, reference)

    expected = boundary.apply(random_field.copy())
    result = boundary.apply(jnp.asarray(random_field))

    np.testing.assert_allclose(np.asarray(result), expected, atol=1e-6)


@pytest.mark.parametrize("equation", ['heat', 'wave', 'exponential-decay'])
@pytest.mark.parametrize("scheme", ['forward-euler', 'backward-euler'])
@pytest.mark.parametrize("boundary", ['periodic', 'neumann', 'fixed'])
def test_solver_paths_agree(pulse_image, equation, scheme, boundary):
    cpu = PDESolver(pulse_image, dt=DT, equation=equation, scheme=scheme, boundary=boundary)
    gpu = PDESolver(pulse_image, dt=DT, equation=equation, scheme=scheme, boundary=boundary, use_gpu=True)

    for _ in range(3):
        cpu.step()
        gpu.step()

    np.testing.assert_allclose(gpu.field, cpu.field, atol=1e-3)


def test_toggle_keeps_state(noise_image):
    solver = PDESolver(noise_image, dt=DT, equation='wave')
    reference = PDESolver(noise_image, dt=DT, equation='wave')

    solver.step()
    reference.step()
    solver.set_use_gpu_path(True)
    assert solver.use_gpu
    assert solver.backend.name == 'gpu'

    solver.step()
    reference.step()
    np.testing.assert_allclose(solver.field, reference.field, atol=1e-5)

    solver.set_use_gpu_path(False)
    assert isinstance(solver.backend, NumpyBackend)


def test_relaxation_reports_sweeps(pulse_image):
    solver = PDESolver(pulse_image, dt=DT, scheme='backward-euler', boundary='reflective', use_gpu=True)
    solver.step()
    assert 1 <= solver.last_iterations <= 50
