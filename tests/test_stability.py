"""Tests for the coefficient and stability analysis in pixelpde.solvers.stability."""

import pytest

from pixelpde.core.config import EquationKind, SimulationConfig
from pixelpde.solvers.stability import (
    EQUATIONS,
    check_stability,
    compute_coefficient,
    get_equation,
)


def make_config(**kwargs):
    kwargs.setdefault('dt', 0.005)
    return SimulationConfig(**kwargs)


class TestCoefficient:

    def test_heat(self):
        assert compute_coefficient(make_config()) == pytest.approx(50.0 * 0.005)
        assert compute_coefficient(make_config(cell_spacing=2.0)) == pytest.approx(50.0 * 0.005 / 4.0)

    def test_wave_is_squared_courant_number(self):
        config = make_config(equation='wave', cell_spacing=0.5)
        assert compute_coefficient(config) == pytest.approx((50.0 * 0.005 / 0.5) ** 2)

    def test_decay_depends_on_scheme(self):
        explicit = make_config(equation='exponential-decay', dt=0.01)
        implicit = make_config(equation='exponential-decay', dt=0.01, scheme='backward-euler')
        assert compute_coefficient(explicit) == pytest.approx(0.9)
        assert compute_coefficient(implicit) == pytest.approx(1.0 / 1.1)

    def test_unsupported_equation_is_fatal(self):
        config = make_config()
        config.equation = 'laplace'
        with pytest.raises(ValueError, match="Unsupported PDE type"):
            compute_coefficient(config)

    def test_registry_covers_every_kind(self):
        assert set(EQUATIONS) == set(EquationKind)
        for kind in EquationKind:
            assert get_equation(kind).kind is kind


class TestStability:

    @pytest.mark.parametrize("kwargs", [
        {'equation': 'heat', 'dt': 0.005},
        {'equation': 'wave', 'dt': 0.01},
        {'equation': 'exponential-decay', 'dt': 0.2},
    ])
    def test_stable_configs_are_silent(self, kwargs, capsys):
        config = make_config(**kwargs)
        assert check_stability(config, compute_coefficient(config))
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("kwargs, fragment", [
        ({'equation': 'heat', 'dt': 0.02}, "heat equation"),
        ({'equation': 'wave', 'dt': 0.03}, "CFL condition"),
        ({'equation': 'exponential-decay', 'dt': 0.3}, "exponential decay"),
    ])
    def test_violations_warn(self, kwargs, fragment, capsys):
        config = make_config(**kwargs)
        assert not check_stability(config, compute_coefficient(config))
        out = capsys.readouterr().out
        assert "⚠️ Warning" in out
        assert fragment in out

    def test_implicit_schemes_are_never_flagged(self, capsys):
        config = make_config(equation='heat', dt=1.0, scheme='backward-euler')
        assert check_stability(config, compute_coefficient(config))
        assert capsys.readouterr().out == ""
