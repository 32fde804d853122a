import numpy as np
import pytest

from patchca.ca.grid import LandscapeState
from patchca.ca.kernel import build_isotropic_kernel
from patchca.ca.neighborhood import Neighborhood
from patchca.ca.update import step_ca, stochastic_update
from patchca.control.cover import CoverController
from patchca.errors import ConfigurationError


def test_born_and_died_are_disjoint():
    rng = np.random.default_rng(0)
    for _ in range(50):
        m = rng.random((20, 20)) > 0.5
        pot = rng.uniform(-0.5, 1.5, m.shape)
        pto = rng.uniform(-0.5, 1.5, m.shape)
        tr = stochastic_update(m, pot, pto, 0.5, rng)
        assert not np.any(tr.born & tr.died)
        assert not np.any(tr.born & m)
        assert not np.any(tr.died & ~m)
        assert np.array_equal(tr.grid, (m | tr.born) & ~tr.died)
        assert tr.grid.dtype == bool


def test_zero_tamount_freezes_grid():
    rng = np.random.default_rng(1)
    m = rng.random((10, 10)) > 0.5
    tr = stochastic_update(m, np.full(m.shape, 5.0), np.full(m.shape, 5.0), 0.0, rng)
    assert np.array_equal(tr.grid, m)


def test_certain_activation_fills_grid():
    rng = np.random.default_rng(2)
    m = rng.random((10, 10)) > 0.5
    tr = stochastic_update(m, np.full(m.shape, 2.0), np.full(m.shape, -1.0), 1.0, rng)
    assert tr.grid.all()
    assert np.array_equal(tr.born, ~m)


def test_update_reads_snapshot_only():
    m = np.random.default_rng(4).random((8, 8)) > 0.5
    before = m.copy()
    a = stochastic_update(m, np.full(m.shape, 0.5), np.full(m.shape, 0.5), 0.3, np.random.default_rng(9))
    b = stochastic_update(m, np.full(m.shape, 0.5), np.full(m.shape, 0.5), 0.3, np.random.default_rng(9))
    assert np.array_equal(m, before)
    assert np.array_equal(a.grid, b.grid)


def test_step_ca_advances_state():
    state = LandscapeState(nx=16, seed=5)
    eng = Neighborhood(build_isotropic_kernel("pareto", k=7), state.m.shape)
    ctrl = CoverController(0.5)
    prev = state.m
    tr = step_ca(state, eng, ctrl, 0.1)
    assert state.t == 1
    assert state.m is tr.grid and state.m is not prev
    assert state.m.shape == (16, 16)


def test_initial_state_is_seeded():
    a, b = LandscapeState(nx=30, seed=11), LandscapeState(nx=30, seed=11)
    assert np.array_equal(a.m, b.m)
    assert 0.3 < a.cover() < 0.7
    assert a.n_active() == int(a.m.sum())


def test_initial_grid_shape_mismatch():
    with pytest.raises(ConfigurationError):
        LandscapeState(nx=8, m=np.zeros((6, 8), bool))
