import numpy as np
import pytest

from patchca.ca.kernel import BoundaryPolicy, build_distal_kernel, build_isotropic_kernel
from patchca.ca.neighborhood import Neighborhood, pad_grid


def brute_activity(m, w):
    h = (w.shape[0] - 1) // 2
    n = m.shape[0]
    out = np.zeros(m.shape)
    for i in range(n):
        for j in range(n):
            s = tot = 0.0
            for a in range(-h, h + 1):
                for b in range(-h, h + 1):
                    ii, jj = i + a, j + b
                    if 0 <= ii < n and 0 <= jj < n:
                        s += w[a + h, b + h] * m[ii, jj]
                        tot += w[a + h, b + h]
            out[i, j] = s / tot
    return out


@pytest.fixture
def kernel():
    return build_isotropic_kernel("pareto", k=7, elongation=1.5, neighb_fraction=0.9999)


@pytest.mark.parametrize("method", ["direct", "fft", "auto"])
def test_activity_matches_brute_force(kernel, method):
    rng = np.random.default_rng(3)
    m = rng.random((12, 12)) > 0.5
    eng = Neighborhood(kernel, m.shape, method=method)
    assert np.allclose(eng.activity(m), brute_activity(m, kernel.weights), atol=1e-10)


def test_full_and_empty_grids_with_edge_correction(kernel):
    eng = Neighborhood(kernel, (15, 15))
    assert np.allclose(eng.activity(np.ones((15, 15), bool)), 1.0)
    assert np.allclose(eng.activity(np.zeros((15, 15), bool)), 0.0, atol=1e-12)


def test_global_density_without_window(kernel):
    m = np.zeros((10, 10), bool); m[:3] = True
    eng = Neighborhood(kernel, m.shape)
    assert eng.density(m) == pytest.approx(0.3)
    with pytest.raises(ValueError):
        eng.local_density(m)


def test_pad_grid_policies():
    m = np.zeros((4, 4), bool)
    z = pad_grid(m, 2, BoundaryPolicy.ZERO)
    s = pad_grid(m, 2, BoundaryPolicy.SOURCE_COLUMNS)
    assert z.shape == s.shape == (8, 8)
    assert z.sum() == 0
    assert np.all(s[:, 0] == 1) and np.all(s[:, -1] == 1)
    assert s[:, 1:-1].sum() == 0


def test_source_columns_feed_edge_cells():
    kern = build_distal_kernel("pareto", k=2, neg_range=60, cell_size=20, upstream=1)
    eng = Neighborhood(kern, (20, 20))
    m = np.zeros((20, 20), bool)
    act = eng.activity(m)
    dens = eng.local_density(m)
    assert np.all(act[:, 0] > 0) and np.all(act[:, -1] > 0)
    assert np.allclose(act[:, 5:15], 0.0, atol=1e-12)
    assert np.all(dens[:, 0] > 0)
    assert np.allclose(dens[:, 5:15], 0.0, atol=1e-12)


def test_local_density_counts_window_including_centre():
    kern = build_distal_kernel("pareto", k=2, neg_range=40, cell_size=20)
    eng = Neighborhood(kern, (15, 15), method="direct")
    m = np.zeros((15, 15), bool); m[7, 7] = True
    dens = eng.density(m)
    assert dens.shape == (15, 15)
    assert dens[7, 7] == pytest.approx(1.0 / kern.mask.sum())
    assert np.allclose(eng.local_density(np.ones((15, 15), bool))[4:11, 4:11], 1.0)
