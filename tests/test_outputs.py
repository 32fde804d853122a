import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from patchca.analysis.metrics import landscape_metrics, metrics_from_log
from patchca.analysis.patches import patch_statistics
from patchca.analysis.plots import plot_landscape, plot_patch_stats, plot_timeseries
from patchca.experiments.artifacts import load_landscape, save_landscape

LOG = {"t": [1, 2, 3, 4], "cover": [0.6, 0.55, 0.51, 0.5],
       "born": [3, 1, 2, 0], "died": [5, 4, 3, 1], "clamped": [0, 0, 1, 0]}


def test_metrics_from_log():
    metrics, df = metrics_from_log(LOG, ft=0.5, window=2)
    assert metrics["final_cover"] == pytest.approx(0.5)
    assert metrics["tail_mean_cover"] == pytest.approx(0.505)
    assert metrics["time_to_target"] == 3
    assert metrics["transitions"] == 19
    assert metrics["clamped_cells"] == 1
    assert df["cover_err"].iloc[0] == pytest.approx(0.1)


def test_landscape_metrics():
    m = np.zeros((6, 6), bool); m[0, 0] = True; m[2:4, 2:4] = True
    out = landscape_metrics(patch_statistics(m))
    assert out["n_patches"] == 2 and out["largest_patch"] == 4
    assert out["total_perimeter"] == 12
    assert out["mean_patch_area"] == pytest.approx(2.5)


def test_landscape_persists_under_key(tmp_path):
    m = np.random.default_rng(0).random((12, 12)) > 0.5
    path = save_landscape(tmp_path / "landscape.mat", m, key="ridges")
    back = load_landscape(path, key="ridges")
    assert back.dtype == bool and np.array_equal(back, m)


def test_plots_write_files(tmp_path):
    m = np.random.default_rng(1).random((20, 20)) > 0.5
    plot_landscape(m, str(tmp_path / "m.png"), title="t=0")
    plot_patch_stats(patch_statistics(m), str(tmp_path / "s"), tag="test")
    _, df = metrics_from_log(LOG, ft=0.5)
    plot_timeseries(df, str(tmp_path / "ts"), ft=0.5)
    for name in ("m.png", "s_ccdf.png", "s_perimeter_area.png", "ts_cover.png", "ts_transitions.png"):
        assert (tmp_path / name).exists()
