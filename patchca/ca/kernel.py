"""
Influence kernels for the landscape CA.

Two families are built here:
  - isotropic/anisotropic positive feedback: the cutoff radius is the farthest
    sampled distance whose own share of the decay mass exceeds 1 - ``neighb_fraction``;
  - distal: the cutoff is an explicit range in metres, the central column is
    biased by ``upstream`` and a binary window drives local negative feedback.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

from ..errors import ConfigurationError


class DecayModel(str, Enum):
    PARETO = "pareto"
    EXPONENTIAL = "exponential"
    LINEAR = "linear"


class BoundaryPolicy(str, Enum):
    ZERO = "zero"                       # out-of-grid neighbours are inactive
    SOURCE_COLUMNS = "source_columns"   # outer left/right padding columns held active


@dataclass(frozen=True)
class Kernel:
    weights: np.ndarray
    radius: float
    cumulative_mass: float
    boundary: BoundaryPolicy = BoundaryPolicy.ZERO
    mask: Optional[np.ndarray] = None

    def __post_init__(self):
        self.weights.setflags(write=False)
        if self.mask is not None:
            self.mask.setflags(write=False)

    @property
    def window_size(self) -> int:
        return self.weights.shape[0]

    @property
    def half_width(self) -> int:
        return (self.weights.shape[0] - 1) // 2

    @property
    def mass(self) -> float:
        return float(self.weights.sum())


def decay_function(model, k: float, dmin: float = 1.0) -> Callable[[np.ndarray], np.ndarray]:
    """Weight as a function of (positive) distance."""
    try:
        model = DecayModel(model)
    except ValueError:
        raise ConfigurationError(f"unknown decay model {model!r}") from None
    if model is DecayModel.PARETO:
        return lambda d: (dmin / d) ** k
    if model is DecayModel.EXPONENTIAL:
        return lambda d: np.exp(-k * d)
    return lambda d: np.maximum(1.0 - d / k, 0.0)


def quadrant_distance(extent: int, elongation: float = 1.0, scale: float = 1.0) -> np.ndarray:
    """Distances of offsets (row, col) in [0, extent]^2; the row axis is divided by elongation."""
    idx = np.arange(extent + 1, dtype=float)
    x, y = np.meshgrid(idx, idx)
    return np.sqrt(x ** 2 + (y / elongation) ** 2) * scale


def mirror(q: np.ndarray) -> np.ndarray:
    """Reflect a quadrant (origin at [0, 0]) into a full window centred on the origin."""
    full = np.hstack([np.fliplr(q), q[:, 1:]])
    return np.vstack([np.flipud(full), full[1:, :]])


def _half_width(d: np.ndarray, radius: float) -> int:
    inside = d <= radius
    rows = np.nonzero(inside.any(axis=1))[0].max()
    cols = np.nonzero(inside.any(axis=0))[0].max()
    return int(max(rows, cols))


def _weights(dist: np.ndarray, radius: float, f) -> np.ndarray:
    # origin and everything past the cutoff stay at zero
    w = np.zeros_like(dist)
    inside = (dist > 0) & (dist <= radius)
    w[inside] = f(dist[inside])
    w[~np.isfinite(w)] = 0.0
    return w


def build_isotropic_kernel(model="pareto", k: float = 7.0, dmin: float = 1.0,
                           elongation: float = 1.0, neighb_fraction: float = 0.9999,
                           field_extent: int = 100) -> Kernel:
    if not 0.0 < neighb_fraction < 1.0:
        raise ConfigurationError(f"neighb_fraction must lie in (0, 1), got {neighb_fraction}")
    f = decay_function(model, k, dmin)
    d = quadrant_distance(field_extent, elongation)

    sort_distance = np.sort(d.ravel())[1:]
    pt = f(sort_distance)
    total = pt.sum()
    if not np.isfinite(total) or total <= 0:
        raise ConfigurationError("decay function has no finite positive mass on the sampled field")
    # cutoff: the farthest sampled distance whose own share of the mass exceeds 1 - neighb_fraction
    share = pt / total
    keep = np.nonzero(share > 1.0 - neighb_fraction)[0]
    if keep.size == 0:
        raise ConfigurationError(
            f"no sampled distance carries more than {1.0 - neighb_fraction:.3g} of the decay mass; "
            "raise neighb_fraction")
    radius = float(sort_distance[keep.max()])

    half = _half_width(d, radius)
    if half >= field_extent:
        raise ConfigurationError(
            f"cutoff radius {radius:.3f} reaches the sampled field edge ({field_extent}); "
            "lower neighb_fraction or raise field_extent")
    if half < 1:
        raise ConfigurationError("kernel window collapsed to a single cell")

    dist = mirror(d[:half + 1, :half + 1])
    w = _weights(dist, radius, f)
    if w.sum() <= 0:
        raise ConfigurationError("kernel carries no weight inside the cutoff radius")
    inside_mass = pt[sort_distance <= radius].sum() / total
    return Kernel(weights=w, radius=radius, cumulative_mass=float(inside_mass))


def build_distal_kernel(model="pareto", k: float = 2.0, dmin: float = 1.0,
                        elongation: float = 1.0, neg_range: float = 200.0,
                        cell_size: float = 20.0, upstream: float = 1.0,
                        dis_feed: bool = True, field_extent: int = 100) -> Kernel:
    """
    Kernel with an explicit range. The central column is scaled by ``upstream`` and the
    kernel is renormalised to its unscaled mass. With ``dis_feed`` the kernel also
    carries the binary window used for the local density estimate.
    """
    if neg_range <= 0 or cell_size <= 0:
        raise ConfigurationError("neg_range and cell_size must be positive")
    ratio = neg_range / cell_size
    n = int(round(ratio))
    if n < 1 or not np.isclose(ratio, n):
        raise ConfigurationError(
            f"neg_range ({neg_range}) must be a positive multiple of cell_size ({cell_size})")
    if upstream <= 0:
        raise ConfigurationError(f"upstream must be positive, got {upstream}")
    f = decay_function(model, k, dmin)
    radius = float(neg_range) * (1 + 1e-12)

    d = quadrant_distance(int(np.ceil(n * max(elongation, 1.0))) + 1, elongation, cell_size)
    half = _half_width(d, radius)
    dist = mirror(d[:half + 1, :half + 1])

    w = _weights(dist, radius, f)
    suma = w.sum()
    if not np.isfinite(suma) or suma <= 0:
        raise ConfigurationError("kernel carries no weight inside neg_range")
    w[:, half] *= upstream
    w *= suma / w.sum()

    field = quadrant_distance(max(field_extent, half + 1), elongation, cell_size).ravel()
    field = field[field > 0]
    pt = f(field)
    cumulative = float(pt[field <= radius].sum() / pt.sum())

    mask = (dist <= radius).astype(float) if dis_feed else None
    return Kernel(weights=w, radius=float(neg_range), cumulative_mass=cumulative,
                  boundary=BoundaryPolicy.SOURCE_COLUMNS, mask=mask)


def build_kernel(cfg) -> Kernel:
    if cfg.distal:
        return build_distal_kernel(cfg.model, cfg.k, cfg.dmin, cfg.elongation, cfg.neg_range,
                                   cfg.cell_size, cfg.upstream, cfg.dis_feed, cfg.field_extent)
    return build_isotropic_kernel(cfg.model, cfg.k, cfg.dmin, cfg.elongation,
                                  cfg.neighb_fraction, cfg.field_extent)
