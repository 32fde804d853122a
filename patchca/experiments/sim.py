
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from ..analysis.patches import PatchStatistics, patch_statistics
from ..ca.grid import LandscapeState
from ..ca.kernel import Kernel, build_kernel
from ..ca.neighborhood import Neighborhood
from ..ca.update import step_ca
from ..config import CAConfig
from ..control.cover import CoverController
from ..dynamics.degradation import Degradation
from .observers import NoOpObserver

@dataclass
class SimResult:
    config: CAConfig
    kernel: Kernel
    original: np.ndarray        # converged landscape before degradation
    landscape: np.ndarray       # final (possibly degraded) landscape
    stats: PatchStatistics
    log: Dict[str, List[Any]] = field(default_factory=dict)

def run(cfg=None, observers=(), m0=None, **overrides):
    cfg = cfg or CAConfig()
    if overrides: cfg = cfg.replace(**overrides)
    cfg.validate()
    kernel = build_kernel(cfg)
    state = LandscapeState(nx=cfg.nx, seed=cfg.seed, m=m0)
    engine = Neighborhood(kernel, state.m.shape, method=cfg.conv_method)
    ctrl = CoverController(cfg.ft, eps=cfg.eps, strict=cfg.strict)
    observers = list(observers) or [NoOpObserver()]
    log = {k:[] for k in ['t','cover','born','died','clamped']}
    for _ in range(cfg.iterations):
        tr = step_ca(state, engine, ctrl, cfg.tamount)
        log['t'].append(state.t); log['cover'].append(state.cover())
        log['born'].append(int(tr.born.sum())); log['died'].append(int(tr.died.sum()))
        log['clamped'].append(ctrl.last_clamped)
        for obs in observers:
            obs.notify(state)
    original = state.m.copy()
    landscape = Degradation(cfg.a_degradation, cfg.s_degradation).apply(original, state.rng)
    return SimResult(config=cfg, kernel=kernel, original=original, landscape=landscape,
                     stats=patch_statistics(landscape), log=log)
