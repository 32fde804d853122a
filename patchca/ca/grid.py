
import numpy as np

from ..errors import ConfigurationError

# 4-neighbourhood (von Neumann) offsets
NEIGH4 = ((-1, 0), (1, 0), (0, -1), (0, 1))

def neighbors(i, j, h, w):
    for di, dj in NEIGH4:
        ni, nj = i + di, j + dj
        if 0 <= ni < h and 0 <= nj < w:
            yield ni, nj

class LandscapeState:
    """Boolean landscape plus the random stream that drives it."""
    def __init__(self, nx=200, seed=0, m=None):
        self.nx = nx
        self.rng = np.random.default_rng(seed)
        if m is None:
            # random 50/50 start
            self.m = np.round(self.rng.random((nx, nx))).astype(bool)
        else:
            self.m = np.array(m, dtype=bool)
            if self.m.shape != (nx, nx):
                raise ConfigurationError(f"initial grid must be {nx}x{nx}, got {self.m.shape}")
        self.t = 0
    def cover(self): return float(self.m.mean())
    def n_active(self): return int(self.m.sum())
