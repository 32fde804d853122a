import numpy as np

from ..errors import NumericDegeneracyError


class CoverController:
    """
    Proportional correction toward the target cover ``ft``.

    Pot = activity + (ft - d) / (1 - d)      inactive -> active
    Pto = 1 - activity + (d - ft) / d        active -> inactive

    ``d`` is clamped into [eps, 1 - eps]; clamped cells are counted, or rejected
    with NumericDegeneracyError when ``strict``.
    """
    def __init__(self, ft, eps=1e-9, strict=False):
        self.ft = ft; self.eps = eps; self.strict = strict
        self.clamped = 0; self.last_clamped = 0

    def reset(self):
        self.clamped = 0; self.last_clamped = 0

    def clamp(self, density):
        d = np.asarray(density, dtype=float)
        n = int(np.count_nonzero((d < self.eps) | (d > 1.0 - self.eps)))
        if n and self.strict:
            raise NumericDegeneracyError(
                f"density reached the boundary of (0, 1) at {n} cell(s) "
                f"(min={d.min():.6g}, max={d.max():.6g})")
        self.last_clamped = n
        self.clamped += n
        return np.clip(d, self.eps, 1.0 - self.eps)

    def step(self, activity, density):
        d = self.clamp(density)
        pot = activity + (self.ft - d) / (1.0 - d)
        pto = 1.0 - activity + (d - self.ft) / d
        return pot, pto
