
import numpy as np

from ..errors import ConfigurationError

class Degradation:
    """
    One-shot disturbance of a converged landscape.
    Subtractive degradation removes active cells with probability a_degradation,
    additive degradation adds cells with probability s_degradation.
    """
    def __init__(self, a_degradation=0.0, s_degradation=0.0):
        for name, v in (("a_degradation", a_degradation), ("s_degradation", s_degradation)):
            if not 0.0 <= v <= 1.0:
                raise ConfigurationError(f"{name} must lie in [0, 1], got {v}")
        self.a_degradation = a_degradation; self.s_degradation = s_degradation
    def apply(self, m, rng):
        # both fields are always drawn so a seed gives the same draws for any setting
        removed = rng.random(m.shape) > (1.0 - self.a_degradation)
        removed &= m  # only active cells can be removed
        added = rng.random(m.shape) > (1.0 - self.s_degradation)
        count = m.astype(np.int8) - removed + added
        return count > 0
