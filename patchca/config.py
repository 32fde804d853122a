from __future__ import annotations
from dataclasses import dataclass, asdict, fields, replace as _replace
from typing import Any, Dict

from .errors import ConfigurationError

DECAY_MODELS = ("pareto", "exponential", "linear")
CONV_METHODS = ("auto", "direct", "fft")


@dataclass
class CAConfig:
    """
    Parameters of one landscape run.

    Defaults follow the isotropic positive-feedback model. Setting ``distal=True``
    switches to the distal family, where the kernel extent comes from
    ``neg_range``/``cell_size`` instead of ``neighb_fraction``.
    """
    nx: int = 200
    iterations: int = 10000
    ft: float = 0.5                 # target fractional cover
    tamount: float = 0.1            # share of cells offered a transition each step
    model: str = "pareto"
    k: float = 7.0                  # pareto exponent / exponential rate / linear reach
    dmin: float = 1.0
    elongation: float = 1.0         # 1 = isotropic
    neighb_fraction: float = 0.9999
    field_extent: int = 100         # sampled offsets per axis when searching the cutoff
    distal: bool = False
    dis_feed: bool = True           # distal family only: local negative feedback
    neg_range: float = 200.0        # metres
    cell_size: float = 20.0         # metres
    upstream: float = 1.0
    a_degradation: float = 0.0      # subtractive
    s_degradation: float = 0.0      # additive
    seed: int = 0
    frame_every: int = 20
    eps: float = 1e-9
    strict: bool = False
    conv_method: str = "auto"

    def validate(self) -> "CAConfig":
        if int(self.nx) <= 0:
            raise ConfigurationError(f"nx must be positive, got {self.nx}")
        if int(self.iterations) <= 0:
            raise ConfigurationError(f"iterations must be positive, got {self.iterations}")
        for name in ("ft", "tamount", "a_degradation", "s_degradation"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise ConfigurationError(f"{name} must lie in [0, 1], got {v}")
        if self.model not in DECAY_MODELS:
            raise ConfigurationError(f"unknown decay model {self.model!r}; expected one of {DECAY_MODELS}")
        for name in ("k", "dmin", "elongation", "upstream"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.distal:
            if self.cell_size <= 0 or self.neg_range <= 0:
                raise ConfigurationError("neg_range and cell_size must be positive")
        elif not 0.0 < self.neighb_fraction < 1.0:
            raise ConfigurationError(f"neighb_fraction must lie in (0, 1), got {self.neighb_fraction}")
        if int(self.field_extent) < 1:
            raise ConfigurationError(f"field_extent must be positive, got {self.field_extent}")
        if int(self.frame_every) <= 0:
            raise ConfigurationError(f"frame_every must be positive, got {self.frame_every}")
        if not 0.0 < self.eps < 0.5:
            raise ConfigurationError(f"eps must lie in (0, 0.5), got {self.eps}")
        if self.conv_method not in CONV_METHODS:
            raise ConfigurationError(f"conv_method must be one of {CONV_METHODS}, got {self.conv_method!r}")
        return self

    def replace(self, **changes) -> "CAConfig":
        return _replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CAConfig":
        """Build a config from a loader's mapping; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})
