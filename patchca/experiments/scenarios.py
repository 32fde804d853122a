
from ..config import CAConfig

def isotropic_preset(**overrides):
    """Anisotropic positive-feedback landscape: pareto k=7, elongation 1.5, 10% degradation."""
    base = CAConfig(nx=200, iterations=10000, ft=0.5, tamount=0.1, model='pareto', k=7.0, dmin=1.0,
                    elongation=1.5, neighb_fraction=0.9999, a_degradation=0.1, s_degradation=0.1)
    return base.replace(**overrides)

def distal_preset(**overrides):
    """Scale-dependent distal negative feedback producing regular, upstream-elongated patterning."""
    base = CAConfig(nx=100, iterations=1000, ft=0.5, tamount=0.2, model='pareto', k=2.0, dmin=1.0,
                    distal=True, dis_feed=True, neg_range=200.0, cell_size=20.0, upstream=10.0)
    return base.replace(**overrides)

PRESETS = {'isotropic': isotropic_preset, 'distal': distal_preset}
