import numpy as np
from scipy.signal import convolve, choose_conv_method

from ..errors import ConfigurationError
from .kernel import BoundaryPolicy, Kernel


def pad_grid(m: np.ndarray, half: int, policy: BoundaryPolicy = BoundaryPolicy.ZERO) -> np.ndarray:
    """Zero-pad by the kernel half-width; SOURCE_COLUMNS then holds the outer columns active."""
    p = np.pad(np.asarray(m, dtype=float), half, mode="constant", constant_values=0.0)
    if policy is BoundaryPolicy.SOURCE_COLUMNS:
        p[:, 0] = 1.0
        p[:, -1] = 1.0
    return p


class Neighborhood:
    """
    Weighted neighbour activity via 2D convolution of the padded grid.

    Kernels are mirror-symmetric on both axes, so convolution and correlation agree.
    Each cell's sum is divided by the kernel weight that falls inside the grid, which
    corrects the footprint truncated at the edges.
    """
    def __init__(self, kernel: Kernel, shape, method: str = "auto"):
        self.kernel = kernel
        self.shape = tuple(shape)
        self.half = kernel.half_width
        inside = pad_grid(np.ones(self.shape), self.half)
        if method == "auto":
            method = choose_conv_method(inside, kernel.weights, mode="valid")
        self.method = method

        self._divisor = self._convolve(inside, kernel.weights)
        if np.any(self._divisor <= 0):
            raise ConfigurationError("kernel has no weight inside the grid for some cells")
        self._mask_total = None
        if kernel.mask is not None:
            self._mask_total = self._convolve(inside, kernel.mask)

    def _convolve(self, padded: np.ndarray, w: np.ndarray) -> np.ndarray:
        return convolve(padded, w, mode="valid", method=self.method)

    def activity(self, m: np.ndarray) -> np.ndarray:
        s = self._convolve(pad_grid(m, self.half, self.kernel.boundary), self.kernel.weights)
        return s / self._divisor

    def local_density(self, m: np.ndarray) -> np.ndarray:
        if self._mask_total is None:
            raise ValueError("kernel carries no negative-feedback window")
        s = self._convolve(pad_grid(m, self.half, self.kernel.boundary), self.kernel.mask)
        return s / self._mask_total

    def density(self, m: np.ndarray):
        """Local field when the kernel has a feedback window, global active fraction otherwise."""
        if self._mask_total is not None:
            return self.local_density(m)
        return float(np.mean(m))
