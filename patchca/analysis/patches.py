from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from ..ca.grid import NEIGH4, neighbors


def label_patches(m: np.ndarray) -> Tuple[np.ndarray, int]:
    """Breadth-first 4-connected labelling. 0 is background, patches are 1..n."""
    m = np.asarray(m, dtype=bool)
    h, w = m.shape
    labels = np.zeros((h, w), dtype=np.int32)
    n = 0
    for i, j in zip(*np.nonzero(m)):
        if labels[i, j]:
            continue
        n += 1
        labels[i, j] = n
        q = deque([(i, j)])
        while q:
            y, x = q.popleft()
            for ny, nx in neighbors(y, x, h, w):
                if m[ny, nx] and not labels[ny, nx]:
                    labels[ny, nx] = n
                    q.append((ny, nx))
    return labels, n


def cell_perimeter(m: np.ndarray) -> np.ndarray:
    """Per active cell, the number of its four sides facing an inactive or out-of-grid cell."""
    m = np.asarray(m, dtype=bool)
    h, w = m.shape
    p = np.pad(m, 1, mode="constant", constant_values=False)
    count = np.zeros((h, w), dtype=np.int32)
    for dy, dx in NEIGH4:
        count += ~p[1 + dy: 1 + dy + h, 1 + dx: 1 + dx + w]
    return count * m


def patch_areas(labels: np.ndarray, n: int) -> np.ndarray:
    return np.bincount(labels.ravel(), minlength=n + 1)[1:]


def patch_perimeters(labels: np.ndarray, m: np.ndarray, n: int) -> np.ndarray:
    perim = np.bincount(labels.ravel(), weights=cell_perimeter(m).ravel(), minlength=n + 1)
    return perim[1:].astype(np.int64)


def size_ccdf(areas) -> pd.DataFrame:
    """For each distinct area A, the fraction of patches with area >= A."""
    a = np.sort(np.asarray(areas).ravel())
    if a.size == 0:
        return pd.DataFrame({"area": np.array([], dtype=np.int64), "ccdf": np.array([], dtype=float)})
    u = np.unique(a)
    ccdf = (a.size - np.searchsorted(a, u, side="left")) / a.size
    return pd.DataFrame({"area": u, "ccdf": ccdf})


def fractal_dimension(areas, perimeters) -> float:
    """D from P ~ A^(D/2): twice the log-log slope of perimeter on area."""
    a = np.asarray(areas, dtype=float); p = np.asarray(perimeters, dtype=float)
    ok = (a > 0) & (p > 0)
    a, p = a[ok], p[ok]
    if np.unique(a).size < 2:
        return float("nan")
    slope = np.polyfit(np.log(a), np.log(p), 1)[0]
    return float(2.0 * slope)


def patch_table(m: np.ndarray, labels: np.ndarray = None, n: int = None) -> pd.DataFrame:
    if labels is None:
        labels, n = label_patches(m)
    elif n is None:
        n = int(labels.max())
    return pd.DataFrame({
        "label": np.arange(1, n + 1),
        "area": patch_areas(labels, n),
        "perimeter": patch_perimeters(labels, m, n),
    })


@dataclass
class PatchStatistics:
    labels: np.ndarray
    n_patches: int
    table: pd.DataFrame
    ccdf: pd.DataFrame
    fractal_dimension: float

    @property
    def perimeter_area(self) -> pd.DataFrame:
        return self.table[["perimeter", "area"]]

    @property
    def largest_patch(self) -> int:
        return int(self.table["area"].max()) if self.n_patches else 0


def patch_statistics(m: np.ndarray) -> PatchStatistics:
    m = np.asarray(m, dtype=bool)
    labels, n = label_patches(m)
    table = patch_table(m, labels, n)
    return PatchStatistics(
        labels=labels,
        n_patches=n,
        table=table,
        ccdf=size_ccdf(table["area"].to_numpy()),
        fractal_dimension=fractal_dimension(table["area"], table["perimeter"]),
    )
