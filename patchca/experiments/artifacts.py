
import numpy as np
from scipy.io import loadmat, savemat

def save_landscape(path, m, key='m'):
    savemat(str(path), {key: np.asarray(m, dtype=bool)})
    return path

def load_landscape(path, key='m'):
    return loadmat(str(path))[key].astype(bool)
