# mlkit/helpers/Backend.py
import numpy as np

# Shared additive constant guarding divisions, logs and variances.
EPSILON = 1e-8

DEFAULT_FLOAT = np.float64


class Backend:
    """
    Dense-matrix backend shared by layers, optimizers and estimators.

    Holds the default float type and the random generator used for weight
    initialization. Any attribute not defined here (sum, exp, matmul, ...)
    resolves to the NumPy function of the same name.
    """
    def __init__(self, default_float=DEFAULT_FLOAT, seed=None):
        self.default_float = default_float
        self.xp = np
        self._rng = np.random.default_rng(seed)

    # -------- conversion --------
    def ensure_array(self, x, dtype=None, copy=False):
        """Convert lists, tuples or arrays to an ndarray, casting to ``dtype``."""
        arr = self.xp.array(x, copy=True) if copy else self.xp.asarray(x)
        if dtype is None or arr.dtype == dtype:
            return arr
        return arr.astype(dtype)

    def asarray(self, x, dtype=None):
        return self.ensure_array(x, dtype=dtype)

    def astype_default(self, x):
        return self.ensure_array(x, dtype=self.default_float)

    def as_matrix(self, x, copy=False):
        """Default-float 2D array; 1D input becomes a single column."""
        arr = self.ensure_array(x, dtype=self.default_float, copy=copy)
        if arr.ndim == 1:
            return arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2D matrix, got {arr.ndim} dimensions.")
        return arr

    # -------- creation --------
    def _filled(self, factory, shape, dtype=None):
        return factory(shape, dtype=dtype or self.default_float)

    def zeros(self, shape, dtype=None):
        return self._filled(self.xp.zeros, shape, dtype)

    def ones(self, shape, dtype=None):
        return self._filled(self.xp.ones, shape, dtype)

    def array(self, data, dtype=None):
        return self.xp.array(data, dtype=dtype or self.default_float)

    # -------- randomness --------
    @property
    def random(self):
        return self._rng

    def seed(self, seed=None):
        self._rng = np.random.default_rng(seed)

    def uniform(self, low, high, shape):
        """I.i.d. uniform samples in [low, high) of the given shape."""
        return self._rng.uniform(low, high, size=shape).astype(self.default_float)

    def __getattr__(self, name):
        return getattr(self.xp, name)


backend = Backend()
