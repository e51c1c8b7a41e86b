import weakref

import numpy as np

from .Optimizer import Optimizer


class AdamWOptimizer(Optimizer):
    def __init__(
        self, lr=1e-3, weight_decay=0.0, beta1=0.9, beta2=0.999, eps=1e-8
    ):
        if lr <= 0.0:
            raise ValueError("Learning rate must be greater than 0.")
        if not (0.0 <= beta1 < 1.0 and 0.0 <= beta2 < 1.0):
            raise ValueError("Decay rates must be in [0, 1).")
        self.lr = lr
        self.weight_decay = weight_decay
        self.beta1 = beta1
        self.beta2 = beta2
        self.eps = eps
        # state keyed by Parameter; dropped with the handle after restore()
        self._m = weakref.WeakKeyDictionary()
        self._v = weakref.WeakKeyDictionary()
        self._t = weakref.WeakKeyDictionary()

    def initialize(self, param):
        self._m[param] = np.zeros_like(param.w)
        self._v[param] = np.zeros_like(param.w)
        self._t[param] = 0

    def step(self, param, grad):
        if param not in self._m:
            # restored parameters are registered on first use
            self.initialize(param)
        self._t[param] += 1
        t = self._t[param]
        b1t = 1.0 - self.beta1**t
        b2t = 1.0 - self.beta2**t

        m = self._m[param]
        v = self._v[param]
        # Adam moments (in-place)
        m[...] = self.beta1 * m + (1.0 - self.beta1) * grad
        v[...] = self.beta2 * v + (1.0 - self.beta2) * (grad * grad)
        m_hat = m / b1t
        v_hat = v / b2t

        delta = self.lr * (m_hat / (np.sqrt(v_hat) + self.eps))
        # decoupled weight decay
        if self.weight_decay != 0.0:
            delta = delta + self.lr * self.weight_decay * param.w
        return delta
