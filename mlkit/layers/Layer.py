from enum import Enum

import numpy as np

from ..exceptions import LayerStateError
from ..helpers.Backend import backend


class LayerState(Enum):
    UNINITIALIZED = "uninitialized"
    FORWARD_DONE = "forward_done"
    BACK_DONE = "back_done"


class Output:
    """
    Contract of a network output layer.

    Subclasses implement ``initialize``, ``forward``, ``infer``, ``back``,
    ``read`` and ``restore``. The base class owns the class labels, the
    label-to-row table and the memoized forward state.
    """
    def __init__(self, classes, alpha=1e-4):
        classes = list(dict.fromkeys(classes))

        if len(classes) < 2:
            raise ValueError("The number of unique classes must be 2 or more.")
        if alpha < 0.0:
            raise ValueError("L2 regularization parameter must be non-negative.")

        self.classes = classes
        self.alpha = float(alpha)
        self._index = {label: i for i, label in enumerate(classes)}

        self.weights = None
        self.state = LayerState.UNINITIALIZED
        self._clear_memo()

    def width(self):
        return len(self.classes)

    @property
    def fan_in(self):
        return None if self.weights is None else self.weights.shape[1]

    # Subclasses override as needed
    def initialize(self, fan_in, optimizer):
        raise NotImplementedError

    def forward(self, x):
        raise NotImplementedError

    def infer(self, x):
        raise NotImplementedError

    def back(self, labels, optimizer):
        # Return (Deferred upstream gradient, scalar cost)
        raise NotImplementedError

    def read(self):
        raise NotImplementedError

    def restore(self, parameters):
        raise NotImplementedError

    # ---------- shared helpers ----------
    def _init_weights(self, fan_in):
        if fan_in < 1:
            raise ValueError("Fan in must be at least 1.")
        r = np.sqrt(6.0 / fan_in)
        return backend.uniform(-r, r, (self.width(), int(fan_in)))

    def _check_input(self, x):
        if self.weights is None:
            raise LayerStateError("Layer must be initialized before a forward pass.")
        x = backend.as_matrix(x)
        if x.shape[0] != self.fan_in:
            raise ValueError(
                f"Input has {x.shape[0]} rows, layer expects {self.fan_in}."
            )
        return x

    def _check_back(self, labels):
        if self.state is not LayerState.FORWARD_DONE:
            raise LayerStateError("Must perform forward pass before backpropagating.")
        labels = list(labels)
        if len(labels) != self.input.shape[1]:
            raise ValueError(
                f"Got {len(labels)} labels for a batch of {self.input.shape[1]} samples."
            )
        return labels

    def _expected(self, labels):
        # one-hot (width, batch); unknown labels give an all-zero column
        expected = backend.zeros((self.width(), len(labels)))
        for j, label in enumerate(labels):
            i = self._index.get(label)
            if i is not None:
                expected[i, j] = 1.0
        return expected

    def _check_bundle(self, parameters, keys):
        missing = [k for k in keys if k not in parameters]
        if missing:
            raise ValueError(f"Parameter bundle is missing {missing}.")
        weights = backend.as_matrix(parameters["weights"], copy=True)
        if weights.shape[0] != self.width():
            raise ValueError(
                f"Weights have {weights.shape[0]} rows, layer has {self.width()} classes."
            )
        return weights

    def _memoize(self, x, z, computed):
        self.input = x
        self.z = z
        self.computed = computed
        self.state = LayerState.FORWARD_DONE

    def _clear_memo(self):
        self.input = None
        self.z = None
        self.computed = None

    def _require_weights(self):
        if self.weights is None:
            raise LayerStateError("Layer has not been initialized.")
