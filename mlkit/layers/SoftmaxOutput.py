import numpy as np

from .Layer import Output, LayerState
from .Parameter import Parameter
from .Deferred import Deferred
from ..activations.Softmax import Softmax
from ..exceptions import LayerStateError
from ..helpers.Backend import backend, EPSILON


class SoftmaxOutput(Output):
    """
    Softmax output layer with an implicit cross-entropy cost.

    Training is two-phase: ``back`` computes the weight gradients and
    ``update`` applies them through the optimizer registered at
    ``initialize``. There are no biases.
    """
    def __init__(self, classes, alpha=1e-4):
        super().__init__(classes, alpha=alpha)
        self.activation = Softmax()
        self.optimizer = None
        self.gradients = None

    def initialize(self, fan_in, optimizer):
        self.weights = Parameter(self._init_weights(fan_in))
        optimizer.initialize(self.weights)
        self.optimizer = optimizer
        self.gradients = None
        self.state = LayerState.UNINITIALIZED
        self._clear_memo()
        return self.width()

    def forward(self, x):
        x = self._check_input(x)
        z = backend.matmul(self.weights.w, x)
        computed = self.activation.compute(z)
        self._memoize(x, z, computed)
        return computed

    def infer(self, x):
        x = self._check_input(x)
        return self.activation.compute(backend.matmul(self.weights.w, x))

    def back(self, labels, optimizer=None):
        labels = self._check_back(labels)

        expected = self._expected(labels)

        # L2 term per output unit: 0.5 * alpha * (sum_k w_ik)^2
        penalty = 0.5 * self.alpha * backend.sum(self.weights.w, axis=1, keepdims=True) ** 2

        errors = (expected - self.computed) + penalty

        self.gradients = backend.matmul(errors, backend.transpose(self.input))

        cost = float(-backend.sum(expected * backend.log(self.computed + EPSILON)))

        if optimizer is not None:
            self.optimizer = optimizer

        w = self.weights.w.copy()

        self._clear_memo()
        self.state = LayerState.BACK_DONE

        return Deferred(lambda: backend.matmul(backend.transpose(w), errors)), cost

    def update(self):
        """Apply the gradients from the last back pass; returns the step's one-norm."""
        if self.gradients is None:
            raise LayerStateError("Must backpropagate before updating the parameters.")
        if self.optimizer is None:
            raise LayerStateError("No optimizer given to initialize or back.")

        # errors point along -dL, optimizers expect dL
        steps = self.optimizer.step(self.weights, -self.gradients)

        self.weights.update(steps)
        self.gradients = None

        return float(np.linalg.norm(steps, 1))

    def read(self):
        self._require_weights()
        return {
            "weights": self.weights.w.copy(),
        }

    def restore(self, parameters):
        self.weights = Parameter(self._check_bundle(parameters, ["weights"]))
        self.gradients = None
        self.state = LayerState.UNINITIALIZED
        self._clear_memo()
