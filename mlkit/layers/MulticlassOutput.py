from .Layer import Output, LayerState
from .Parameter import Parameter
from .Deferred import Deferred
from ..activations.Softmax import Softmax
from ..loss.CrossEntropy import CrossEntropy
from ..helpers.Backend import backend


class MulticlassOutput(Output):
    """
    Softmax output layer with biases and a pluggable cost function.

    ``back`` computes the cost and gradients and applies both parameter
    updates immediately through the given optimizer.
    """
    def __init__(self, classes, alpha=1e-4, cost_function=None):
        super().__init__(classes, alpha=alpha)
        self.activation = Softmax()
        self.cost_function = cost_function if cost_function is not None else CrossEntropy()
        self.biases = None

    def initialize(self, fan_in, optimizer):
        self.weights = Parameter(self._init_weights(fan_in))
        self.biases = Parameter(backend.ones((self.width(), 1)))
        optimizer.initialize(self.weights)
        optimizer.initialize(self.biases)
        self.state = LayerState.UNINITIALIZED
        self._clear_memo()
        return self.width()

    def _z(self, x):
        # biases (width, 1) broadcast across the batch columns
        return backend.matmul(self.weights.w, x) + self.biases.w

    def forward(self, x):
        x = self._check_input(x)
        z = self._z(x)
        computed = self.activation.compute(z)
        self._memoize(x, z, computed)
        return computed

    def infer(self, x):
        x = self._check_input(x)
        return self.activation.compute(self._z(x))

    def back(self, labels, optimizer):
        labels = self._check_back(labels)

        expected = self._expected(labels)

        computed = self.cost_function.compute(expected, self.computed)
        cost = float(backend.sum(computed))

        # weight decay on the gradient, not the cost
        penalty = self.alpha * backend.sum(self.weights.w, axis=1, keepdims=True)

        dL = self.cost_function.differentiate(expected, self.computed, computed) + penalty

        dA = self.activation.differentiate(self.z, self.computed) * dL

        dW = backend.matmul(dA, backend.transpose(self.input))
        dB = backend.mean(dA, axis=1, keepdims=True)

        w = self.weights.w.copy()

        self.weights.update(optimizer.step(self.weights, dW))
        self.biases.update(optimizer.step(self.biases, dB))

        self._clear_memo()
        self.state = LayerState.BACK_DONE

        return Deferred(lambda: backend.matmul(backend.transpose(w), dA)), cost

    def read(self):
        self._require_weights()
        return {
            "weights": self.weights.w.copy(),
            "biases": self.biases.w.copy(),
        }

    def restore(self, parameters):
        weights = self._check_bundle(parameters, ["weights", "biases"])
        biases = backend.as_matrix(parameters["biases"], copy=True)
        if biases.shape != (self.width(), 1):
            raise ValueError(
                f"Biases must have shape {(self.width(), 1)}, got {biases.shape}."
            )
        self.weights = Parameter(weights)
        self.biases = Parameter(biases)
        self.state = LayerState.UNINITIALIZED
        self._clear_memo()
