from .CostFunction import CostFunction
from ..helpers.Backend import backend, EPSILON


class CrossEntropy(CostFunction):
    def __init__(self, eps=EPSILON):
        self.eps = eps

    def compute(self, expected, activation):
        """
        expected: one-hot targets, activation: softmax outputs, same shape
        returns: per-element cost -expected * log(activation)
        """
        return -expected * backend.log(activation + self.eps)

    def differentiate(self, expected, activation, computed=None):
        return (activation - expected) / ((1.0 - activation) * activation + self.eps)
