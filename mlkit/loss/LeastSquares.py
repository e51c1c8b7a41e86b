from .CostFunction import CostFunction


class LeastSquares(CostFunction):
    def compute(self, expected, activation):
        return 0.5 * (activation - expected) ** 2

    def differentiate(self, expected, activation, computed=None):
        return activation - expected
