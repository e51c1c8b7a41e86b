class CostFunction:
    # Elementwise over arrays of expected values and activations
    def compute(self, expected, activation):
        raise NotImplementedError

    def differentiate(self, expected, activation, computed=None):
        raise NotImplementedError
