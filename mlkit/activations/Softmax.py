from ..helpers.Backend import backend, EPSILON


class Softmax:
    """
    Column-wise softmax: each column of z is one sample.

    The exponentials are not shifted by the column maximum, so very large
    pre-activations overflow to inf and produce nan probabilities.
    """
    def __init__(self, epsilon=EPSILON):
        self.epsilon = epsilon

    def compute(self, z):
        """
        z: (width, batch)
        returns: (width, batch), each column sums to ~1
        """
        exp_z = backend.exp(z)
        return exp_z / (backend.sum(exp_z, axis=0, keepdims=True) + self.epsilon)

    def differentiate(self, z, computed):
        # diagonal of the softmax Jacobian
        return computed * (1.0 - computed)
