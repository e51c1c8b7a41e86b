import unittest

import numpy as np

from mlkit.activations import Softmax


class TestSoftmax(unittest.TestCase):

    def test_columns_sum_to_one(self):
        z = np.random.RandomState(0).randn(5, 8)
        computed = Softmax().compute(z)
        self.assertLess(np.abs(computed.sum(axis=0) - 1.0).max(), 1e-6)
        self.assertTrue(np.all(computed > 0.0))

    def test_matches_shifted_softmax_for_moderate_inputs(self):
        z = np.array([[1.0, -3.0], [2.0, 0.5], [0.0, 0.0]])
        shifted = np.exp(z - z.max(axis=0)) / np.exp(z - z.max(axis=0)).sum(axis=0)
        np.testing.assert_allclose(Softmax().compute(z), shifted, rtol=1e-6)

    def test_underflow_is_guarded(self):
        computed = Softmax().compute(np.full((3, 1), -1e4))
        self.assertTrue(np.all(np.isfinite(computed)))
        np.testing.assert_array_equal(computed, np.zeros((3, 1)))

    def test_differentiate(self):
        computed = np.array([[0.2], [0.8]])
        np.testing.assert_allclose(
            Softmax().differentiate(None, computed), [[0.16], [0.16]])


if __name__ == '__main__':
    unittest.main()
