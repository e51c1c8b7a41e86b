import unittest

import numpy as np

from mlkit.classifiers import GaussianNB
from mlkit.datasets import Labeled
from mlkit.exceptions import ModelNotFit
from mlkit.helpers.Backend import EPSILON


def make_blobs(random_state, n, centers, scale=0.1):
    samples, labels = [], []
    for label, center in centers.items():
        points = center + scale * random_state.randn(n, len(center))
        samples.extend(points.tolist())
        labels.extend([label] * n)
    return Labeled(samples, labels)


class TestGaussianNB(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def test_separable_one_feature(self):
        dataset = Labeled(
            [[-1.1], [-1.0], [-0.9], [-1.05], [0.9], [1.0], [1.1], [0.95]],
            [0, 0, 0, 0, 1, 1, 1, 1])

        estimator = GaussianNB()
        estimator.train(dataset)

        self.assertEqual(estimator.predict_sample([0.9]), 1)
        self.assertEqual(estimator.predict_sample([-0.9]), 0)
        self.assertEqual(estimator.predict([[0.9], [-0.9]]), [1, 0])

    def test_priors_sum_to_one(self):
        dataset = make_blobs(self.random_state, 10, {
            "a": np.r_[0., 0.], "b": np.r_[3., 3.], "c": np.r_[-3., 3.]})
        dataset = dataset.merge(make_blobs(self.random_state, 5, {"a": np.r_[0., 0.]}))

        estimator = GaussianNB()
        estimator.train(dataset)

        priors = estimator.priors()
        self.assertAlmostEqual(sum(np.exp(p) for p in priors.values()), 1.0, places=6)
        self.assertAlmostEqual(np.exp(priors["a"]), 15 / 35, places=6)

    def test_first_batch_statistics(self):
        dataset = make_blobs(self.random_state, 50, {"a": np.r_[1., -2.], "b": np.r_[0., 5.]})
        estimator = GaussianNB()
        estimator.train(dataset)

        strata = dataset.stratify()
        for label, samples in strata.items():
            np.testing.assert_allclose(estimator.means()[label], samples.mean(axis=0), rtol=1e-6)
            np.testing.assert_allclose(estimator.variances()[label], samples.var(axis=0), rtol=1e-5)

    def test_incremental_merge_matches_single_pass(self):
        centers = {"a": np.r_[0., 1., 2.], "b": np.r_[-2., 0., 4.]}
        batch_a = make_blobs(self.random_state, 17, centers, scale=0.7)
        batch_b = make_blobs(self.random_state, 9, {"a": np.r_[0.5, 1.5, 1.]}, scale=1.3)
        batch_c = make_blobs(self.random_state, 23, centers, scale=0.2)

        streamed = GaussianNB()
        streamed.partial(batch_a)
        streamed.partial(batch_b)
        streamed.partial(batch_c)

        single = GaussianNB()
        single.partial(batch_a.merge(batch_b).merge(batch_c))

        for label in ("a", "b"):
            np.testing.assert_allclose(
                streamed.means()[label], single.means()[label], rtol=1e-6, atol=1e-6)
            np.testing.assert_allclose(
                streamed.variances()[label], single.variances()[label], rtol=1e-6, atol=1e-6)
        np.testing.assert_allclose(streamed.weights, single.weights)

    def test_variance_floor(self):
        dataset = Labeled([[1.0, 2.0], [1.0, 2.0], [5.0, 5.0]], ["x", "x", "y"])
        estimator = GaussianNB()
        estimator.train(dataset)
        estimator.partial(Labeled([[1.0, 2.0]], ["x"]))

        for variance in estimator.variances().values():
            self.assertTrue(np.all(variance >= EPSILON))

    def test_partial_on_untrained_acts_as_train(self):
        dataset = make_blobs(self.random_state, 5, {"a": np.r_[0.], "b": np.r_[1.]})
        estimator = GaussianNB()
        estimator.partial(dataset)
        self.assertEqual(estimator.classes, ["a", "b"])
        np.testing.assert_array_equal(estimator.weights, [5.0, 5.0])

    def test_train_resets_statistics(self):
        dataset = make_blobs(self.random_state, 5, {"a": np.r_[0.], "b": np.r_[1.]})
        estimator = GaussianNB()
        estimator.train(dataset)
        estimator.partial(dataset)
        estimator.train(dataset)
        np.testing.assert_array_equal(estimator.weights, [5.0, 5.0])

    def test_proba_rows_sum_to_one(self):
        dataset = make_blobs(self.random_state, 20, {"a": np.r_[0., 0.], "b": np.r_[1., 1.]}, scale=0.5)
        estimator = GaussianNB()
        estimator.train(dataset)

        probabilities = estimator.proba([[0., 0.], [1., 1.], [0.5, 0.5]])
        self.assertEqual(len(probabilities), 3)
        for row in probabilities:
            self.assertEqual(set(row), {"a", "b"})
            self.assertAlmostEqual(sum(row.values()), 1.0, places=9)
        self.assertGreater(probabilities[0]["a"], probabilities[0]["b"])
        self.assertGreater(probabilities[1]["b"], probabilities[1]["a"])

    def test_proba_well_separated_classes(self):
        # joint log likelihoods far below exp underflow
        dataset = make_blobs(self.random_state, 20, {"a": np.r_[0.], "b": np.r_[100.]}, scale=0.01)
        estimator = GaussianNB()
        estimator.train(dataset)

        row = estimator.proba([[50.0]])[0]
        self.assertFalse(np.isnan(list(row.values())).any())
        self.assertAlmostEqual(sum(row.values()), 1.0, places=9)

    def test_proba_exact_normalization_at_large_magnitude(self):
        # zero-spread classes leave only the variance floor, so the
        # joint log likelihoods at the midpoint are around -5e7
        dataset = Labeled([[0.0], [0.0], [2.0], [2.0]], ["a", "a", "b", "b"])
        estimator = GaussianNB()
        estimator.train(dataset)

        self.assertLess(estimator.joint_log_likelihood([[1.0]]).max(), -1e7)
        row = estimator.proba([[1.0]])[0]
        self.assertAlmostEqual(sum(row.values()), 1.0, delta=1e-12)

    def test_ties_go_to_first_class(self):
        dataset = Labeled([[-1.0], [1.0], [-1.0], [1.0]], ["first", "first", "second", "second"])
        estimator = GaussianNB()
        estimator.train(dataset)
        self.assertEqual(estimator.predict_sample([0.3]), "first")

    def test_rejects_categorical_features(self):
        dataset = Labeled([[1.0, "red"], [2.0, "blue"]], ["a", "b"])
        with self.assertRaises(ValueError):
            GaussianNB().train(dataset)

    def test_rejects_unlabeled_data(self):
        with self.assertRaises(TypeError):
            GaussianNB().train([[1.0], [2.0]])
        with self.assertRaises(TypeError):
            GaussianNB().partial([[1.0], [2.0]])

    def test_rejects_unknown_labels_and_columns(self):
        estimator = GaussianNB()
        estimator.train(Labeled([[0.0], [1.0]], ["a", "b"]))
        with self.assertRaises(ValueError):
            estimator.partial(Labeled([[0.5]], ["c"]))
        with self.assertRaises(ValueError):
            estimator.partial(Labeled([[0.5, 1.0]], ["a"]))

    def test_predict_before_train(self):
        with self.assertRaises(ModelNotFit):
            GaussianNB().predict([[1.0]])
        with self.assertRaises(ModelNotFit):
            GaussianNB().priors()


if __name__ == '__main__':
    unittest.main()
