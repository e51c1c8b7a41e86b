import numpy as np

from ..datasets.Labeled import Labeled, CATEGORICAL
from ..exceptions import ModelNotFit
from ..helpers.Backend import backend, EPSILON

TWO_PI = 2.0 * np.pi


class GaussianNB:
    """
    Gaussian Naive Bayes with online (streaming) training.

    Each class keeps a running sample weight and a running mean and variance
    per feature column. ``partial`` merges a new batch into those summaries
    without revisiting earlier samples, so memory is O(batch).

    Attributes
    ----------
    classes: list
        Class labels in the order fixed by ``train``.
    weights: ndarray, shape=(n_classes,)
        Number of samples seen per class.
    feature_means, feature_variances: ndarray, shape=(n_classes, n_features)
        Running per-feature statistics. Variances never drop below epsilon.
    log_priors: ndarray, shape=(n_classes,)
        Prior log probabilities derived from ``weights``.
    """
    def __init__(self, epsilon=EPSILON):
        self.epsilon = epsilon
        self.classes = []
        self._index = {}
        self.weights = None
        self.log_priors = None
        self.feature_means = None
        self.feature_variances = None

    def __repr__(self):
        return "<GaussianNB classes=%d, fitted=%s>" % (len(self.classes), self.fitted)

    @property
    def fitted(self):
        return self.weights is not None

    # ---------- accessors ----------
    def priors(self):
        """Class prior log probabilities keyed by class."""
        self._require_fit()
        return dict(zip(self.classes, self.log_priors.tolist()))

    def means(self):
        self._require_fit()
        return {c: self.feature_means[i].copy() for c, i in self._index.items()}

    def variances(self):
        self._require_fit()
        return {c: self.feature_variances[i].copy() for c, i in self._index.items()}

    # ---------- training ----------
    def train(self, dataset):
        """
        Fix the class set from the dataset's labels, reset all statistics and
        fit on the dataset.
        """
        self._check_dataset(dataset)

        self.classes = dataset.possible_outcomes()
        self._index = {label: i for i, label in enumerate(self.classes)}

        k, d = len(self.classes), dataset.num_columns()
        self.weights = backend.zeros(k)
        self.log_priors = backend.zeros(k)
        self.feature_means = backend.zeros((k, d))
        self.feature_variances = backend.zeros((k, d))

        self.partial(dataset)

    def partial(self, dataset):
        """
        Update the running means and variances of each feature column with
        the samples in ``dataset``.
        """
        self._check_dataset(dataset)

        if not self.fitted:
            self.train(dataset)
            return

        if dataset.num_columns() != self.feature_means.shape[1]:
            raise ValueError(
                f"Dataset has {dataset.num_columns()} columns, "
                f"estimator was trained on {self.feature_means.shape[1]}."
            )

        unknown = [c for c in dataset.possible_outcomes() if c not in self._index]
        if unknown:
            raise ValueError(f"Labels {unknown} were not seen by train.")

        eps = self.epsilon

        for label, samples in dataset.stratify().items():
            i = self._index[label]

            n = samples.shape[0]
            weight = self.weights[i]
            total = weight + n + eps

            old_mean = self.feature_means[i].copy()
            old_variance = self.feature_variances[i]

            mean = samples.mean(axis=0)
            ssd = backend.sum((samples - mean) ** 2, axis=0)

            self.feature_means[i] = (n * mean + weight * old_mean) / total

            ssd = (weight * old_variance
                   + ssd
                   + (weight / (n * total))
                   * (n * old_mean - n * mean) ** 2)

            self.feature_variances[i] = ssd / total + eps

            self.weights[i] += n

        total = self.weights.sum() + eps

        self.log_priors = np.log((self.weights + eps) / total)

    # ---------- inference ----------
    def predict(self, samples):
        """
        Return the class with the highest joint log likelihood for each
        sample. Ties go to the class that comes first in ``classes``.
        """
        jll = self.joint_log_likelihood(samples)
        return [self.classes[i] for i in np.argmax(jll, axis=1)]

    def predict_sample(self, sample):
        return self.predict([sample])[0]

    def proba(self, samples):
        """
        Return one {class: probability} mapping per sample.
        """
        jll = self.joint_log_likelihood(samples)

        # shifted by the row maximum so the largest term is exp(0)
        e = np.exp(jll - jll.max(axis=1, keepdims=True))
        probabilities = e / e.sum(axis=1, keepdims=True)

        return [dict(zip(self.classes, row.tolist())) for row in probabilities]

    def joint_log_likelihood(self, samples):
        """
        Parameters
        ----------
        samples: array-like, shape=(n_samples, n_features)

        Returns
        -------
        jll: ndarray, shape=(n_samples, n_classes)
            log prior + sum over features of the Gaussian log density.
        """
        self._require_fit()

        samples = samples.samples if isinstance(samples, Labeled) else samples
        x = backend.as_matrix(samples)
        if np.ndim(samples) == 1:
            x = x.T
        if x.shape[1] != self.feature_means.shape[1]:
            raise ValueError(
                f"Samples have {x.shape[1]} features, expected {self.feature_means.shape[1]}."
            )

        # (n_samples, 1, n_features) against (n_classes, n_features)
        diff = x[:, None, :] - self.feature_means[None, :, :]
        pdf = -0.5 * np.log(TWO_PI * self.feature_variances)[None, :, :]
        pdf = pdf - 0.5 * diff ** 2 / self.feature_variances[None, :, :]

        return self.log_priors[None, :] + pdf.sum(axis=2)

    def _check_dataset(self, dataset):
        if not isinstance(dataset, Labeled):
            raise TypeError("This estimator requires a Labeled training set.")
        if CATEGORICAL in dataset.column_types():
            raise ValueError("This estimator only works with continuous features.")

    def _require_fit(self):
        if not self.fitted:
            raise ModelNotFit("The estimator has not been trained.")
