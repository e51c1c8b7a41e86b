import numbers

import numpy as np

from ..helpers.Backend import backend

CONTINUOUS = "continuous"
CATEGORICAL = "categorical"


def _is_continuous(value):
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class Labeled:
    """
    In-memory samples (one row per sample) paired with their labels.
    """
    def __init__(self, samples, labels):
        samples = [list(row) for row in samples]
        labels = list(labels)

        if len(samples) == 0:
            raise ValueError("A dataset needs at least one sample.")
        if len(samples) != len(labels):
            raise ValueError(
                f"Got {len(samples)} samples but {len(labels)} labels."
            )
        n_columns = len(samples[0])
        if any(len(row) != n_columns for row in samples):
            raise ValueError("All samples must have the same number of columns.")

        self.samples = samples
        self.labels = labels

    def __len__(self):
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    def num_rows(self):
        return len(self.samples)

    def num_columns(self):
        return len(self.samples[0])

    def column_types(self):
        types = []
        for column in zip(*self.samples):
            types.append(CONTINUOUS if all(_is_continuous(v) for v in column) else CATEGORICAL)
        return types

    def possible_outcomes(self):
        """Unique labels in the order they first appear."""
        return list(dict.fromkeys(self.labels))

    def samples_array(self):
        return backend.array(self.samples)

    def stratify(self):
        """Map each label to a float array (n_label, n_columns) of its samples."""
        strata = {}
        for sample, label in zip(self.samples, self.labels):
            strata.setdefault(label, []).append(sample)
        return {label: backend.array(rows) for label, rows in strata.items()}

    def batch(self, start, end):
        return Labeled(self.samples[start:end], self.labels[start:end])

    def randomize(self, rng=None):
        """Return a copy with rows in a random order."""
        rng = rng if rng is not None else backend.random
        order = rng.permutation(len(self.samples))
        return Labeled([self.samples[i] for i in order], [self.labels[i] for i in order])

    def merge(self, other):
        if other.num_columns() != self.num_columns():
            raise ValueError("Cannot merge datasets with different column counts.")
        return Labeled(self.samples + other.samples, self.labels + other.labels)
