import time

import numpy as np

from ..datasets.Labeled import Labeled, CATEGORICAL
from ..early_stopping.EarlyStopping import EarlyStopping
from ..exceptions import ModelNotFit
from ..helpers.Backend import backend, EPSILON
from ..helpers.logger import RunLogger, get_logger
from ..layers.factory import build_output_layer
from ..optimizer.AdamWOptimizer import AdamWOptimizer

logger = get_logger(__name__)


class SoftmaxClassifier:
    """
    Multiclass classifier made of a single softmax output layer trained with
    mini-batch gradient descent.

    layer: "multiclass" (pluggable cost, biases) or "softmax" (fixed
           cross-entropy, two-phase back/update)
    seed:  if not None, fit() reseeds the shared ``backend`` generator, which
           also changes later draws of every other layer or dataset that
           uses ``backend.random``
    """
    def __init__(
        self,
        layer="multiclass",
        epochs=100,
        batch_size=32,
        alpha=1e-4,
        optimizer=None,
        cost_function=None,
        shuffle=True,
        seed=None,
        verbose=1,
    ):
        if epochs < 1:
            raise ValueError("Number of epochs must be at least 1.")
        if batch_size < 1:
            raise ValueError("Batch size must be at least 1.")
        if cost_function is not None and layer != "multiclass":
            raise ValueError("Only the multiclass layer takes a cost function.")

        self.layer_kind = layer
        self.epochs = epochs
        self.batch_size = batch_size
        self.alpha = alpha
        self.optimizer = optimizer
        self.cost_function = cost_function
        self.shuffle = shuffle
        self.seed = seed
        self.verbose = verbose

        self.layer = None
        self.history = None

    def __repr__(self):
        return "<SoftmaxClassifier layer=%s, epochs=%d, batch_size=%d>" % (
            self.layer_kind, self.epochs, self.batch_size)

    def fit(
        self,
        dataset,
        validation=None,
        early_stopping=None,
        patience=5,
        tag="run",
        runs_root=None,
    ):
        """
        Train the output layer on ``dataset``.

        Parameters
        ----------
        dataset: Labeled
            Training samples with continuous features.
        validation: Labeled, default=None
            If given, validation loss and accuracy are recorded each epoch.
        early_stopping: EarlyStopping or dict, default=None
            Stopping rule; built from ``patience`` when None and patience is
            not None.
        runs_root: str, default=None
            If given, a RunLogger writes history, checkpoints and a loss
            curve under this directory.

        Returns
        -------
        history: dict
            Lists keyed by 'loss' (and 'val_loss', 'val_acc').
        """
        if not isinstance(dataset, Labeled):
            raise TypeError("This estimator requires a Labeled training set.")
        if CATEGORICAL in dataset.column_types():
            raise ValueError("This estimator only works with continuous features.")

        if self.seed is not None:
            backend.seed(self.seed)

        options = {"alpha": self.alpha}
        if self.cost_function is not None:
            options["cost_function"] = self.cost_function
        self.layer = build_output_layer(self.layer_kind, dataset.possible_outcomes(), **options)

        optimizer = self.optimizer if self.optimizer is not None else AdamWOptimizer(lr=1e-3)
        self.layer.initialize(dataset.num_columns(), optimizer)

        history = {"loss": []}
        if validation is not None:
            history["val_loss"] = []
            history["val_acc"] = []

        if isinstance(early_stopping, dict):
            stopper = EarlyStopping(**early_stopping)
        else:
            stopper = early_stopping
        if stopper is None and patience is not None:
            monitor = "val_loss" if validation is not None else "loss"
            stopper = EarlyStopping(patience=patience, monitor=monitor, mode="min")
        if stopper is not None:
            stopper.reset()

        run_logger = RunLogger(root=runs_root, tag=tag) if runs_root is not None else None

        log_interval = max(1, self.epochs // 10)

        try:
            for ep in range(1, self.epochs + 1):
                t0 = time.time()
                data = dataset.randomize() if self.shuffle else dataset

                total_cost = 0.0
                for batch in self._batchify(data):
                    x = backend.transpose(batch.samples_array())  # (fan_in, batch)
                    self.layer.forward(x)
                    _, cost = self.layer.back(batch.labels, optimizer)
                    if hasattr(self.layer, "update"):
                        self.layer.update()
                    total_cost += cost

                train_loss = total_cost / len(dataset)
                history["loss"].append(train_loss)
                metrics = {"loss": train_loss}

                if validation is not None:
                    val_loss, val_acc = self.evaluate(validation)
                    history["val_loss"].append(val_loss)
                    history["val_acc"].append(val_acc)
                    metrics.update({"val_loss": val_loss, "val_acc": val_acc})

                if self.verbose > 0 and (ep % log_interval == 0 or ep == 1 or ep == self.epochs):
                    logger.info("Epoch %d/%d - %s", ep, self.epochs,
                                " - ".join(f"{k}: {v:.4f}" for k, v in metrics.items()))

                if run_logger is not None:
                    run_logger.log_epoch(ep, time_s=time.time() - t0, **metrics)
                    run_logger.save_checkpoint(self.layer.read(), best=False)
                    key = "val_loss" if validation is not None else "loss"
                    if metrics[key] <= np.min(history[key]):
                        run_logger.save_checkpoint(self.layer.read(), best=True)

                if stopper is not None and stopper.update(ep, metrics, self):
                    if self.verbose > 0:
                        logger.info("Early stopping at epoch %02d. Best %s=%.4f at epoch %02d.",
                                    ep, stopper.monitor, stopper.best, stopper.best_epoch)
                    break
        finally:
            if run_logger is not None:
                run_logger.save_json()
                run_logger.plot_loss(history, tag=tag)
                run_logger.close()

        self.history = history
        return history

    def evaluate(self, dataset):
        """Mean cross-entropy and accuracy of the current layer on ``dataset``."""
        probs = self._infer(dataset)
        index = {label: i for i, label in enumerate(self.layer.classes)}
        rows = np.array([index.get(label, -1) for label in dataset.labels])
        known = rows >= 0
        true_probs = np.zeros(len(rows))
        true_probs[known] = probs[rows[known], np.arange(len(rows))[known]]
        loss = float(-np.mean(np.log(true_probs + EPSILON)))
        acc = float(np.mean(np.argmax(probs, axis=0) == rows))
        return loss, acc

    def proba(self, samples):
        """Return one {class: probability} mapping per sample."""
        probs = self._infer(samples)
        return [dict(zip(self.layer.classes, col.tolist())) for col in probs.T]

    def predict(self, samples):
        probs = self._infer(samples)
        return [self.layer.classes[i] for i in np.argmax(probs, axis=0)]

    # ================== helpers ==================
    def _infer(self, samples):
        if self.layer is None:
            raise ModelNotFit("The classifier has not been fit.")
        samples = samples.samples if isinstance(samples, Labeled) else samples
        x = backend.astype_default(backend.asarray(samples))
        if x.ndim == 1:
            x = x.reshape(1, -1)
        return self.layer.infer(backend.transpose(x))

    def _batchify(self, dataset):
        N = len(dataset)
        start = 0
        while start < N:
            end = min(start + self.batch_size, N)
            yield dataset.batch(start, end)
            start = end

    def snapshot(self):
        return self.layer.read()

    def load_snapshot(self, snapshot):
        self.layer.restore(snapshot)
