from ..helpers.logger import get_logger

logger = get_logger(__name__)


class EarlyStopping:
    """
    Stop training once ``monitor`` has not improved by more than
    ``min_delta`` for ``patience`` consecutive epochs.

    The tracked model must provide snapshot() and load_snapshot(snapshot);
    with ``restore_best_weights`` the best snapshot is loaded back on stop.
    ``baseline``, if given, is the value the metric has to beat before any
    epoch counts as an improvement.
    """
    def __init__(
        self,
        patience=5,
        min_delta=0.0,
        monitor="val_loss",
        mode="min",
        restore_best_weights=True,
        baseline=None,
    ):
        if patience < 1:
            raise ValueError("Patience must be at least 1.")
        if min_delta < 0:
            raise ValueError("min_delta must be non-negative.")
        if mode not in ("min", "max"):
            raise ValueError("Mode must be 'min' or 'max'.")

        self.monitor = monitor
        self.mode = mode
        self.patience = patience
        self.min_delta = float(min_delta)
        self.restore_best_weights = restore_best_weights
        self.baseline = baseline
        self.reset()

    def reset(self):
        self.best = self.baseline
        self.best_epoch = -1
        self.wait = 0
        self.stopped = False
        self._snapshot = None

    def improved(self, value):
        if self.best is None:
            return True
        if self.mode == "min":
            return value < self.best - self.min_delta
        return value > self.best + self.min_delta

    def update(self, epoch, metrics, model):
        """Record one epoch; returns True when training should stop."""
        if self.monitor not in metrics:
            raise KeyError("Metric '%s' is not being recorded." % self.monitor)

        value = metrics[self.monitor]
        if self.improved(value):
            self.best, self.best_epoch, self.wait = value, epoch, 0
            self._snapshot = model.snapshot()
            return False

        self.wait += 1
        if self.wait < self.patience:
            return False

        self.stopped = True
        if self.restore_best_weights and self._snapshot is not None:
            logger.debug("Restoring parameters from epoch %d.", self.best_epoch)
            model.load_snapshot(self._snapshot)
        return True
