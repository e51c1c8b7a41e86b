# mlkit/helpers/logger.py
import csv
import datetime
import json
import logging
import pathlib

import numpy as np
import matplotlib.pyplot as plt

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "log.txt"
ROOT_LOGGER = "mlkit"


def get_logger(name=ROOT_LOGGER, level=logging.INFO):
    """
    Return a logger below the package logger. The package logger gets one
    stream handler the first time any logger is requested.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)
        root.setLevel(level)
    return logging.getLogger(name)


class RunLogger:
    """
    Output directory for one training run.

    ``<root>/<tag>_<timestamp>/`` receives history.csv and history.json (one
    row per epoch), checkpoint_best.npz / checkpoint_last.npz (a layer
    parameter bundle), log.txt (a copy of the package log) and plots/.
    """
    def __init__(self, root="runs", tag="run", logger=None):
        stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        self.dir = pathlib.Path(root) / f"{tag}_{stamp}"
        self.dir.mkdir(parents=True, exist_ok=True)

        self.csv_path = self.dir / "history.csv"
        self.json_path = self.dir / "history.json"
        self.log_path = self.dir / LOG_FILENAME
        self.rows = []

        self.logger = logger or get_logger()
        self._handler = logging.FileHandler(self.log_path, mode="w")
        self._handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        self.logger.addHandler(self._handler)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---------- history ----------
    def log_epoch(self, epoch, **values):
        self.rows.append(dict(epoch=int(epoch), **{k: float(v) for k, v in values.items()}))
        # rewritten each epoch so columns first seen later still get a header
        fields = []
        for row in self.rows:
            fields.extend(k for k in row if k not in fields)
        with open(self.csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fields)
            writer.writeheader()
            writer.writerows(self.rows)

    def save_json(self):
        self.json_path.write_text(json.dumps(self.rows, indent=2))

    def close(self):
        if self._handler is None:
            return
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    # ---------- checkpoints ----------
    def checkpoint_path(self, best=False):
        return self.dir / ("checkpoint_best.npz" if best else "checkpoint_last.npz")

    def save_checkpoint(self, parameters, best=False):
        """Write a layer parameter bundle (name -> array) as npz."""
        path = self.checkpoint_path(best)
        np.savez(path, **parameters)
        return str(path)

    def load_checkpoint(self, best=False):
        with np.load(self.checkpoint_path(best)) as data:
            return {name: data[name].copy() for name in data.files}

    # ---------- plotting ----------
    def plot_loss(self, history, tag="run", subdir="plots"):
        """Save the train/validation cost curves as loss_curve_<tag>_epochs_<n>.png."""
        curves = [(key, history.get(key, [])) for key in ("loss", "val_loss")]
        curves = [(key, values) for key, values in curves if len(values) > 0]
        epochs = max([len(values) for _, values in curves], default=0)

        outdir = self.dir / subdir
        outdir.mkdir(parents=True, exist_ok=True)
        path = outdir / f"loss_curve_{tag}_epochs_{epochs}.png"

        fig, ax = plt.subplots()
        for key, values in curves:
            ax.plot(range(1, len(values) + 1), values, label=key.replace("_", " "))
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Cost per sample")
        ax.set_title(f"{tag}: cost per epoch")
        if curves:
            ax.legend()
        fig.tight_layout()
        fig.savefig(path, dpi=160)
        plt.close(fig)
        return str(path)
