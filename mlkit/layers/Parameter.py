from ..helpers.Backend import backend


class Parameter:
    """A trainable tensor; optimizers key their state on the handle."""
    def __init__(self, w):
        self.w = backend.astype_default(w)

    @property
    def shape(self):
        return self.w.shape

    def update(self, step):
        self.w -= step

    def copy(self):
        return Parameter(self.w.copy())
