class Deferred:
    """
    Zero-argument callable that evaluates ``fn`` on first call and caches it.

    Output layers return the gradient for the preceding layer this way so a
    caller that discards it never pays for the matrix product.
    """
    def __init__(self, fn):
        self._fn = fn
        self._result = None
        self.computed = False

    def __call__(self):
        if not self.computed:
            self._result = self._fn()
            self._fn = None
            self.computed = True
        return self._result
