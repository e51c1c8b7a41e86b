class LayerStateError(RuntimeError):
    """ Raised when a layer operation is called out of order, e.g. ``back``
    without a preceding ``forward``
    """


class ModelNotFit(Exception):
    """ Raised when trying access properties or methods that require a fitted
    model
    """
