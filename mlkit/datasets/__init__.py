from .Labeled import Labeled, CONTINUOUS, CATEGORICAL

__all__ = [
    "Labeled",
    "CONTINUOUS",
    "CATEGORICAL",
]
