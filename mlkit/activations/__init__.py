from .Softmax import Softmax

__all__ = [
    "Softmax",
]
