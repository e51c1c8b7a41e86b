from .GaussianNB import GaussianNB
from .SoftmaxClassifier import SoftmaxClassifier

__all__ = [
    "GaussianNB",
    "SoftmaxClassifier",
]
