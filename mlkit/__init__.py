from .classifiers import GaussianNB, SoftmaxClassifier
from .datasets import Labeled
from .exceptions import LayerStateError, ModelNotFit
from .layers import SoftmaxOutput, MulticlassOutput, build_output_layer

__version__ = "0.1.0"

__all__ = [
    "GaussianNB",
    "SoftmaxClassifier",
    "Labeled",
    "LayerStateError",
    "ModelNotFit",
    "SoftmaxOutput",
    "MulticlassOutput",
    "build_output_layer",
]
