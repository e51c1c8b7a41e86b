from .Layer import Output, LayerState
from .Parameter import Parameter
from .Deferred import Deferred
from .SoftmaxOutput import SoftmaxOutput
from .MulticlassOutput import MulticlassOutput
from .factory import build_output_layer, OUTPUT_LAYERS

__all__ = [
    "Output",
    "LayerState",
    "Parameter",
    "Deferred",
    "SoftmaxOutput",
    "MulticlassOutput",
    "build_output_layer",
    "OUTPUT_LAYERS",
]
