from .SoftmaxOutput import SoftmaxOutput
from .MulticlassOutput import MulticlassOutput

OUTPUT_LAYERS = {
    "softmax": SoftmaxOutput,
    "multiclass": MulticlassOutput,
}


def build_output_layer(kind, classes, **options):
    """
    Construct an output layer by name.

    kind: "softmax" (fixed cross-entropy, two-phase back/update) or
          "multiclass" (pluggable cost, biases)
    options: forwarded to the layer, e.g. alpha, cost_function
    """
    try:
        layer_cls = OUTPUT_LAYERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown output layer {kind!r}, expected one of {sorted(OUTPUT_LAYERS)}."
        ) from None
    return layer_cls(classes, **options)
