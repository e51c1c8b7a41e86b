from .Optimizer import Optimizer
from .SGDOptimizer import SGDOptimizer
from .AdamWOptimizer import AdamWOptimizer

__all__ = [
    "Optimizer",
    "SGDOptimizer",
    "AdamWOptimizer",
]
