from .Backend import Backend, backend, EPSILON, DEFAULT_FLOAT
from .logger import RunLogger, get_logger

__all__ = [
    "Backend",
    "backend",
    "EPSILON",
    "DEFAULT_FLOAT",
    "RunLogger",
    "get_logger",
]
