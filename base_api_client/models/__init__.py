"""
Models
======
Model, Collection and value types.
"""

from .common import ClientModel, Pagination
from .media import Media
from .base import (
    Model,
    ModelRegistry,
    get_mutator,
    set_mutator,
    models,
    register_model,
)
from .collection import Collection

__all__ = [
    "ClientModel",
    "Pagination",
    "Media",
    "Model",
    "ModelRegistry",
    "get_mutator",
    "set_mutator",
    "models",
    "register_model",
    "Collection",
]
