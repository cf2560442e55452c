# src/margee_lib/transform/__init__.py
"""Rigid rotation and translation of coordinate sequences."""

from .batch import BatchCommand, parse_batch
from .config import OperationKind, TransformRequest
from .operations import rotate_coordinates, rotate_point, translate_coordinates
from .runner import apply

__all__ = [
    "BatchCommand",
    "OperationKind",
    "TransformRequest",
    "apply",
    "parse_batch",
    "rotate_coordinates",
    "rotate_point",
    "translate_coordinates",
]
