"""Reusable type definitions for key synchronization."""

from .base import StrictBaseModel, WireModel
from .keys import DeleteStatus, ImportStatus, KeyStatus, PublicKey

__all__ = [
    "DeleteStatus",
    "ImportStatus",
    "KeyStatus",
    "PublicKey",
    "StrictBaseModel",
    "WireModel",
]
