"""Reusable type definitions for the peer checker."""

from .base import FrozenModel, StrictBaseModel

__all__ = [
    "FrozenModel",
    "StrictBaseModel",
]
