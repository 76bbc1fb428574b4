"""Pydantic models for zplgfa."""

from zplgfa.models.graphic import GraphicField, GraphicType

__all__ = [
    "GraphicField",
    "GraphicType",
]
