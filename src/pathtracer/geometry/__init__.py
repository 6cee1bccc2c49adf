"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with closed-form intersection and HitRecord
"""

from .sphere import HitRecord, Sphere

__all__ = [
    "HitRecord",
    "Sphere",
]
