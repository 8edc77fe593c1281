"""Parametric meshes, deferred-shading resource layouts, light helpers and pass timings."""

__version__ = "0.1.0"
__all__ = ["mesh", "shapes", "resources", "lights", "timing"]