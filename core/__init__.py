"""Commerce-side shapes, dispatch results and ports shared by all layers."""

__version__ = "1.0.0"
