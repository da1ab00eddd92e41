"""A side-scrolling runner with generated terrain that is always reachable."""

__version__ = "0.1.0"
__all__ = ["__version__"]