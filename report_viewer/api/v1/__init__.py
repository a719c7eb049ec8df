"""Version 1 API routers."""

from . import comparisons, health

__all__ = ["comparisons", "health"]
