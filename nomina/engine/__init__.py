"""Package registry and multi-suggestion generation."""

from .context import PackageContext
from .engine import NominaEngine

__all__ = ["NominaEngine", "PackageContext"]
