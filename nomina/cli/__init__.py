"""Command line interface for Nomina."""

from .app import app

__all__ = ["app"]
