"""CLI commands for Nomina."""

from . import (
    generate,
    inspect,
    transform,
    config_cmd,
)

__all__ = [
    "generate",
    "inspect",
    "transform",
    "config_cmd",
]
