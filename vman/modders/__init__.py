"""
Modders Module

Contains the pluggable units that rewrite versions and properties in a project.
"""

from typing import List

from .base import ProjectModder
from .bom_modder import BomModder
from .property_modder import PropertyModder
from .toolchain_modder import ToolchainModder

# Fixed execution order
DEFAULT_MODDERS = (ToolchainModder, BomModder, PropertyModder)


def create_modders() -> List[ProjectModder]:
    """Instantiate the default modder pipeline, in order."""
    return [modder_class() for modder_class in DEFAULT_MODDERS]


__all__ = [
    "ProjectModder",
    "BomModder",
    "PropertyModder",
    "ToolchainModder",
    "DEFAULT_MODDERS",
    "create_modders",
]
