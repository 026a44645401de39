"""
POM Module

Contains the partial-parse coordinate scanner and the POM document model used
to read, modify and write Maven POM files.
"""

from .document import Dependency, Parent, Plugin, PomDocument
from .peek import PomPeek

__all__ = [
    "Dependency",
    "Parent",
    "Plugin",
    "PomDocument",
    "PomPeek",
]
