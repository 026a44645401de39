"""
Verifiers Module

Contains post-modification checks that record findings in the session.
"""

from typing import List

from .base import ProjectVerifier
from .bom_coverage import BomCoverageVerifier
from .plugin_version import PluginVersionVerifier

# Fixed execution order
DEFAULT_VERIFIERS = (BomCoverageVerifier, PluginVersionVerifier)


def create_verifiers() -> List[ProjectVerifier]:
    """Instantiate the default verifier pipeline, in order."""
    return [verifier_class() for verifier_class in DEFAULT_VERIFIERS]


__all__ = [
    "ProjectVerifier",
    "BomCoverageVerifier",
    "PluginVersionVerifier",
    "DEFAULT_VERIFIERS",
    "create_verifiers",
]
