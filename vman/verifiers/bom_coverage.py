"""
Verifier reporting dependencies that no BOM manages.
"""

from ..project import Project
from ..session import VersionManagerSession
from .base import ProjectVerifier


class BomCoverageVerifier(ProjectVerifier):
    """Records every dependency that still carries a literal version no BOM manages."""

    def verify(self, project: Project, session: VersionManagerSession) -> None:
        if not session.bom_versions:
            return

        for dependency in project.dependencies() + project.managed_dependencies():
            version = dependency.version
            if not version or "${" in version or dependency.is_bom_import:
                continue
            if session.get_bom_version(dependency.versionless_key) is None:
                session.add_missing_version(project.pom, dependency.versionless_key, version)
