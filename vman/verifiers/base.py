"""
Abstract base class for project verifiers.
"""

from abc import ABC, abstractmethod

from ..project import Project
from ..session import VersionManagerSession


class ProjectVerifier(ABC):
    """A check run against a project after all modders have been applied."""
    
    @abstractmethod
    def verify(self, project: Project, session: VersionManagerSession) -> None:
        """
        Inspect a project and record findings in the session.
        
        Verifiers never modify the project and never raise for problems in the
        project itself; findings are recorded against the project's POM.
        
        Args:
            project: Project to inspect
            session: Session receiving errors and findings
        """
        pass

    def __repr__(self):
        return type(self).__name__
