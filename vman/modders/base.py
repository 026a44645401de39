"""
Abstract base class for project modders.
"""

from abc import ABC, abstractmethod

from ..project import Project
from ..session import VersionManagerSession


class ProjectModder(ABC):
    """A unit that rewrites part of a project's in-memory POM."""
    
    @abstractmethod
    def inject(self, project: Project, session: VersionManagerSession) -> bool:
        """
        Apply this modder's changes to a project.
        
        The document is modified in place; writing it to disk is left to the caller.
        
        Args:
            project: Project to modify
            session: Session supplying BOM versions, mappings and the change ledger
            
        Returns:
            True if the project was changed, False otherwise
        """
        pass
    
    @abstractmethod
    def get_description(self) -> str:
        """
        Get a short description of what this modder does.
        
        Returns:
            Human-readable description used in logs and reports
        """
        pass

    def __repr__(self):
        return type(self).__name__
