"""
Abstract base classes for report generation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..session import VersionManagerSession


class ReportGenerator(ABC):
    """Abstract base class for report generators."""
    
    @abstractmethod
    def generate_report(self, session: VersionManagerSession, output_path: Optional[str] = None) -> str:
        """
        Generate a report from the state accumulated in a session.
        
        Args:
            session: Session of a finished run
            output_path: Optional path to write report to file
            
        Returns:
            Report content as string
        """
        pass
    
    @abstractmethod
    def get_format_name(self) -> str:
        """
        Get the name of the report format.
        
        Returns:
            String identifier for the report format (e.g., "json", "text")
        """
        pass

    def get_file_name(self) -> str:
        """File name used when the report is written into a reports directory."""
        return f"vman-report.{self.get_format_name()}"
