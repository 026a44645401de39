"""
Core data models for the POM Version Manager.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FileOutcome(Enum):
    """Enumeration of the possible results of processing one POM."""
    UNMODIFIED = "unmodified"
    MODIFIED = "modified"
    FAILED = "failed"


@dataclass(frozen=True)
class VersionlessProjectKey:
    """groupId:artifactId identity, used to look up BOM-managed versions."""
    group_id: str
    artifact_id: str

    def __str__(self):
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class ProjectKey:
    """Full groupId:artifactId:version coordinate of a Maven project."""
    group_id: str
    artifact_id: str
    version: str

    def versionless(self) -> VersionlessProjectKey:
        """Drop the version, keeping the groupId:artifactId identity."""
        return VersionlessProjectKey(self.group_id, self.artifact_id)

    def __str__(self):
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


@dataclass(frozen=True)
class SessionError:
    """An error recorded during a run. ``pom`` is None for global errors."""
    error: Exception
    pom: Optional[str] = None

    @property
    def is_global(self) -> bool:
        return self.pom is None

    def __str__(self):
        if self.pom:
            return f"{self.pom}: {self.error}"
        return str(self.error)


@dataclass(frozen=True)
class ChangeRecord:
    """A single modification made to a POM."""
    pom: str
    description: str


@dataclass(frozen=True)
class MissingVersion:
    """A dependency declaring a literal version that no BOM manages."""
    pom: str
    key: VersionlessProjectKey
    version: str
