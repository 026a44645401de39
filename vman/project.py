"""
Project abstraction over a fully parsed POM.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import PomParseError
from .models import ProjectKey
from .pom.document import Dependency, Parent, Plugin, PomDocument

PROPERTY_REFERENCE = re.compile(r"\$\{([^}]+)\}")


def _interpolate(value: Optional[str], properties: Dict[str, str]) -> Optional[str]:
    if not value:
        return value
    return PROPERTY_REFERENCE.sub(lambda m: properties.get(m.group(1), m.group(0)), value)


class Project:
    """
    One build unit: a POM path, its coordinate key and its parsed document.

    Equality and hashing use the key only, so two Project instances for the same
    coordinate are the same build unit even if their documents differ.
    """

    def __init__(self, key: ProjectKey, pom: Union[str, Path], document: PomDocument):
        self.key = key
        self.pom = Path(pom)
        self.document = document

    @classmethod
    def from_document(cls, document: PomDocument, pom: Optional[Union[str, Path]] = None) -> "Project":
        """
        Build a Project, deriving the key from the document's coordinates.

        A missing groupId or version is taken from the parent reference, and
        ``${name}`` references to the POM's own properties are substituted
        once. Unresolved references stay in the key as written.

        Raises:
            PomParseError: If a coordinate part is missing
        """
        pom = pom or document.path
        parent = document.get_parent()
        properties = document.get_properties() or {}
        group_id = document.group_id or (parent.group_id if parent else None)
        version = document.version or (parent.version if parent else None)
        parts = [_interpolate(part, properties) for part in (group_id, document.artifact_id, version)]

        if not all(parts):
            raise PomParseError(
                f"invalid project coordinate {group_id}:{document.artifact_id}:{version}",
                file_path=str(pom) if pom else None
            )
        return cls(ProjectKey(*parts), pom, document)

    @classmethod
    def load(cls, pom: Union[str, Path]) -> "Project":
        return cls.from_document(PomDocument.load(pom), pom)

    @property
    def group_id(self) -> str:
        return self.key.group_id

    @property
    def artifact_id(self) -> str:
        return self.key.artifact_id

    @property
    def version(self) -> str:
        return self.key.version

    def parent(self) -> Optional[Parent]:
        return self.document.get_parent()

    def properties(self) -> Dict[str, str]:
        return self.document.get_properties() or {}

    def dependencies(self) -> List[Dependency]:
        return self.document.get_dependencies() or []

    def managed_dependencies(self) -> List[Dependency]:
        return self.document.get_managed_dependencies() or []

    def plugins(self) -> List[Plugin]:
        return self.document.get_plugins() or []

    def managed_plugins(self) -> List[Plugin]:
        return self.document.get_managed_plugins() or []

    def report_plugins(self) -> List[Plugin]:
        return self.document.get_report_plugins() or []

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Project):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return f"{self.key} [pom={self.pom}]"
