"""
Partial-parse coordinate scanner for POM files.

Reads just enough of a POM (its own coordinate, its parent coordinate, the
parent relative path, the packaging and the declared modules) to place it in a
project ancestry graph, without building a full document model.
"""

from pathlib import Path
from typing import Dict, List, Optional, Set
from xml.etree.ElementTree import ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from ..logging_config import get_logger
from ..models import ProjectKey

logger = get_logger('pom.peek')

G = "g"
A = "a"
V = "v"
PG = "pg"
PA = "pa"
PV = "pv"
PKG = "pkg"
PRP = "prp"

COORD_KEYS = (G, A, V, PG, PA, PV, PKG, PRP)

CAPTURED_PATHS = {
    "project:groupId": G,
    "project:artifactId": A,
    "project:version": V,
    "project:packaging": PKG,
    "project:parent:groupId": PG,
    "project:parent:artifactId": PA,
    "project:parent:version": PV,
    "project:parent:relativePath": PRP,
}

MODULE_ELEM = "module"
MODULES_ELEM = "modules"

# Element names that show up as values when a scanner mistakes a tag for its text
SENTINEL_VALUES = {
    "groupId", "artifactId", "version",
    "parentGroupId", "parentArtifactId", "parentVersion",
}

UNAVAILABLE_NOTE = ("This POM will NOT be available as an ancestor to other "
                    "projects during version alignment.")


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1] if '}' in tag else tag


def is_valid_coordinate_part(value: Optional[str]) -> bool:
    """
    Check whether a scanned groupId/artifactId/version value is usable.

    Args:
        value: Trimmed element text, or None when the element was absent

    Returns:
        True if the value is non-empty, has no unresolved ${...} expression
        and is not one of the scanner sentinel strings
    """
    if not value:
        return False
    if "${" in value:
        return False
    return value not in SENTINEL_VALUES


def make_key(group_id: Optional[str], artifact_id: Optional[str],
             version: Optional[str]) -> Optional[ProjectKey]:
    """Build a ProjectKey, or return None if any part is invalid."""
    if all(is_valid_coordinate_part(part) for part in (group_id, artifact_id, version)):
        return ProjectKey(group_id, artifact_id, version)
    return None


class PomPeek:
    """
    Streaming peek at the coordinate information of one POM file.

    Scanning happens on construction and never raises: a file that cannot be
    read or parsed simply ends up with ``key`` set to None.
    """

    def __init__(self, pom):
        self.pom = Path(pom)
        self.key: Optional[ProjectKey] = None
        self.parent_key: Optional[ProjectKey] = None
        self.modules: Set[str] = set()
        self._element_values: Dict[str, str] = {}
        self._modules_done = False
        self._failed = False

        self._parse_coord_elements()

        if not self._create_coordinate_info():
            logger.warning(f"Could not peek at POM coordinate for: {self.pom}. {UNAVAILABLE_NOTE}")

    @property
    def parent_relative_path(self) -> Optional[str]:
        return self._element_values.get(PRP)

    @property
    def packaging(self) -> str:
        return self._element_values.get(PKG) or "jar"

    def module_poms(self) -> List[Path]:
        """
        Resolve the declared modules to POM file paths.

        A module entry naming a directory resolves to ``<dir>/pom.xml``; an entry
        naming a file is used as-is. Modules that do not exist on disk are skipped.
        """
        result = []
        for module in sorted(self.modules):
            candidate = (self.pom.parent / module)
            if candidate.is_dir():
                candidate = candidate / "pom.xml"
            if candidate.is_file():
                result.append(candidate.resolve())
            else:
                logger.debug(f"Module '{module}' of {self.pom} has no POM at {candidate}")
        return result

    def _parse_coord_elements(self) -> None:
        path: List[str] = []
        try:
            with open(self.pom, 'rb') as stream:
                for event, elem in ET.iterparse(stream, events=("start", "end")):
                    name = _local_name(elem.tag)
                    if event == "start":
                        path.append(name)
                    else:
                        self._capture_value(name, path, elem)
                        if name == MODULES_ELEM:
                            self._modules_done = True
                        path.pop()
                        elem.clear()

                    if self._found_all():
                        return
        except (OSError, LookupError, UnicodeError, ParseError, DefusedXmlException) as e:
            self._failed = True
            logger.warning(f"Failed to peek at POM coordinate for: {self.pom}. Reason: {e}\n{UNAVAILABLE_NOTE}")

    def _found_all(self) -> bool:
        for key in COORD_KEYS:
            if key not in self._element_values:
                return False

        if self._element_values.get(PKG) == "pom" and not self._modules_done:
            return False

        return True

    def _capture_value(self, name: str, path: List[str], elem) -> None:
        key = CAPTURED_PATHS.get(":".join(path))
        text = (elem.text or "").strip()
        if key is not None:
            self._element_values[key] = text
        elif name == MODULE_ELEM and len(path) > 1 and path[-2] == MODULES_ELEM and text:
            self.modules.add(text)

    def _create_coordinate_info(self) -> bool:
        if self._failed:
            return False

        values = self._element_values
        parent_group = values.get(PG)
        parent_version = values.get(PV)

        group_id = values.get(G) or parent_group
        version = values.get(V) or parent_version

        self.key = make_key(group_id, values.get(A), version)
        self.parent_key = make_key(parent_group, values.get(PA), parent_version)

        return self.key is not None

    def __repr__(self):
        return f"PomPeek(pom={self.pom}, key={self.key}, parent={self.parent_key})"
