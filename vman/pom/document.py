"""
Mutable POM document model.

Wraps a parsed POM element tree and exposes the parts the version manager reads
and rewrites: coordinates, parent, properties, dependencies, plugins and report
plugins. Both namespaced (POM 4.0.0) and bare POMs are supported; new elements
are created in the document's own namespace.
"""

import io
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.etree import ElementTree as StdET
from xml.etree.ElementTree import ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from ..exceptions import PomParseError
from ..models import ProjectKey, VersionlessProjectKey

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
DEFAULT_PLUGIN_GROUP = "org.apache.maven.plugins"
INDENT = "  "

StdET.register_namespace("", POM_NAMESPACE)
StdET.register_namespace("xsi", XSI_NAMESPACE)


def _is_element(node) -> bool:
    # Comments and processing instructions carry a callable tag
    return isinstance(node.tag, str)


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1] if '}' in tag else tag


class _ElementView:
    """Base class for live views over a single POM element."""

    def __init__(self, document: "PomDocument", element):
        self.document = document
        self.element = element

    def _get(self, tag: str) -> Optional[str]:
        return self.document.child_text(self.element, tag)

    def _set(self, tag: str, value: Optional[str]) -> None:
        self.document.set_child_text(self.element, tag, value)

    @property
    def group_id(self) -> Optional[str]:
        return self._get("groupId")

    @group_id.setter
    def group_id(self, value: Optional[str]) -> None:
        self._set("groupId", value)

    @property
    def artifact_id(self) -> Optional[str]:
        return self._get("artifactId")

    @artifact_id.setter
    def artifact_id(self, value: Optional[str]) -> None:
        self._set("artifactId", value)

    @property
    def version(self) -> Optional[str]:
        return self._get("version")

    @version.setter
    def version(self, value: Optional[str]) -> None:
        self._set("version", value)

    @property
    def versionless_key(self) -> VersionlessProjectKey:
        return VersionlessProjectKey(self.group_id or "", self.artifact_id or "")

    def __repr__(self):
        return f"{type(self).__name__}({self.group_id}:{self.artifact_id}:{self.version})"


class Parent(_ElementView):
    """View over the ``<parent>`` element."""

    @property
    def key(self) -> Optional[ProjectKey]:
        if self.group_id and self.artifact_id and self.version:
            return ProjectKey(self.group_id, self.artifact_id, self.version)
        return None


class Dependency(_ElementView):
    """View over a ``<dependency>`` element."""

    @property
    def scope(self) -> Optional[str]:
        return self._get("scope")

    @property
    def type(self) -> str:
        return self._get("type") or "jar"

    @property
    def is_bom_import(self) -> bool:
        return self.type == "pom" and self.scope == "import"


class Plugin(_ElementView):
    """View over a build ``<plugin>`` or reporting ``<plugin>`` element."""

    @property
    def group_id(self) -> str:
        return self._get("groupId") or DEFAULT_PLUGIN_GROUP

    @group_id.setter
    def group_id(self, value: Optional[str]) -> None:
        self._set("groupId", value)


class PomDocument:
    """
    A parsed POM file.

    Section accessors return None when the owning section is absent, mirroring a
    Maven model where unset sections are null. ``vman.project.Project`` turns
    those into empty lists for its callers.
    """

    def __init__(self, tree, path: Optional[Union[str, Path]] = None):
        self.tree = tree
        self.root = tree.getroot()
        self.path = Path(path) if path else None

        if _local_name(self.root.tag) != "project":
            raise PomParseError(f"root element is <{_local_name(self.root.tag)}>, expected <project>",
                                file_path=str(path) if path else None)

        if self.root.tag.startswith("{"):
            self.namespace = self.root.tag[1:].split("}", 1)[0]
        else:
            self.namespace = None

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PomDocument":
        """
        Parse a POM file, keeping comments.

        Args:
            path: Path to the POM file

        Returns:
            PomDocument for the file

        Raises:
            PomParseError: If the file cannot be read or is not well-formed XML
        """
        parser = ET.DefusedXMLParser(target=StdET.TreeBuilder(insert_comments=True))
        try:
            tree = ET.parse(str(path), parser=parser)
        except ParseError as e:
            line = e.position[0] if getattr(e, "position", None) else None
            raise PomParseError(str(e), file_path=str(path), line_number=line) from e
        except (OSError, LookupError, UnicodeError, DefusedXmlException) as e:
            raise PomParseError(str(e), file_path=str(path)) from e

        return cls(tree, path)

    @classmethod
    def from_string(cls, text: str, path: Optional[Union[str, Path]] = None) -> "PomDocument":
        """Parse POM content held in memory."""
        parser = ET.DefusedXMLParser(target=StdET.TreeBuilder(insert_comments=True))
        try:
            parser.feed(text)
            root = parser.close()
        except (ParseError, LookupError, UnicodeError, DefusedXmlException) as e:
            raise PomParseError(str(e), file_path=str(path) if path else None) from e
        return cls(StdET.ElementTree(root), path)

    # -- element helpers ---------------------------------------------------

    def qname(self, tag: str) -> str:
        return f"{{{self.namespace}}}{tag}" if self.namespace else tag

    def find(self, element, *tags: str):
        """Walk down direct children by local name; None if any step is missing."""
        current = element
        for tag in tags:
            current = current.find(self.qname(tag))
            if current is None:
                return None
        return current

    def children(self, element, tag: str) -> list:
        return element.findall(self.qname(tag))

    def child_text(self, element, tag: str) -> Optional[str]:
        child = self.find(element, tag)
        if child is None or child.text is None:
            return None
        return child.text.strip()

    def set_child_text(self, element, tag: str, value: Optional[str]) -> None:
        """Set a child element's text, creating it if needed; None removes it."""
        child = self.find(element, tag)
        if value is None:
            if child is not None:
                self.remove_child(element, child)
            return
        if child is None:
            child = self.append_child(element, tag)
        child.text = value

    def append_child(self, parent, tag: str):
        """Append a new child element, following the indentation of its siblings."""
        child = StdET.Element(self.qname(tag))
        existing = list(parent)
        if existing:
            last = existing[-1]
            child.tail = last.tail
            last.tail = parent.text
        else:
            closing = parent.tail if parent.tail and parent.tail.strip() == "" else "\n"
            # The tail of a last child closes its parent one level up
            closing = closing.rstrip(" \t") + self._indent_of(parent)
            parent.text = closing + INDENT
            child.tail = closing
        parent.append(child)
        return child

    def remove_child(self, parent, child) -> None:
        existing = list(parent)
        index = existing.index(child)
        if index == len(existing) - 1 and index > 0:
            existing[index - 1].tail = child.tail
        parent.remove(child)

    def _indent_of(self, element) -> str:
        depth = 0
        parents = {c: p for p in self.root.iter() for c in p}
        current = element
        while current in parents:
            depth += 1
            current = parents[current]
        return INDENT * depth

    def ensure(self, element, *tags: str):
        """Like find(), but creates missing elements along the way."""
        current = element
        for tag in tags:
            found = self.find(current, tag)
            if found is None:
                found = self.append_child(current, tag)
            current = found
        return current

    # -- coordinates -------------------------------------------------------

    @property
    def group_id(self) -> Optional[str]:
        return self.child_text(self.root, "groupId")

    @property
    def artifact_id(self) -> Optional[str]:
        return self.child_text(self.root, "artifactId")

    @property
    def version(self) -> Optional[str]:
        return self.child_text(self.root, "version")

    def get_parent(self) -> Optional[Parent]:
        element = self.find(self.root, "parent")
        return Parent(self, element) if element is not None else None

    # -- properties --------------------------------------------------------

    def get_properties(self) -> Optional[Dict[str, str]]:
        section = self.find(self.root, "properties")
        if section is None:
            return None
        return {
            _local_name(child.tag): (child.text or "").strip()
            for child in section if _is_element(child)
        }

    def get_property(self, name: str) -> Optional[str]:
        section = self.find(self.root, "properties")
        if section is None:
            return None
        return self.child_text(section, name)

    def set_property(self, name: str, value: str) -> None:
        section = self.ensure(self.root, "properties")
        self.set_child_text(section, name, value)

    # -- dependencies ------------------------------------------------------

    def get_dependencies(self) -> Optional[List[Dependency]]:
        section = self.find(self.root, "dependencies")
        if section is None:
            return None
        return [Dependency(self, e) for e in self.children(section, "dependency")]

    def get_managed_dependencies(self) -> Optional[List[Dependency]]:
        section = self.find(self.root, "dependencyManagement", "dependencies")
        if section is None:
            return None
        return [Dependency(self, e) for e in self.children(section, "dependency")]

    def add_managed_dependency(self, group_id: str, artifact_id: str, version: str,
                               dep_type: Optional[str] = None, scope: Optional[str] = None) -> Dependency:
        section = self.ensure(self.root, "dependencyManagement", "dependencies")
        dependency = Dependency(self, self.append_child(section, "dependency"))
        dependency.group_id = group_id
        dependency.artifact_id = artifact_id
        dependency.version = version
        if dep_type:
            self.set_child_text(dependency.element, "type", dep_type)
        if scope:
            self.set_child_text(dependency.element, "scope", scope)
        return dependency

    # -- plugins -----------------------------------------------------------

    def get_plugins(self) -> Optional[List[Plugin]]:
        section = self.find(self.root, "build", "plugins")
        if section is None:
            return None
        return [Plugin(self, e) for e in self.children(section, "plugin")]

    def get_managed_plugins(self) -> Optional[List[Plugin]]:
        section = self.find(self.root, "build", "pluginManagement", "plugins")
        if section is None:
            return None
        return [Plugin(self, e) for e in self.children(section, "plugin")]

    def get_report_plugins(self) -> Optional[List[Plugin]]:
        section = self.find(self.root, "reporting", "plugins")
        if section is None:
            return None
        return [Plugin(self, e) for e in self.children(section, "plugin")]

    def add_plugin(self, group_id: str, artifact_id: str, version: Optional[str] = None) -> Plugin:
        section = self.ensure(self.root, "build", "plugins")
        plugin = Plugin(self, self.append_child(section, "plugin"))
        plugin.group_id = group_id
        plugin.artifact_id = artifact_id
        if version:
            plugin.version = version
        return plugin

    # -- serialization -----------------------------------------------------

    def to_string(self) -> str:
        buffer = io.BytesIO()
        self.tree.write(buffer, encoding="UTF-8", xml_declaration=True)
        return buffer.getvalue().decode("utf-8")

    def write(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Serialize the document.

        Args:
            path: Destination; defaults to the file the document was loaded from

        Returns:
            The path written to
        """
        destination = Path(path) if path else self.path
        if destination is None:
            raise ValueError("No destination path for POM document")
        destination.parent.mkdir(parents=True, exist_ok=True)
        content = self.to_string()
        if not content.endswith("\n"):
            content += "\n"
        with open(destination, "w", encoding="utf-8") as f:
            f.write(content)
        return destination
