"""
BOM version alignment modder.
"""

import re

from ..logging_config import get_logger
from ..project import Project
from ..session import VersionManagerSession
from .base import ProjectModder

logger = get_logger('modders.bom')

PROPERTY_REFERENCE = re.compile(r'^\$\{([^}]+)\}$')


class BomModder(ProjectModder):
    """
    Aligns dependency versions with the versions managed by the loaded BOMs.

    When the session normalizes BOM usage, versions of BOM-managed plain
    dependencies are removed and the BOMs are imported into
    ``dependencyManagement`` of every project that has no parent in the batch.
    """

    def inject(self, project: Project, session: VersionManagerSession) -> bool:
        if not session.bom_versions or session.is_bom(project.key):
            return False

        changed = False

        for dependency in project.managed_dependencies():
            if dependency.is_bom_import:
                continue
            changed |= self._align(project, session, dependency, "managed dependency")

        for dependency in project.dependencies():
            target = session.get_bom_version(dependency.versionless_key)
            if target is None or dependency.version is None:
                continue

            if session.normalize_bom_usage:
                old = dependency.version
                dependency.version = None
                session.add_change(project.pom, f"Removed version '{old}' of dependency "
                                                f"{dependency.versionless_key} (managed by BOM)")
                changed = True
            else:
                changed |= self._align(project, session, dependency, "dependency")

        if session.normalize_bom_usage:
            changed |= self._import_boms(project, session)

        return changed

    def _align(self, project: Project, session: VersionManagerSession, dependency, label: str) -> bool:
        target = session.get_bom_version(dependency.versionless_key)
        current = dependency.version
        if target is None or current is None or current == target:
            return False

        reference = PROPERTY_REFERENCE.match(current)
        if reference:
            return self._align_property(project, session, reference.group(1), target, dependency)

        dependency.version = target
        session.add_change(project.pom, f"Changed version of {label} {dependency.versionless_key} "
                                        f"from '{current}' to '{target}'")
        return True

    def _align_property(self, project: Project, session: VersionManagerSession, name: str,
                        target: str, dependency) -> bool:
        properties = project.properties()
        if name not in properties:
            # Defined further up the hierarchy; the declaring POM is aligned on its own
            logger.debug(f"{project.key}: property '{name}' used by {dependency.versionless_key} "
                         f"is not declared locally")
            return False

        current = properties[name]
        if current == target:
            return False

        project.document.set_property(name, target)
        session.add_change(project.pom, f"Property '{name}' (version of {dependency.versionless_key}) "
                                        f"changed from '{current}' to '{target}'")
        return True

    def _import_boms(self, project: Project, session: VersionManagerSession) -> bool:
        graph = session.ancestry_graph
        if graph is not None and graph.has_parent_in_graph(project):
            return False

        imported = {d.versionless_key for d in project.managed_dependencies() if d.is_bom_import}
        changed = False
        for bom in session.boms:
            if bom.versionless() in imported:
                continue
            project.document.add_managed_dependency(bom.group_id, bom.artifact_id, bom.version,
                                                    dep_type="pom", scope="import")
            session.add_change(project.pom, f"Added BOM import {bom}")
            changed = True

        return changed

    def get_description(self) -> str:
        return "Align dependency versions with BOMs"
