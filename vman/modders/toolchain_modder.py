"""
Toolchain plugin modder.
"""

from ..logging_config import get_logger
from ..project import Project
from ..session import VersionManagerSession
from .base import ProjectModder

logger = get_logger('modders.toolchain')


class ToolchainModder(ProjectModder):
    """
    Applies the toolchain POM's plugin standards.

    Plugin, managed plugin and report plugin versions are aligned with the
    toolchain's ``pluginManagement`` versions. Projects with no parent in the
    batch also receive any toolchain ``build/plugins`` entry they lack.
    """

    def inject(self, project: Project, session: VersionManagerSession) -> bool:
        if session.toolchain_key is None or project.key == session.toolchain_key:
            return False

        changed = False
        sections = (
            ("plugin", project.plugins()),
            ("managed plugin", project.managed_plugins()),
            ("report plugin", project.report_plugins()),
        )
        for label, plugins in sections:
            for plugin in plugins:
                target = session.toolchain_plugin_versions.get(plugin.versionless_key)
                current = plugin.version
                # Unversioned build plugins inherit from pluginManagement
                if target is None or current == target or (current is None and label != "managed plugin"):
                    continue
                plugin.version = target
                session.add_change(project.pom, f"Changed version of {label} {plugin.versionless_key} "
                                                f"from '{current}' to '{target}'")
                changed = True

        graph = session.ancestry_graph
        if graph is None or not graph.has_parent_in_graph(project):
            changed |= self._inject_plugins(project, session)

        return changed

    def _inject_plugins(self, project: Project, session: VersionManagerSession) -> bool:
        present = {p.versionless_key for p in project.plugins()}
        changed = False
        for key, version in session.toolchain_plugins:
            if key in present:
                continue
            project.document.add_plugin(key.group_id, key.artifact_id, version)
            session.add_change(project.pom, f"Injected toolchain plugin {key}")
            present.add(key)
            changed = True
        return changed

    def get_description(self) -> str:
        return "Apply toolchain plugin versions and injections"
