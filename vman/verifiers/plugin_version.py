"""
Verifier for unversioned build plugins.
"""

from ..exceptions import VerificationError
from ..project import Project
from ..session import VersionManagerSession
from .base import ProjectVerifier


class PluginVersionVerifier(ProjectVerifier):
    """
    Records an error for each build plugin without a version.

    A plugin is considered versioned when it declares a version itself, when
    the project manages it in ``pluginManagement`` or when the toolchain
    supplies a managed version. Projects declaring a parent are skipped
    because the version may be inherited.
    """

    def verify(self, project: Project, session: VersionManagerSession) -> None:
        if project.parent() is not None:
            return

        managed = {p.versionless_key for p in project.managed_plugins() if p.version}
        for plugin in project.plugins():
            key = plugin.versionless_key
            if plugin.version or key in managed or key in session.toolchain_plugin_versions:
                continue
            session.add_error(project.pom, VerificationError(
                f"plugin {key} has no version", verifier=repr(self)
            ))
