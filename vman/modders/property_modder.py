"""
Property remapping modder.
"""

from ..logging_config import get_logger
from ..project import Project
from ..session import VersionManagerSession
from .base import ProjectModder

logger = get_logger('modders.property')


class PropertyModder(ProjectModder):
    """
    Rewrites declared properties named in the session's property mappings.

    A mapping value may contain @token@ expressions, resolved once against the
    properties of the loaded BOMs. If any token is unknown the property is left
    alone.
    """

    def inject(self, project: Project, session: VersionManagerSession) -> bool:
        if not session.property_mappings:
            return False

        changed = False
        for name, current in project.properties().items():
            mapping = session.property_mappings.get(name)
            if mapping is None:
                continue

            target = session.resolve_expression(mapping)
            if target is None:
                logger.warning(f"{project.key}: not remapping property '{name}'; "
                               f"cannot resolve '{mapping}'")
                continue

            if target == current:
                continue

            project.document.set_property(name, target)
            session.add_change(project.pom, f"Property '{name}' changed from '{current}' to '{target}'")
            changed = True

        return changed

    def get_description(self) -> str:
        return "Remap property values"
