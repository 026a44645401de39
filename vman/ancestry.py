"""
Ancestry graph over project coordinates.

Vertices are ProjectKey instances; each vertex has at most one outbound edge,
pointing from a child project to its parent. The graph only ever grows.
"""

from typing import Dict, Iterable, List, Optional, Set

from .logging_config import get_logger
from .models import ProjectKey

logger = get_logger('ancestry')


def _key_of(item) -> Optional[ProjectKey]:
    if item is None or isinstance(item, ProjectKey):
        return item
    return item.key


def _parent_key_of(item) -> Optional[ProjectKey]:
    # PomPeek carries parent_key; Project exposes its parent reference
    if hasattr(item, "parent_key"):
        return item.parent_key
    parent = item.parent()
    return parent.key if parent is not None else None


class ProjectAncestryGraph:
    """Directed child->parent graph used to order projects parent-first."""

    def __init__(self, toolchain_key: Optional[ProjectKey] = None):
        self._vertices: Set[ProjectKey] = set()
        self._parents: Dict[ProjectKey, ProjectKey] = {}
        self.toolchain_key = toolchain_key

        if toolchain_key is not None:
            self.add_vertex(toolchain_key)

    @classmethod
    def from_peeks(cls, peeks: Iterable, toolchain_key: Optional[ProjectKey] = None) -> "ProjectAncestryGraph":
        """
        Build a graph from a whole batch of peeked POMs.

        All vertices are registered before any edge is connected, so a child
        listed ahead of its parent still gets its edge.
        """
        peeks = list(peeks)
        graph = cls(toolchain_key)
        for peek in peeks:
            if peek.key is not None:
                graph.add_vertex(peek.key)
        for peek in peeks:
            if peek.key is not None:
                graph.connect(peek)
        return graph

    def add_vertex(self, key: ProjectKey) -> None:
        self._vertices.add(key)

    def connect(self, descriptor) -> None:
        """
        Add a descriptor's own vertex and, if its parent is already a vertex,
        the edge from the descriptor to that parent.

        Args:
            descriptor: PomPeek or Project
        """
        key = _key_of(descriptor)
        if key is None:
            return

        self.add_vertex(key)

        parent_key = _parent_key_of(descriptor)
        if parent_key is None or parent_key not in self._vertices:
            return

        existing = self._parents.get(key)
        if existing is None:
            self._parents[key] = parent_key
        elif existing != parent_key:
            logger.debug(f"{key} already has parent {existing}; ignoring second parent {parent_key}")

    def contains(self, key) -> bool:
        return _key_of(key) in self._vertices

    __contains__ = contains

    def parent_of(self, key) -> Optional[ProjectKey]:
        return self._parents.get(_key_of(key))

    def has_parent_in_graph(self, current) -> bool:
        """True iff the vertex has an outbound edge."""
        return _key_of(current) in self._parents

    def has_ancestor(self, ancestor_key: ProjectKey, current) -> bool:
        """
        Check whether ``ancestor_key`` is reachable from ``current`` by
        following parent edges.

        A revisited vertex ends the walk with False, so malformed input that
        forms a cycle cannot loop forever.
        """
        visited = set()
        key = self.parent_of(current)
        while key is not None:
            if key == ancestor_key:
                return True
            if key in visited:
                return False
            visited.add(key)
            key = self._parents.get(key)

        return False

    def sort_parent_first(self, peeks: Iterable) -> List:
        """
        Order descriptors so every project precedes its descendants.

        The input order is kept wherever the ancestry allows it. Descriptors
        without a usable key keep their relative order at the end.
        """
        peeks = list(peeks)
        by_key: Dict[ProjectKey, List] = {}
        unkeyed = []
        for peek in peeks:
            key = _key_of(peek)
            if key is None:
                unkeyed.append(peek)
            else:
                by_key.setdefault(key, []).append(peek)

        ordered = []
        emitted: Set[ProjectKey] = set()
        for peek in peeks:
            key = _key_of(peek)
            if key is None or key in emitted:
                continue

            chain = []
            current = key
            while current is not None and current not in emitted and current not in chain:
                chain.append(current)
                current = self._parents.get(current)

            for ancestor in reversed(chain):
                emitted.add(ancestor)
                ordered.extend(by_key.get(ancestor, []))

        return ordered + unkeyed

    def __len__(self):
        return len(self._vertices)

    def __repr__(self):
        return f"ProjectAncestryGraph(vertices={len(self._vertices)}, edges={len(self._parents)})"
