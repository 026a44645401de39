from types import SimpleNamespace

from vman.ancestry import ProjectAncestryGraph
from vman.models import ProjectKey
from vman.pom.peek import PomPeek

ROOT = ProjectKey("org.test", "root", "1")
MID = ProjectKey("org.test", "mid", "1")
LEAF = ProjectKey("org.test", "leaf", "1")
EXTERNAL = ProjectKey("org.other", "external", "9")


def descriptor(key, parent=None):
    return SimpleNamespace(key=key, parent_key=parent)


def chain_graph():
    graph = ProjectAncestryGraph()
    graph.connect(descriptor(ROOT))
    graph.connect(descriptor(MID, ROOT))
    graph.connect(descriptor(LEAF, MID))
    return graph


def test_connect_adds_edge_only_for_known_parent():
    graph = ProjectAncestryGraph()
    graph.connect(descriptor(LEAF, EXTERNAL))

    assert graph.contains(LEAF)
    assert not graph.contains(EXTERNAL)
    assert not graph.has_parent_in_graph(LEAF)

    graph.connect(descriptor(ROOT))
    graph.connect(descriptor(MID, ROOT))

    assert graph.has_parent_in_graph(MID)
    assert graph.parent_of(MID) == ROOT
    assert not graph.has_parent_in_graph(ROOT)


def test_has_ancestor_is_transitive_but_not_reflexive():
    graph = chain_graph()

    assert graph.has_ancestor(MID, LEAF)
    assert graph.has_ancestor(ROOT, LEAF)
    assert not graph.has_ancestor(LEAF, ROOT)
    assert not graph.has_ancestor(LEAF, LEAF)
    assert not graph.has_ancestor(ROOT, ROOT)


def test_has_ancestor_terminates_on_cycle():
    a = ProjectKey("org.cycle", "a", "1")
    b = ProjectKey("org.cycle", "b", "1")
    graph = ProjectAncestryGraph()
    graph.add_vertex(a)
    graph.add_vertex(b)
    graph.connect(descriptor(a, b))
    graph.connect(descriptor(b, a))

    assert graph.has_ancestor(b, a)
    assert graph.has_ancestor(a, a)
    assert not graph.has_ancestor(ROOT, a)


def test_at_most_one_parent_per_vertex():
    graph = chain_graph()
    graph.connect(descriptor(LEAF, ROOT))

    assert graph.parent_of(LEAF) == MID


def test_toolchain_key_is_seeded_as_root():
    toolchain = ProjectKey("org.tools", "toolchain", "1")
    graph = ProjectAncestryGraph(toolchain)
    graph.connect(descriptor(ROOT, toolchain))

    assert graph.contains(toolchain)
    assert not graph.has_parent_in_graph(toolchain)
    assert graph.has_ancestor(toolchain, ROOT)


def test_from_peeks_connects_child_listed_before_parent(write_pom):
    child = write_pom("child/pom.xml", artifact_id="child", parent=("org.test", "parent", "1.0"))
    parent = write_pom("pom.xml", artifact_id="parent", packaging="pom", modules=["child"])

    graph = ProjectAncestryGraph.from_peeks([PomPeek(child), PomPeek(parent)])

    assert graph.has_parent_in_graph(ProjectKey("org.test", "child", "1.0"))


def test_sort_parent_first():
    unkeyed = descriptor(None)
    peeks = [descriptor(LEAF, MID), unkeyed, descriptor(MID, ROOT),
             descriptor(EXTERNAL), descriptor(ROOT)]
    graph = ProjectAncestryGraph.from_peeks([p for p in peeks if p.key])

    ordered = [p.key for p in graph.sort_parent_first(peeks)]

    assert ordered == [ROOT, MID, LEAF, EXTERNAL, None]
