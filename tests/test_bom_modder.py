from dataclasses import replace

from vman.ancestry import ProjectAncestryGraph
from vman.models import ProjectKey, VersionlessProjectKey
from vman.modders import BomModder
from vman.project import Project

BOM_KEY = ProjectKey("org.bom", "platform-bom", "7")
LIB = VersionlessProjectKey("org.lib", "lib")
OTHER = VersionlessProjectKey("org.lib", "other")


def configure(session, normalize=False):
    session.normalize_bom_usage = normalize
    session.add_bom(BOM_KEY, {LIB: "2.0", OTHER: "3.0"})
    return session


def versions(dependencies):
    return {str(d.versionless_key): d.version for d in dependencies}


def test_aligns_dependency_and_managed_dependency_versions(write_pom, session):
    project = Project.load(write_pom(
        dependencies=[("org.lib", "lib", "1.0"), ("org.free", "free", "9")],
        managed_dependencies=[("org.lib", "other", "2.5")],
    ))

    assert BomModder().inject(project, configure(session))

    assert versions(project.dependencies()) == {"org.lib:lib": "2.0", "org.free:free": "9"}
    assert versions(project.managed_dependencies()) == {"org.lib:other": "3.0"}
    assert len(session.get_changes(project.pom)) == 2


def test_unversioned_and_already_aligned_dependencies_are_untouched(write_pom, session):
    project = Project.load(write_pom(
        dependencies=[("org.lib", "lib", None), ("org.lib", "other", "3.0")],
    ))

    assert not BomModder().inject(project, configure(session))
    assert session.get_changes() == []


def test_property_reference_updates_local_property(write_pom, session):
    project = Project.load(write_pom(
        properties={"lib.version": "1.0"},
        dependencies=[("org.lib", "lib", "${lib.version}")],
    ))

    assert BomModder().inject(project, configure(session))

    assert project.properties()["lib.version"] == "2.0"
    assert project.dependencies()[0].version == "${lib.version}"


def test_property_reference_declared_elsewhere_is_skipped(write_pom, session):
    project = Project.load(write_pom(dependencies=[("org.lib", "lib", "${lib.version}")]))

    assert not BomModder().inject(project, configure(session))
    assert project.dependencies()[0].version == "${lib.version}"


def test_bom_itself_is_not_modified(write_pom, session):
    project = Project.load(write_pom(group_id="org.bom", artifact_id="platform-bom", version="7",
                                     managed_dependencies=[("org.lib", "lib", "1.0")]))

    assert not BomModder().inject(project, configure(session))


def test_no_boms_means_no_changes(write_pom, session):
    project = Project.load(write_pom(dependencies=[("org.lib", "lib", "1.0")]))

    assert not BomModder().inject(project, session)


def test_bom_imports_are_not_realigned(write_pom, session):
    project = Project.load(write_pom(
        managed_dependencies=[("org.bom", "platform-bom", "6", "pom", "import")],
    ))
    session.add_bom(BOM_KEY, {BOM_KEY.versionless(): "99", LIB: "2.0"})

    assert not BomModder().inject(project, session)
    assert project.managed_dependencies()[0].version == "6"


def test_normalize_removes_versions_and_imports_bom(write_pom, session):
    project = Project.load(write_pom(
        dependencies=[("org.lib", "lib", "1.0"), ("org.free", "free", "9")],
    ))

    assert BomModder().inject(project, configure(session, normalize=True))

    assert versions(project.dependencies()) == {"org.lib:lib": None, "org.free:free": "9"}
    imports = [d for d in project.managed_dependencies() if d.is_bom_import]
    assert [(str(d.versionless_key), d.version) for d in imports] == [("org.bom:platform-bom", "7")]


def test_normalize_imports_bom_only_into_batch_roots(write_pom, session):
    parent_pom = write_pom("pom.xml", artifact_id="parent", packaging="pom")
    child_pom = write_pom("child/pom.xml", artifact_id="child",
                          parent=("org.test", "parent", "1.0"),
                          dependencies=[("org.lib", "lib", "1.0")])
    parent, child = Project.load(parent_pom), Project.load(child_pom)
    graph = ProjectAncestryGraph()
    graph.connect(parent)
    graph.connect(child)
    configure(session, normalize=True)
    session.ancestry_graph = graph

    assert BomModder().inject(parent, session)
    assert BomModder().inject(child, session)

    assert [d.is_bom_import for d in parent.managed_dependencies()] == [True]
    assert child.managed_dependencies() == []


def test_existing_bom_import_is_not_duplicated(write_pom, session):
    old = replace(BOM_KEY, version="6")
    project = Project.load(write_pom(
        managed_dependencies=[(old.group_id, old.artifact_id, old.version, "pom", "import")],
    ))

    assert not BomModder().inject(project, configure(session, normalize=True))
    assert len(project.managed_dependencies()) == 1
