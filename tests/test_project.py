import pytest

from vman.exceptions import PomParseError
from vman.models import ProjectKey
from vman.project import Project


def test_project_key_and_empty_sections(write_pom):
    project = Project.load(write_pom(group_id="org.foo", artifact_id="bar", version="1.2"))

    assert project.key == ProjectKey("org.foo", "bar", "1.2")
    assert (project.group_id, project.artifact_id, project.version) == ("org.foo", "bar", "1.2")
    assert project.parent() is None
    assert project.properties() == {}
    assert project.dependencies() == []
    assert project.managed_dependencies() == []
    assert project.plugins() == []
    assert project.managed_plugins() == []
    assert project.report_plugins() == []


def test_project_inherits_missing_coordinates_from_parent(write_pom):
    project = Project.load(write_pom(group_id=None, version=None, artifact_id="child",
                                     parent=("org.parent", "parent", "4.0")))

    assert project.key == ProjectKey("org.parent", "child", "4.0")
    assert project.parent().key == ProjectKey("org.parent", "parent", "4.0")


def test_project_without_version_raises(write_pom):
    pom = write_pom(version=None)

    with pytest.raises(PomParseError) as excinfo:
        Project.load(pom)

    assert str(pom) in str(excinfo.value)


def test_project_key_resolves_own_properties(write_pom):
    project = Project.load(write_pom(version="${revision}${changelist}",
                                     properties={"revision": "1.4", "changelist": "-SNAPSHOT"}))

    assert project.key == ProjectKey("org.test", "project", "1.4-SNAPSHOT")


def test_project_key_keeps_unresolved_reference(write_pom):
    project = Project.load(write_pom(version="${revision}"))

    assert project.version == "${revision}"


def test_project_equality_uses_key_only(write_pom):
    first = Project.load(write_pom("a/pom.xml", artifact_id="same"))
    second = Project.load(write_pom("b/pom.xml", artifact_id="same",
                                    properties={"different": "yes"}))
    other = Project.load(write_pom("c/pom.xml", artifact_id="other"))

    assert first == second
    assert hash(first) == hash(second)
    assert first != other
    assert len({first, second, other}) == 2


def test_project_repr_names_key_and_pom(write_pom):
    pom = write_pom(artifact_id="shown")

    assert repr(Project.load(pom)) == f"org.test:shown:1.0 [pom={pom}]"


def test_project_sections_are_read(write_pom):
    project = Project.load(write_pom(
        properties={"foo.version": "1.0"},
        dependencies=[("org.dep", "dep", "2.0")],
        managed_dependencies=[("org.bom", "bom", "3.0", "pom", "import")],
        plugins=[(None, "maven-jar-plugin", None)],
        report_plugins=[("org.report", "reporter", "0.1")],
    ))

    assert project.properties() == {"foo.version": "1.0"}
    assert [d.version for d in project.dependencies()] == ["2.0"]
    assert project.managed_dependencies()[0].is_bom_import
    plugin = project.plugins()[0]
    assert plugin.group_id == "org.apache.maven.plugins"
    assert plugin.version is None
    assert project.report_plugins()[0].artifact_id == "reporter"
