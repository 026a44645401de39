import json
import logging

import pytest

from vman.cli import EXIT_GLOBAL_ERROR, EXIT_OK, EXIT_USAGE, main, parse_property_mappings, build_parser
from vman.logging_config import ROOT_LOGGER_NAME
from vman.pom.document import PomDocument


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def layout(tmp_path, write_pom):
    root = tmp_path.resolve()
    write_pom("boms/bom.pom", group_id="org.bom", artifact_id="bom", version="7",
              properties={"newFoo": "baz"},
              managed_dependencies=[("org.lib", "lib", "2.0")])
    write_pom("project/pom.xml", properties={"foo": "bar"},
              dependencies=[("org.lib", "lib", "1.0")])
    return root


def run(root, *args):
    return main(["-w", str(root / "ws"), "-r", str(root / "reports"), *args])


def test_missing_arguments_is_a_usage_error(capsys):
    assert main([]) == EXIT_USAGE
    assert "Usage: vman" in capsys.readouterr().err


def test_target_without_boms_is_a_usage_error(layout):
    assert main([str(layout / "project")]) == EXIT_USAGE


def test_successful_run_writes_reports(layout, capsys):
    code = run(layout, str(layout / "project"), str(layout / "boms" / "bom.pom"))

    assert code == EXIT_OK
    assert "COMPLETED" in capsys.readouterr().out
    report = json.loads((layout / "reports" / "vman-report.json").read_text(encoding="utf-8"))
    assert report["summary"]["modified"] == 1
    assert (layout / "reports" / "vman-report.txt").exists()
    modified = PomDocument.load(layout / "ws" / "modified" / "pom.xml")
    assert modified.get_dependencies()[0].version == "2.0"


def test_missing_bom_list_is_a_global_error(layout, capsys):
    code = run(layout, "-b", str(layout / "missing.txt"), str(layout / "project"))

    assert code == EXIT_GLOBAL_ERROR
    assert "GLOBAL FAILURE" in capsys.readouterr().out


def test_bom_list_and_property_mapping_with_preserve(layout):
    bom_list = layout / "boms.txt"
    bom_list.write_text(f"{layout / 'boms' / 'bom.pom'}\n\n", encoding="utf-8")

    code = run(layout, "-P", "-b", str(bom_list), "-m", "foo=@newFoo@", str(layout / "project"))

    assert code == EXIT_OK
    document = PomDocument.load(layout / "project" / "pom.xml")
    assert document.get_property("foo") == "baz"
    assert (layout / "ws" / "backup" / "pom.xml").exists()


def test_config_file_supplies_boms_and_mappings(layout):
    config = layout / "vman.yaml"
    config.write_text(
        "session:\n"
        f"  boms: ['{layout / 'boms' / 'bom.pom'}']\n"
        "  preserve_files: true\n"
        "property_mappings:\n"
        "  foo: from-config\n"
        "reporting:\n"
        "  formats: [json]\n",
        encoding="utf-8",
    )

    code = run(layout, "-c", str(config), "-m", "foo=from-cli", str(layout / "project"))

    assert code == EXIT_OK
    assert PomDocument.load(layout / "project" / "pom.xml").get_property("foo") == "from-cli"
    assert (layout / "reports" / "vman-report.json").exists()
    assert not (layout / "reports" / "vman-report.txt").exists()


def test_invalid_config_is_a_usage_error(layout, capsys):
    config = layout / "bad.yaml"
    config.write_text("session: [unclosed", encoding="utf-8")

    assert run(layout, "-c", str(config), str(layout / "project")) == EXIT_USAGE
    assert "Configuration error" in capsys.readouterr().err


def test_unknown_report_format_is_a_usage_error(layout):
    code = run(layout, "-f", "pdf", str(layout / "project"), str(layout / "boms" / "bom.pom"))

    assert code == EXIT_USAGE


def test_malformed_property_mapping_exits_with_usage(layout):
    with pytest.raises(SystemExit) as excinfo:
        run(layout, "-m", "novalue", str(layout / "project"), str(layout / "boms" / "bom.pom"))

    assert excinfo.value.code == 2


def test_parse_property_mappings_trims_and_keeps_equals_in_value():
    parser = build_parser()

    assert parse_property_mappings(parser, [" a = b ", "url=x=y"]) == {"a": "b", "url": "x=y"}


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert "POM Version Manager v" in capsys.readouterr().out
