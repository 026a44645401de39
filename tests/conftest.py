"""Shared fixtures: small POM files written into a temporary directory."""
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest

from vman.session import VersionManagerSession

NS_ATTRS = ('xmlns="http://maven.apache.org/POM/4.0.0" '
            'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 '
            'http://maven.apache.org/xsd/maven-4.0.0.xsd"')


def _gav(tag: str, coords: Tuple, indent: str) -> str:
    group_id, artifact_id, version = coords[:3]
    lines = [f"{indent}<{tag}>"]
    if group_id:
        lines.append(f"{indent}  <groupId>{group_id}</groupId>")
    lines.append(f"{indent}  <artifactId>{artifact_id}</artifactId>")
    if version:
        lines.append(f"{indent}  <version>{version}</version>")
    if len(coords) > 3 and coords[3]:
        lines.append(f"{indent}  <type>{coords[3]}</type>")
    if len(coords) > 4 and coords[4]:
        lines.append(f"{indent}  <scope>{coords[4]}</scope>")
    lines.append(f"{indent}</{tag}>")
    return "\n".join(lines)


def build_pom(group_id: Optional[str] = "org.test", artifact_id: str = "project",
              version: Optional[str] = "1.0", parent: Optional[Tuple] = None,
              relative_path: Optional[str] = None, packaging: Optional[str] = None,
              modules: Iterable[str] = (), properties: Optional[Dict[str, str]] = None,
              dependencies: Iterable[Tuple] = (), managed_dependencies: Iterable[Tuple] = (),
              plugins: Iterable[Tuple] = (), managed_plugins: Iterable[Tuple] = (),
              report_plugins: Iterable[Tuple] = (), namespaced: bool = True) -> str:
    """Render a POM. Coordinates are (groupId, artifactId, version[, type[, scope]]) tuples."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>',
             f"<project {NS_ATTRS}>" if namespaced else "<project>",
             "  <modelVersion>4.0.0</modelVersion>"]
    if parent:
        lines.append("  <parent>")
        lines.append(f"    <groupId>{parent[0]}</groupId>")
        lines.append(f"    <artifactId>{parent[1]}</artifactId>")
        lines.append(f"    <version>{parent[2]}</version>")
        if relative_path:
            lines.append(f"    <relativePath>{relative_path}</relativePath>")
        lines.append("  </parent>")
    if group_id:
        lines.append(f"  <groupId>{group_id}</groupId>")
    lines.append(f"  <artifactId>{artifact_id}</artifactId>")
    if version:
        lines.append(f"  <version>{version}</version>")
    if packaging:
        lines.append(f"  <packaging>{packaging}</packaging>")
    modules = list(modules)
    if modules:
        lines.append("  <modules>")
        lines.extend(f"    <module>{m}</module>" for m in modules)
        lines.append("  </modules>")
    if properties:
        lines.append("  <properties>")
        lines.extend(f"    <{k}>{v}</{k}>" for k, v in properties.items())
        lines.append("  </properties>")
    managed_dependencies = list(managed_dependencies)
    if managed_dependencies:
        lines.append("  <dependencyManagement>")
        lines.append("    <dependencies>")
        lines.extend(_gav("dependency", d, "      ") for d in managed_dependencies)
        lines.append("    </dependencies>")
        lines.append("  </dependencyManagement>")
    dependencies = list(dependencies)
    if dependencies:
        lines.append("  <dependencies>")
        lines.extend(_gav("dependency", d, "    ") for d in dependencies)
        lines.append("  </dependencies>")
    plugins, managed_plugins = list(plugins), list(managed_plugins)
    if plugins or managed_plugins:
        lines.append("  <build>")
        if managed_plugins:
            lines.append("    <pluginManagement>")
            lines.append("      <plugins>")
            lines.extend(_gav("plugin", p, "        ") for p in managed_plugins)
            lines.append("      </plugins>")
            lines.append("    </pluginManagement>")
        if plugins:
            lines.append("    <plugins>")
            lines.extend(_gav("plugin", p, "      ") for p in plugins)
            lines.append("    </plugins>")
        lines.append("  </build>")
    report_plugins = list(report_plugins)
    if report_plugins:
        lines.append("  <reporting>")
        lines.append("    <plugins>")
        lines.extend(_gav("plugin", p, "      ") for p in report_plugins)
        lines.append("    </plugins>")
        lines.append("  </reporting>")
    lines.append("</project>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_pom(tmp_path):
    """Write a POM below tmp_path: write_pom("a/pom.xml", artifact_id="a", ...)."""
    def _write(relative: str = "pom.xml", content: Optional[str] = None, **kwargs) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content is not None else build_pom(**kwargs), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def session(tmp_path):
    return VersionManagerSession(tmp_path.resolve() / "workspace", tmp_path.resolve() / "reports")
