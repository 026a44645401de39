"""
Version manager: orchestrates a run over a batch of POM files.

Flow: load BOMs and the toolchain into the session, peek at every POM to build
the ancestry graph, then fully parse, modify, verify and write each POM in
parent-first order. Per-file problems are recorded in the session and never
stop the batch; global problems stop it before any POM is touched.
"""

import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

from .ancestry import ProjectAncestryGraph
from .exceptions import BomLoadError, ModificationError, PomParseError, ReportGenerationError, VManError
from .logging_config import get_logger
from .models import FileOutcome, VersionlessProjectKey
from .modders import ProjectModder, create_modders
from .pom.peek import PomPeek
from .project import Project
from .session import VersionManagerSession
from .verifiers import ProjectVerifier, create_verifiers
from .workspace import DEFAULT_POM_PATTERN, backup, find_poms, output_path

logger = get_logger('manager')

PathLike = Union[str, Path]


class VersionManager:
    """Applies the modder and verifier pipelines to a batch of POMs."""

    def __init__(self, modders: Optional[Sequence[ProjectModder]] = None,
                 verifiers: Optional[Sequence[ProjectVerifier]] = None,
                 reporters: Optional[Sequence] = None):
        """
        Initialize the version manager.

        Args:
            modders: Modder pipeline, in order. Defaults to create_modders().
            verifiers: Verifier pipeline, in order. Defaults to create_verifiers().
            reporters: Report generators used by generate_reports(). Defaults to
                the reporting module's default set.
        """
        self.modders = list(modders) if modders is not None else create_modders()
        self.verifiers = list(verifiers) if verifiers is not None else create_verifiers()
        if reporters is None:
            from .reporting import create_reporters
            reporters = create_reporters()
        self.reporters = list(reporters)

    # -- session configuration ---------------------------------------------

    def load_bom_list(self, bom_list: PathLike, session: VersionManagerSession) -> List[str]:
        """
        Read BOM locations from a flat file, one per line.

        Lines are trimmed and blank lines skipped. A missing or unreadable file
        is recorded as a global error.

        Returns:
            BOM locations in file order (empty on error)
        """
        try:
            with open(bom_list, 'r', encoding='utf-8') as f:
                boms = [line.strip() for line in f if line.strip()]
        except OSError as e:
            session.add_global_error(BomLoadError(e.strerror or str(e), file_path=str(bom_list)))
            return []

        logger.info(f"Read {len(boms)} BOM locations from {bom_list}")
        return boms

    def configure_session(self, boms: Iterable[PathLike], toolchain: Optional[PathLike],
                          session: VersionManagerSession) -> bool:
        """
        Load BOMs and the optional toolchain POM into the session.

        Args:
            boms: BOM POM locations; earlier BOMs take precedence
            toolchain: Optional toolchain POM location
            session: Session to configure

        Returns:
            True if the session has no global errors afterwards
        """
        for bom in boms:
            try:
                self._load_bom(bom, session)
            except VManError as e:
                session.add_global_error(e if isinstance(e, BomLoadError) else BomLoadError(str(e), str(bom)))

        if toolchain:
            try:
                self._load_toolchain(toolchain, session)
            except VManError as e:
                session.add_global_error(e if isinstance(e, BomLoadError) else BomLoadError(str(e), str(toolchain)))

        return not session.has_global_errors()

    def _load_bom(self, location: PathLike, session: VersionManagerSession) -> None:
        path = Path(location)
        if not path.is_file():
            raise BomLoadError("no such BOM file", file_path=str(location))

        bom = Project.load(path)
        properties = bom.properties()

        versions: Dict[VersionlessProjectKey, str] = {}
        for dependency in bom.managed_dependencies():
            if dependency.is_bom_import:
                logger.debug(f"Skipping nested BOM import {dependency.versionless_key} in {path}")
                continue
            version = self._resolve_bom_version(dependency.version, properties, bom)
            if version:
                versions[dependency.versionless_key] = version

        session.add_bom(bom.key, versions, properties)
        logger.info(f"Loaded BOM {bom.key} ({len(versions)} managed versions) from {path}")

    @staticmethod
    def _resolve_bom_version(version: Optional[str], properties: Dict[str, str], bom: Project) -> Optional[str]:
        if not version:
            return None
        if version.startswith("${") and version.endswith("}"):
            name = version[2:-1]
            if name in ("project.version", "version"):
                return bom.version
            resolved = properties.get(name)
            if resolved is None or "${" in resolved:
                logger.warning(f"BOM {bom.key}: cannot resolve version expression '{version}'")
                return None
            return resolved
        return version

    def _load_toolchain(self, location: PathLike, session: VersionManagerSession) -> None:
        path = Path(location)
        if not path.is_file():
            raise BomLoadError("no such toolchain file", file_path=str(location))

        toolchain = Project.load(path)
        plugin_versions = {
            plugin.versionless_key: plugin.version
            for plugin in toolchain.managed_plugins() if plugin.version
        }
        injected = [
            (plugin.versionless_key, plugin.version or plugin_versions.get(plugin.versionless_key))
            for plugin in toolchain.plugins()
        ]

        session.set_toolchain(toolchain.key, plugin_versions, injected)
        logger.info(f"Loaded toolchain {toolchain.key} ({len(plugin_versions)} managed plugins, "
                    f"{len(injected)} injected plugins) from {path}")

    # -- modification --------------------------------------------------------

    def modify_versions(self, target: PathLike, boms: Iterable[PathLike], toolchain: Optional[PathLike],
                        session: VersionManagerSession,
                        pom_pattern: str = DEFAULT_POM_PATTERN) -> Set[Path]:
        """
        Align versions of every POM under a target.

        Args:
            target: A POM file or a directory searched with pom_pattern
            boms: BOM POM locations
            toolchain: Optional toolchain POM location
            session: Session for the run
            pom_pattern: Comma-separated glob patterns used for directory targets

        Returns:
            Paths of the POM files that were written
        """
        if session.has_global_errors():
            logger.error("Global errors recorded; not processing any POM")
            return set()

        if not self.configure_session(boms, toolchain, session):
            logger.error("Session configuration failed; not processing any POM")
            return set()

        target = Path(target)
        if target.is_dir():
            poms = find_poms(target, pom_pattern, exclude=[session.workspace, session.reports])
            base = target.resolve()
        elif target.is_file():
            poms = self._collect_modules(target) if session.recursive else [target.resolve()]
            base = target.resolve().parent
        else:
            session.add_global_error(VManError(f"No such target: '{target}'"))
            return set()

        return self.modify_poms(poms, session, base)

    def _collect_modules(self, pom: Path) -> List[Path]:
        result = []
        pending = [pom.resolve()]
        seen = set()
        while pending:
            current = pending.pop(0)
            if current in seen:
                continue
            seen.add(current)
            result.append(current)
            pending.extend(PomPeek(current).module_poms())
        return result

    def modify_poms(self, poms: Iterable[PathLike], session: VersionManagerSession,
                    base: Optional[Path] = None) -> Set[Path]:
        """
        Process an explicit batch of POM files in parent-first order.

        Returns:
            Paths of the POM files that were written
        """
        start_time = time.time()

        peeks = [PomPeek(pom) for pom in poms]
        graph = ProjectAncestryGraph.from_peeks(peeks, session.toolchain_key)
        session.ancestry_graph = graph
        ordered = graph.sort_parent_first(peeks)

        logger.info(f"Processing {len(ordered)} POM files ({len(graph)} projects in ancestry graph)")

        written = set()
        for peek in ordered:
            result = self.modify_pom(peek.pom, session, base)
            if result is not None:
                written.add(result)

        logger.info(f"Modified {len(written)} of {len(ordered)} POM files "
                    f"in {time.time() - start_time:.2f}s")
        return written

    def modify_pom(self, pom: PathLike, session: VersionManagerSession,
                   base: Optional[Path] = None) -> Optional[Path]:
        """
        Parse, modify, verify and write a single POM.

        Every failure is recorded against the POM in the session. A POM on which
        any modder or verifier raised is marked FAILED and not written; changes
        recorded before the failure stay in the ledger.

        Returns:
            Path the modified POM was written to, or None if nothing was written
        """
        pom = Path(pom)
        try:
            project = Project.load(pom)
        except PomParseError as e:
            session.add_error(pom, e)
            session.set_outcome(pom, FileOutcome.FAILED)
            return None
        except Exception as e:
            logger.debug(f"Unexpected error parsing {pom}", exc_info=True)
            session.add_error(pom, PomParseError(str(e), file_path=str(pom)))
            session.set_outcome(pom, FileOutcome.FAILED)
            return None

        changed = False
        failed = False
        for modder in self.modders:
            try:
                changed |= bool(modder.inject(project, session))
            except Exception as e:
                logger.debug(f"{modder!r} failed on {pom}", exc_info=True)
                session.add_error(pom, ModificationError(str(e), component=repr(modder)))
                failed = True

        for verifier in self.verifiers:
            try:
                verifier.verify(project, session)
            except Exception as e:
                logger.debug(f"{verifier!r} failed on {pom}", exc_info=True)
                session.add_error(pom, ModificationError(str(e), component=repr(verifier)))
                failed = True

        destination = None
        if changed and not failed:
            try:
                backup(pom, session.workspace, base)
                destination = project.document.write(
                    output_path(pom, session.workspace, session.preserve_files, base)
                )
            except OSError as e:
                session.add_error(pom, e)
                failed = True
                destination = None

        if failed:
            session.set_outcome(pom, FileOutcome.FAILED)
        elif destination is not None:
            session.set_outcome(pom, FileOutcome.MODIFIED)
        else:
            session.set_outcome(pom, FileOutcome.UNMODIFIED)

        return destination

    # -- reporting -------------------------------------------------------------

    def generate_reports(self, reports_dir: PathLike, session: VersionManagerSession) -> List[Path]:
        """
        Render every configured report into a directory.

        Returns:
            Paths of the reports written
        """
        reports_dir = Path(reports_dir)
        reports_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for reporter in self.reporters:
            path = reports_dir / reporter.get_file_name()
            try:
                reporter.generate_report(session, str(path))
                written.append(path)
            except (OSError, ReportGenerationError) as e:
                logger.error(f"Failed to write {reporter.get_format_name()} report to {path}: {e}")
        return written
