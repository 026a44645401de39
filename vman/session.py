"""
Run-wide state shared by every modder, verifier and reporter.
"""

import re
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .logging_config import get_logger
from .models import (
    ChangeRecord, FileOutcome, MissingVersion, ProjectKey, SessionError, VersionlessProjectKey
)

logger = get_logger('session')

# Single-level @token@ expressions used in property mappings
EXPRESSION_PATTERN = re.compile(r'@([^@\s]+)@')


class VersionManagerSession:
    """
    Mutable ledger for one version manager run.

    Configuration is fixed at construction. Everything else (property mappings,
    BOM data, errors, changes, outcomes) is only ever appended to. All mutation
    goes through one lock so files may be processed from worker threads.
    """

    def __init__(self, workspace: Union[str, Path], reports: Union[str, Path],
                 preserve_files: bool = False, normalize_bom_usage: bool = False,
                 recursive: bool = True):
        self.workspace = Path(workspace)
        self.reports = Path(reports)
        self.preserve_files = preserve_files
        self.normalize_bom_usage = normalize_bom_usage
        self.recursive = recursive

        self.property_mappings: Dict[str, str] = {}
        self.bom_versions: Dict[VersionlessProjectKey, str] = {}
        self.bom_properties: Dict[str, str] = {}
        self.boms: List[ProjectKey] = []

        self.toolchain_key: Optional[ProjectKey] = None
        self.toolchain_plugin_versions: Dict[VersionlessProjectKey, str] = {}
        self.toolchain_plugins: List[Tuple[VersionlessProjectKey, Optional[str]]] = []

        self.ancestry_graph = None

        self._errors: List[SessionError] = []
        self._changes: List[ChangeRecord] = []
        self._missing_versions: List[MissingVersion] = []
        self._outcomes: Dict[str, FileOutcome] = {}
        self._lock = threading.RLock()

    # -- configuration data ------------------------------------------------

    def add_property_mappings(self, mappings: Dict[str, str]) -> "VersionManagerSession":
        with self._lock:
            for name, value in mappings.items():
                self.property_mappings.setdefault(name, value)
        return self

    def add_bom(self, key: ProjectKey, versions: Dict[VersionlessProjectKey, str],
                properties: Optional[Dict[str, str]] = None) -> None:
        """
        Register a loaded BOM. Earlier BOMs win when two manage the same artifact.

        Args:
            key: Coordinate of the BOM itself
            versions: Managed dependency versions declared by the BOM
            properties: Properties declared by the BOM, used to resolve @token@ expressions
        """
        with self._lock:
            self.boms.append(key)
            for versionless, version in versions.items():
                self.bom_versions.setdefault(versionless, version)
            for name, value in (properties or {}).items():
                self.bom_properties.setdefault(name, value)
        logger.debug(f"Registered BOM {key} managing {len(versions)} artifacts")

    def set_toolchain(self, key: ProjectKey, plugin_versions: Dict[VersionlessProjectKey, str],
                      plugins: Iterable[Tuple[VersionlessProjectKey, Optional[str]]]) -> None:
        with self._lock:
            self.toolchain_key = key
            self.toolchain_plugin_versions.update(plugin_versions)
            self.toolchain_plugins.extend(plugins)

    def get_bom_version(self, key) -> Optional[str]:
        if isinstance(key, ProjectKey):
            key = key.versionless()
        return self.bom_versions.get(key)

    def is_bom(self, key: ProjectKey) -> bool:
        return key in self.boms

    def resolve_expression(self, value: str) -> Optional[str]:
        """
        Substitute @token@ expressions from the BOM properties, once.

        Substituted text is not rescanned, so chains of expressions are not
        followed.

        Returns:
            The resolved value, or None if any token is unknown
        """
        unresolved = []

        def substitute(match):
            token = match.group(1)
            if token in self.bom_properties:
                return self.bom_properties[token]
            unresolved.append(token)
            return match.group(0)

        resolved = EXPRESSION_PATTERN.sub(substitute, value)
        if unresolved:
            logger.debug(f"Cannot resolve {', '.join(unresolved)} in expression '{value}'")
            return None
        return resolved

    # -- ledger ------------------------------------------------------------

    def add_global_error(self, error: Union[Exception, str]) -> None:
        if not isinstance(error, Exception):
            error = Exception(error)
        with self._lock:
            self._errors.append(SessionError(error))
        logger.error(f"{error}")

    def add_error(self, pom: Union[str, Path], error: Union[Exception, str]) -> None:
        if not isinstance(error, Exception):
            error = Exception(error)
        with self._lock:
            self._errors.append(SessionError(error, str(pom)))
        logger.error(f"{pom}: {error}")

    def add_change(self, pom: Union[str, Path], description: str) -> None:
        with self._lock:
            self._changes.append(ChangeRecord(str(pom), description))
        logger.info(f"{pom}: {description}")

    def add_missing_version(self, pom: Union[str, Path], key: VersionlessProjectKey, version: str) -> None:
        with self._lock:
            self._missing_versions.append(MissingVersion(str(pom), key, version))

    def set_outcome(self, pom: Union[str, Path], outcome: FileOutcome) -> None:
        with self._lock:
            self._outcomes[str(pom)] = outcome

    def has_global_errors(self) -> bool:
        with self._lock:
            return any(e.is_global for e in self._errors)

    def get_errors(self) -> List[SessionError]:
        with self._lock:
            return list(self._errors)

    def get_global_errors(self) -> List[SessionError]:
        with self._lock:
            return [e for e in self._errors if e.is_global]

    def get_file_errors(self) -> List[SessionError]:
        with self._lock:
            return [e for e in self._errors if not e.is_global]

    def get_changes(self, pom: Optional[Union[str, Path]] = None) -> List[ChangeRecord]:
        with self._lock:
            if pom is None:
                return list(self._changes)
            return [c for c in self._changes if c.pom == str(pom)]

    def get_missing_versions(self) -> List[MissingVersion]:
        with self._lock:
            return list(self._missing_versions)

    def get_outcomes(self) -> Dict[str, FileOutcome]:
        with self._lock:
            return dict(self._outcomes)
