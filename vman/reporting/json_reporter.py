"""
JSON report generator for version manager runs.
"""

import json
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models import FileOutcome
from ..session import VersionManagerSession
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """
    JSON report generator that serves as the foundation for all other report formats.
    Generates structured JSON output describing changed, untouched and failed POMs.
    """

    def __init__(self, include_metadata: bool = True, pretty_print: bool = True):
        """
        Initialize JSON reporter.

        Args:
            include_metadata: Whether to include metadata like timestamps
            pretty_print: Whether to format JSON with indentation
        """
        self.include_metadata = include_metadata
        self.pretty_print = pretty_print

    def generate_report(self, session: VersionManagerSession, output_path: Optional[str] = None) -> str:
        """
        Generate JSON report from a session.

        Args:
            session: Session of a finished run
            output_path: Optional path to write report to file

        Returns:
            JSON report content as string
        """
        report_data = self.get_structured_data(session)

        if self.pretty_print:
            json_content = json.dumps(report_data, indent=2, ensure_ascii=False)
        else:
            json_content = json.dumps(report_data, ensure_ascii=False)

        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(json_content)

        return json_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "json"

    def get_structured_data(self, session: VersionManagerSession) -> Dict[str, Any]:
        """
        Get structured data without converting to JSON string.
        Used by other reporters that need the data structure.

        Args:
            session: Session of a finished run

        Returns:
            Dictionary containing structured report data
        """
        report = {
            "summary": self._build_summary(session),
            "files": self._build_files(session),
            "global_errors": [str(e.error) for e in session.get_global_errors()],
            "missing_versions": self._build_missing_versions(session),
        }

        if self.include_metadata:
            report["metadata"] = self._build_metadata(session)

        return report

    def _build_summary(self, session: VersionManagerSession) -> Dict[str, Any]:
        outcomes = session.get_outcomes()
        counts = {outcome.value: 0 for outcome in FileOutcome}
        for outcome in outcomes.values():
            counts[outcome.value] += 1

        return {
            "total_files": len(outcomes),
            "modified": counts[FileOutcome.MODIFIED.value],
            "unmodified": counts[FileOutcome.UNMODIFIED.value],
            "failed": counts[FileOutcome.FAILED.value],
            "total_changes": len(session.get_changes()),
            "total_errors": len(session.get_errors()),
            "global_failure": session.has_global_errors(),
        }

    def _build_files(self, session: VersionManagerSession) -> List[Dict[str, Any]]:
        changes: Dict[str, List[str]] = OrderedDict()
        for change in session.get_changes():
            changes.setdefault(change.pom, []).append(change.description)

        errors: Dict[str, List[str]] = {}
        for error in session.get_file_errors():
            errors.setdefault(error.pom, []).append(str(error.error))

        files = []
        for pom, outcome in session.get_outcomes().items():
            files.append({
                "pom": pom,
                "outcome": outcome.value,
                "changes": changes.get(pom, []),
                "errors": errors.get(pom, []),
            })
        return files

    def _build_missing_versions(self, session: VersionManagerSession) -> List[Dict[str, str]]:
        return [
            {"pom": m.pom, "artifact": str(m.key), "version": m.version}
            for m in session.get_missing_versions()
        ]

    def _build_metadata(self, session: VersionManagerSession) -> Dict[str, Any]:
        from ..version import get_version

        return {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "generator": "POM Version Manager",
            "version": get_version(),
            "report_format": self.get_format_name(),
            "workspace": str(session.workspace),
            "preserve_files": session.preserve_files,
            "normalize_bom_usage": session.normalize_bom_usage,
            "boms": [str(bom) for bom in session.boms],
            "toolchain": str(session.toolchain_key) if session.toolchain_key else None,
        }
