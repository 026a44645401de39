"""
Human-readable text report generator for version manager runs.
"""

import os
import re
import sys
from typing import Any, Dict, List, Optional

from ..session import VersionManagerSession
from .base import ReportGenerator
from .json_reporter import JSONReporter


class HumanReadableReporter(ReportGenerator):
    """
    Human-readable text report generator for console output.
    Uses JSONReporter internally for data structuring and includes color coding.
    """

    # ANSI color codes
    COLORS = {
        'RED': '\033[91m',
        'GREEN': '\033[92m',
        'YELLOW': '\033[93m',
        'CYAN': '\033[96m',
        'BOLD': '\033[1m',
        'RESET': '\033[0m'
    }

    OUTCOME_COLORS = {
        'modified': 'GREEN',
        'unmodified': 'CYAN',
        'failed': 'RED',
    }

    def __init__(self, use_colors: bool = None, width: int = 80, detailed: bool = True):
        """
        Initialize human-readable text reporter.

        Args:
            use_colors: Whether to use ANSI color codes. Auto-detects if None.
            width: Console width for formatting (default: 80)
            detailed: Whether to list the individual changes per file
        """
        if use_colors is None:
            self.use_colors = self._supports_color()
        else:
            self.use_colors = use_colors

        self.width = width
        self.detailed = detailed
        self.json_reporter = JSONReporter(include_metadata=True)

    def generate_report(self, session: VersionManagerSession, output_path: Optional[str] = None) -> str:
        """
        Generate human-readable text report from a session.

        Args:
            session: Session of a finished run
            output_path: Optional path to write report to file

        Returns:
            Text report content as string
        """
        data = self.json_reporter.get_structured_data(session)
        text_content = self._build_text_report(data)

        # Files never get color codes
        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self._strip_colors(text_content))

        return text_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "text"

    def get_file_name(self) -> str:
        return "vman-report.txt"

    def _supports_color(self) -> bool:
        if os.environ.get('NO_COLOR'):
            return False
        return hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors or color not in self.COLORS:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def _strip_colors(self, text: str) -> str:
        ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
        return ansi_escape.sub('', text)

    def _build_text_report(self, data: Dict[str, Any]) -> str:
        sections = [self._build_header(data), self._build_summary_section(data["summary"])]

        if data["global_errors"]:
            sections.append(self._build_global_errors_section(data["global_errors"]))

        for outcome in ("modified", "failed", "unmodified"):
            files = [f for f in data["files"] if f["outcome"] == outcome]
            if files:
                sections.append(self._build_files_section(outcome, files))

        if data["missing_versions"]:
            sections.append(self._build_missing_versions_section(data["missing_versions"]))

        if "metadata" in data:
            sections.append(self._build_footer(data["metadata"]))

        return "\n\n".join(sections)

    def _build_header(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        if summary["global_failure"]:
            status_text = self._colorize("GLOBAL FAILURE", "RED")
        elif summary["failed"]:
            status_text = self._colorize("COMPLETED WITH ERRORS", "YELLOW")
        else:
            status_text = self._colorize("COMPLETED", "GREEN")

        title = f"POM VERSION ALIGNMENT REPORT - {status_text}"
        separator = "=" * len(self._strip_colors(title))

        return "\n".join([
            self._colorize(separator, 'BOLD'),
            self._colorize(title, 'BOLD'),
            self._colorize(separator, 'BOLD'),
        ])

    def _build_summary_section(self, summary: Dict[str, Any]) -> str:
        return "\n".join([
            self._colorize('SUMMARY', 'BOLD'),
            "",
            f"   POM files processed:  {summary['total_files']}",
            f"   Modified:             {self._colorize(str(summary['modified']), 'GREEN')}",
            f"   Unmodified:           {summary['unmodified']}",
            f"   Failed:               {self._colorize(str(summary['failed']), 'RED' if summary['failed'] else 'GREEN')}",
            f"   Changes:              {summary['total_changes']}",
            f"   Errors:               {summary['total_errors']}",
        ])

    def _build_global_errors_section(self, errors: List[str]) -> str:
        lines = [self._colorize('GLOBAL ERRORS', 'RED'), ""]
        lines.extend(f"   - {error}" for error in errors)
        return "\n".join(lines)

    def _build_files_section(self, outcome: str, files: List[Dict[str, Any]]) -> str:
        color = self.OUTCOME_COLORS.get(outcome, 'BOLD')
        lines = [self._colorize(f"{outcome.upper()} FILES ({len(files)})", color), ""]
        for entry in files:
            lines.append(f"   {entry['pom']}")
            if self.detailed:
                lines.extend(f"      * {change}" for change in entry["changes"])
            lines.extend(f"      ! {self._colorize(error, 'RED')}" for error in entry["errors"])
        return "\n".join(lines)

    def _build_missing_versions_section(self, missing: List[Dict[str, str]]) -> str:
        lines = [self._colorize(f"VERSIONS NOT MANAGED BY ANY BOM ({len(missing)})", 'YELLOW'), ""]
        for entry in missing:
            lines.append(f"   {entry['artifact']}:{entry['version']}  ({entry['pom']})")
        return "\n".join(lines)

    def _build_footer(self, metadata: Dict[str, Any]) -> str:
        separator = "-" * self.width
        return "\n".join([
            self._colorize(separator, 'BOLD'),
            f"Generated by {metadata['generator']} v{metadata['version']}",
            f"Report created: {metadata['generated_at']}",
            self._colorize(separator, 'BOLD'),
        ])
