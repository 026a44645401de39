"""
Excel report generator for version manager runs.
"""

import io
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..exceptions import ReportGenerationError
from ..session import VersionManagerSession
from .base import ReportGenerator
from .json_reporter import JSONReporter


class ExcelReporter(ReportGenerator):
    """
    Excel report generator with Summary, Changes and Errors sheets.
    Uses JSONReporter internally for data structuring.
    """

    def __init__(self):
        self.json_reporter = JSONReporter(include_metadata=True)

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.modified_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
        self.failed_fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
        self.center_alignment = Alignment(horizontal="center", vertical="center")
        self.border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin")
        )

    def generate_report(self, session: VersionManagerSession, output_path: Optional[str] = None) -> str:
        """
        Generate Excel report from a session.

        Args:
            session: Session of a finished run
            output_path: Optional path to write report to file

        Returns:
            Description of the generated workbook
        """
        data = self.json_reporter.get_structured_data(session)
        workbook = self._create_workbook(data)

        try:
            if output_path:
                workbook.save(output_path)
                return f"Excel report saved to {output_path}"
            buffer = io.BytesIO()
            workbook.save(buffer)
            return f"Excel workbook generated ({len(buffer.getvalue())} bytes)"
        except OSError as e:
            raise ReportGenerationError(str(e), format_name=self.get_format_name(), output_path=output_path) from e

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "excel"

    def get_file_name(self) -> str:
        return "vman-report.xlsx"

    def _create_workbook(self, data: Dict[str, Any]) -> Workbook:
        wb = Workbook()
        wb.remove(wb.active)

        self._create_summary_sheet(wb, data)
        self._create_changes_sheet(wb, data)
        if data["global_errors"] or any(f["errors"] for f in data["files"]):
            self._create_errors_sheet(wb, data)

        wb.active = wb["Summary"]
        return wb

    def _write_headers(self, ws, headers: List[str], row: int = 1) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_alignment
            cell.border = self.border

    def _create_summary_sheet(self, workbook: Workbook, data: Dict[str, Any]) -> None:
        ws = workbook.create_sheet("Summary")

        ws["A1"] = "POM Version Alignment Summary"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:C1")

        summary = data["summary"]
        rows = [
            ("POM files processed", summary["total_files"]),
            ("Modified", summary["modified"]),
            ("Unmodified", summary["unmodified"]),
            ("Failed", summary["failed"]),
            ("Changes", summary["total_changes"]),
            ("Errors", summary["total_errors"]),
            ("Global failure", "Yes" if summary["global_failure"] else "No"),
        ]
        if "metadata" in data:
            metadata = data["metadata"]
            rows.extend([
                ("Generated", metadata["generated_at"]),
                ("Version", metadata["version"]),
                ("BOMs", ", ".join(metadata["boms"])),
            ])

        for row, (label, value) in enumerate(rows, 3):
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value)

        self._fit_columns(ws, 2)

    def _create_changes_sheet(self, workbook: Workbook, data: Dict[str, Any]) -> None:
        ws = workbook.create_sheet("Changes")
        self._write_headers(ws, ["POM", "Outcome", "Change"])

        row = 2
        for entry in data["files"]:
            descriptions = entry["changes"] or [""]
            for description in descriptions:
                values = [entry["pom"], entry["outcome"], description]
                for col, value in enumerate(values, 1):
                    cell = ws.cell(row=row, column=col, value=value)
                    cell.border = self.border
                    if col == 2 and entry["outcome"] == "modified":
                        cell.fill = self.modified_fill
                    elif col == 2 and entry["outcome"] == "failed":
                        cell.fill = self.failed_fill
                row += 1

        self._fit_columns(ws, 3)

    def _create_errors_sheet(self, workbook: Workbook, data: Dict[str, Any]) -> None:
        ws = workbook.create_sheet("Errors")
        self._write_headers(ws, ["#", "POM", "Message"])

        errors = [("(global)", message) for message in data["global_errors"]]
        for entry in data["files"]:
            errors.extend((entry["pom"], message) for message in entry["errors"])

        for row, (pom, message) in enumerate(errors, 2):
            for col, value in enumerate([row - 1, pom, message], 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.border

        self._fit_columns(ws, 3)

    def _fit_columns(self, ws, columns: int) -> None:
        for col_num in range(1, columns + 1):
            max_length = 10
            for row_num in range(1, ws.max_row + 1):
                value = ws.cell(row=row_num, column=col_num).value
                if value is not None:
                    max_length = max(max_length, len(str(value)))
            ws.column_dimensions[get_column_letter(col_num)].width = min(max_length + 2, 80)
