# core/export.py
"""Spreadsheet export of the borrow report."""
import io

from openpyxl import Workbook

from core.reporting import ReportRow

SHEET_TITLE = "Report"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FILENAME = "report.xlsx"

# Column order follows the on-screen report table
EXPORT_COLUMNS = list(ReportRow.model_fields)


def _cell(value):
    if isinstance(value, bool):
        return "✔" if value else "✘"
    return "" if value is None else value


def build_report_workbook(rows: list[ReportRow]) -> bytes:
    """One-sheet workbook: header row, then one line per report row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    sheet.append(EXPORT_COLUMNS)
    for row in rows:
        data = row.model_dump()
        sheet.append([_cell(data[column]) for column in EXPORT_COLUMNS])

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()
