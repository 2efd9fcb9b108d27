from .extract import HeaderBinding, bind_headers, extract_sheet, open_workbook, get_worksheet
from .project import FieldTriple, cell_text, continue_lines, project_rows

__all__ = [
    "HeaderBinding",
    "bind_headers",
    "extract_sheet",
    "open_workbook",
    "get_worksheet",
    "FieldTriple",
    "cell_text",
    "continue_lines",
    "project_rows",
]
