"""Results writing exports."""

from .comparison_report_writer import (
    COMPARISONS_SHEET_NAME,
    FIELDS_SHEET_NAME,
    MESSAGE_MATCHES_SHEET_NAME,
    write_comparison_workbook,
)

__all__ = [
    "COMPARISONS_SHEET_NAME",
    "FIELDS_SHEET_NAME",
    "MESSAGE_MATCHES_SHEET_NAME",
    "write_comparison_workbook",
]
