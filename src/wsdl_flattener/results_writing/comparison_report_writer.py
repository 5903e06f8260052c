"""Comparison workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

if TYPE_CHECKING:
    from wsdl_flattener.service_comparison.service_models import (
        ComparisonResults,
        ServiceComparison,
        ServiceModel,
    )

COMPARISONS_SHEET_NAME = "Comparisons"
MESSAGE_MATCHES_SHEET_NAME = "MessageMatches"
FIELDS_SHEET_NAME = "Fields"

COMPARISON_COLUMNS = ("First service", "Second service", "Score", "Messages compared")
MESSAGE_MATCH_COLUMNS = (
    "First service",
    "Second service",
    "Message",
    "Best counterpart",
    "Score",
    "Shared fields",
)
FIELD_COLUMNS = ("Service", "Message", "Field", "Type")


def write_comparison_workbook(results: ComparisonResults, output_dir: Path | str) -> Path:
    """Write the comparison workbook into output_dir and return its resolved path."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = COMPARISONS_SHEET_NAME

    _write_header(sheet, COMPARISON_COLUMNS)
    for comparison in results.comparisons:
        sheet.append(
            [
                comparison.first_service,
                comparison.second_service,
                round(comparison.score, 4),
                len(comparison.message_matches),
            ]
        )

    _write_message_matches_sheet(workbook, results.comparisons)
    _write_fields_sheet(workbook, results.models)

    output_path = _resolve_output_path(Path(output_dir))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path.resolve()


def _resolve_output_path(output_dir: Path) -> Path:
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return output_dir / f"service-comparison-{timestamp}.xlsx"


def _write_header(sheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_message_matches_sheet(
    workbook: Workbook, comparisons: Sequence[ServiceComparison]
) -> None:
    sheet = workbook.create_sheet(MESSAGE_MATCHES_SHEET_NAME)
    _write_header(sheet, MESSAGE_MATCH_COLUMNS)
    for comparison in comparisons:
        for match in comparison.message_matches:
            sheet.append(
                [
                    comparison.first_service,
                    comparison.second_service,
                    match.message,
                    match.counterpart,
                    round(match.score, 4),
                    ", ".join(f"{name}:{type_name}" for name, type_name in match.shared_fields),
                ]
            )


def _write_fields_sheet(workbook: Workbook, models: Sequence[ServiceModel]) -> None:
    sheet = workbook.create_sheet(FIELDS_SHEET_NAME)
    _write_header(sheet, FIELD_COLUMNS)
    for model in models:
        for message_name, fields in sorted(model.messages.items()):
            for field in sorted(fields, key=lambda item: item.key):
                sheet.append([model.service_name, message_name, field.name, field.type_name])
