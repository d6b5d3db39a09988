"""
ExcelWriter — high-level helpers for building styled Excel workbooks with charts.
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import pandas as pd
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.chart.shapes import GraphicalProperties
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from storm_report.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    INSIGHT_TITLE_FONT, INSIGHT_BODY_FONT,
    LEGEND_BOLD_FONT, DATA_FONT,
    LIGHT_BLUE_FILL, THIN_BORDER, WRAP,
)
from storm_report.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(
        self,
        ws: Worksheet,
        title: str,
        subtitle: str,
        merge_cols: int = 8,
    ) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)

        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)

        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        """Write a section header. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        kpis: list[tuple],  # [(value, label, format_type), ...]
        start_col: int = 1,
        col_spacing: int = 2,
    ) -> int:
        """Write a row of KPI cards. Returns next row."""
        col = start_col
        for kpi in kpis:
            value, label, fmt = kpi[:3]
            font = kpi[3] if len(kpi) > 3 else None
            add_kpi_card(ws, row, col, value, label, fmt, font=font)
            col += col_spacing
        return row + 3

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        highlight_fn=None,
        freeze: bool = True,
        show_total: bool = False,
        total_label: str = "TOTAL",
    ) -> int:
        """Write a full table with headers + data rows.

        highlight_fn(row_idx, row_data) -> str|None  e.g. 'amber'

        Returns the row number after the last data row (before any total row).
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        rows = data.to_dict("records") if isinstance(data, pd.DataFrame) else data

        row = start_row + 1
        for idx, row_data in enumerate(rows):
            hl = highlight_fn(idx, row_data) if highlight_fn else None
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                val = row_data.get(key, 0)
                if pd.isna(val):
                    val = 0
                format_data_cell(ws, row, col_num, val, col_type, highlight=hl)
            row += 1
        end_row = row

        if show_total and rows:
            df_rows = pd.DataFrame(rows)
            format_data_cell(ws, row, 1, total_label, "text", is_total=True)
            for col_num, (key, col_type, _) in enumerate(columns[1:], 2):
                if col_type in ("currency", "number"):
                    val = df_rows[key].sum() if key in df_rows.columns else 0
                    format_data_cell(ws, row, col_num, val, col_type, is_total=True)
                else:
                    format_data_cell(ws, row, col_num, "", "text", is_total=True)

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"

        return end_row

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    def add_bar_chart(
        self,
        ws: Worksheet,
        header_row: int,
        end_row: int,
        value_cols: list[int],
        anchor: str,
        title: str,
        y_title: str,
        category_col: int = 2,
        colors: list[str] | None = None,
        stacked: bool = False,
    ) -> BarChart | None:
        """Add a horizontal bar chart over a table written by write_table.

        Data rows are header_row + 1 .. end_row - 1. Series titles come from
        the header row. Returns None when the table has no data rows.
        """
        if end_row <= header_row + 1:
            return None

        chart = BarChart()
        chart.type = "bar"
        chart.style = 10
        chart.title = title
        chart.y_axis.title = y_title
        chart.x_axis.scaling.orientation = "maxMin"  # rank 1 on top
        chart.height = 10
        chart.width = 22
        if stacked:
            chart.grouping = "stacked"
            chart.overlap = 100
        elif len(value_cols) == 1:
            chart.legend = None

        for col in value_cols:
            values = Reference(ws, min_col=col, min_row=header_row, max_row=end_row - 1)
            chart.add_data(values, titles_from_data=True)
        cats = Reference(ws, min_col=category_col, min_row=header_row + 1, max_row=end_row - 1)
        chart.set_categories(cats)

        for series, color in zip(chart.series, colors or []):
            series.graphicalProperties = GraphicalProperties(solidFill=color)

        ws.add_chart(chart, anchor)
        return chart

    # ------------------------------------------------------------------
    # Insight / legend blocks
    # ------------------------------------------------------------------

    def write_insight(self, ws: Worksheet, row: int, title: str, body: str, merge_cols: int = 8) -> int:
        """Write a key insight block. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = INSIGHT_TITLE_FONT
        ws.cell(row=row + 1, column=1).value = body
        ws.cell(row=row + 1, column=1).font = INSIGHT_BODY_FONT
        ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=merge_cols)
        return row + 3

    def write_legend(self, ws: Worksheet, start_row: int, items: list[tuple[str, str]]) -> int:
        """Write a classification legend table. Returns next row."""
        ws.cell(row=start_row, column=1).value = "Category"
        ws.cell(row=start_row, column=2).value = "Matched Keywords"
        format_header_row(ws, start_row, 2)

        row = start_row + 1
        for cat, desc in items:
            c1 = ws.cell(row=row, column=1)
            c1.value = cat
            c1.font = LEGEND_BOLD_FONT
            c1.fill = LIGHT_BLUE_FILL
            c1.border = THIN_BORDER

            c2 = ws.cell(row=row, column=2)
            c2.value = desc
            c2.font = DATA_FONT
            c2.fill = LIGHT_BLUE_FILL
            c2.border = THIN_BORDER
            c2.alignment = WRAP
            row += 1

        ws.column_dimensions["A"].width = 26
        ws.column_dimensions["B"].width = 75
        return row + 1

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, target: str | Path | BinaryIO) -> Path | BinaryIO:
        """Save the workbook to disk, or into an open binary buffer."""
        if isinstance(target, (str, Path)):
            target = Path(target)
            target.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(target)
        return target
