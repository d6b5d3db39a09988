"""
Storm Impact Report — most harmful and most costly weather categories.
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import pandas as pd

from storm_report.config import TOP_N, UNMATCHED_LABELS_SHOWN
from storm_report.data.store import EventStore
from storm_report.data.schemas import YearRange
from storm_report.data.classify import CATEGORY_NAMES, category_legend, uncategorized_pct, uncategorized_labels
from storm_report.analytics.common import sanitize_for_json, fillna_numeric
from storm_report.analytics.harm import totals_by_category, top_n, harm_summary
from storm_report.excel.writer import ExcelWriter
from storm_report.excel.styles import (
    FATALITY_COLOR, INJURY_COLOR, PROPERTY_COLOR, CROP_COLOR, WARNING_KPI_FONT,
)

# Uncategorized share above this is flagged in red on the summary sheet
UNCATEGORIZED_WARN_PCT = 5.0

CHARTS = [
    {
        "key": "by_fatalities",
        "metric": "fatalities",
        "sheet": "Fatalities",
        "title": "Top {n} Categories by Fatalities",
        "axis": "Fatalities",
        "columns": [
            ("rank", "number", "Rank"),
            ("category", "text", "Category"),
            ("fatalities", "number", "Fatalities"),
            ("share", "percent", "% of Total"),
            ("events", "number", "Events"),
        ],
        "value_cols": [3],
        "colors": [FATALITY_COLOR],
    },
    {
        "key": "by_injuries",
        "metric": "injuries",
        "sheet": "Injuries",
        "title": "Top {n} Categories by Injuries",
        "axis": "Injuries",
        "columns": [
            ("rank", "number", "Rank"),
            ("category", "text", "Category"),
            ("injuries", "number", "Injuries"),
            ("share", "percent", "% of Total"),
            ("events", "number", "Events"),
        ],
        "value_cols": [3],
        "colors": [INJURY_COLOR],
    },
    {
        "key": "by_damage",
        "metric": "total_damage_usd",
        "sheet": "Economic Damage",
        "title": "Top {n} Categories by Economic Damage",
        "axis": "Damage (USD)",
        "columns": [
            ("rank", "number", "Rank"),
            ("category", "text", "Category"),
            ("prop_damage_usd", "currency", "Property Damage"),
            ("crop_damage_usd", "currency", "Crop Damage"),
            ("total_damage_usd", "currency", "Total Damage"),
            ("share", "percent", "% of Total"),
        ],
        "value_cols": [3, 4],
        "colors": [PROPERTY_COLOR, CROP_COLOR],
        "stacked": True,
    },
]


def generate_json(
    store: EventStore,
    year_range: YearRange | None = None,
    top: int = TOP_N,
) -> dict:
    events = store.get_events(year_range)
    totals = totals_by_category(events)
    period = year_range.label if year_range else "All Years"

    data = {
        "date_range": store.date_range(year_range),
        "period": period,
        "top": top,
        "summary": harm_summary(events),
        "uncategorized_pct": uncategorized_pct(events),
        "unmatched_labels": uncategorized_labels(events, UNMATCHED_LABELS_SHOWN).to_dict("records"),
    }
    for spec in CHARTS:
        data[spec["key"]] = fillna_numeric(top_n(totals, spec["metric"], top)).to_dict("records")
    return sanitize_for_json(data)


def _highlight_unmatched(_idx: int, row: dict) -> str | None:
    """Amber for categories that are raw labels no rule matched."""
    return None if row["category"] in CATEGORY_NAMES else "amber"


def generate_excel(
    store: EventStore,
    output: str | Path | BinaryIO,
    year_range: YearRange | None = None,
    top: int = TOP_N,
) -> Path | BinaryIO:
    return write_excel(generate_json(store, year_range, top), output)


def write_excel(data: dict, output: str | Path | BinaryIO) -> Path | BinaryIO:
    """Build the workbook from a generate_json payload."""
    s = data["summary"]
    top = data["top"]
    ew = ExcelWriter()

    # Executive Summary
    ws = ew.add_sheet("Executive Summary")
    ew.write_title(ws, "STORM IMPACT REPORT",
                   f"U.S. Severe Weather Events  |  {data['date_range']}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "HUMAN TOLL")
    row = ew.write_kpi_row(ws, row, [
        (s["events"], "EVENTS RECORDED", "number"),
        (s["fatalities"], "FATALITIES", "number"),
        (s["injuries"], "INJURIES", "number"),
    ])

    row = ew.write_section(ws, row, "ECONOMIC DAMAGE")
    row = ew.write_kpi_row(ws, row, [
        (s["total_damage_usd"], "TOTAL DAMAGE", "currency"),
        (s["prop_damage_usd"], "PROPERTY DAMAGE", "currency"),
        (s["crop_damage_usd"], "CROP DAMAGE", "currency"),
    ])

    row = ew.write_section(ws, row, "CLASSIFICATION COVERAGE")
    pct = data["uncategorized_pct"]
    pct_kpi = (pct, "UNCATEGORIZED EVENTS", "percent")
    if pct > UNCATEGORIZED_WARN_PCT:
        pct_kpi += (WARNING_KPI_FONT,)
    row = ew.write_kpi_row(ws, row, [
        pct_kpi,
        (s["categories"], "DISTINCT CATEGORIES", "number"),
    ])
    row = ew.write_insight(
        ws, row, "How events are categorized",
        "Each EVTYPE label is tested against the keyword rules below in order; the first match wins. "
        "Labels matching no rule are kept as their own category and counted as uncategorized. "
        "They are shaded amber in the ranking sheets.",
    )
    row = ew.write_legend(ws, row, category_legend())

    # One sheet per chart: ranked table + native bar chart
    for spec in CHARTS:
        ws_c = ew.add_sheet(spec["sheet"])
        end_row = ew.write_table(
            ws_c, 1, spec["columns"], data[spec["key"]],
            highlight_fn=_highlight_unmatched,
            show_total=True,
            total_label=f"TOP {top}",
        )
        ew.add_bar_chart(
            ws_c,
            header_row=1,
            end_row=end_row,
            value_cols=spec["value_cols"],
            anchor=f"A{end_row + 2}",
            title=spec["title"].format(n=top),
            y_title=spec["axis"],
            colors=spec["colors"],
            stacked=spec.get("stacked", False),
        )

    if data["unmatched_labels"]:
        ws_u = ew.add_sheet("Unmatched Labels")
        ew.write_table(ws_u, 1, [
            ("label", "text", "Raw EVTYPE"),
            ("events", "number", "Events"),
        ], data["unmatched_labels"], show_total=True)

    return ew.save(output)
