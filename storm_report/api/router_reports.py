"""
Report endpoints — summary JSON, top-N rankings, workbook and chart downloads.
"""
from __future__ import annotations

import io

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, StreamingResponse

from storm_report.config import METRICS
from storm_report.data.store import EventStore
from storm_report.data.schemas import YearRange
from storm_report.api.dependencies import get_store, parse_year_range, parse_top
from storm_report.analytics.common import sanitize_for_json, fillna_numeric
from storm_report.analytics.harm import totals_by_category, top_n
from storm_report.reports import impact_report, figures

router = APIRouter(prefix="/api", tags=["reports"])


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _suffix(year_range: YearRange | None) -> str:
    if year_range is None or year_range.is_open:
        return "all"
    return f"{year_range.start_year or 'start'}-{year_range.end_year or 'end'}"


def _download(buf: io.BytesIO, filename: str, media_type: str) -> StreamingResponse:
    # One buffer per request, nothing touches disk
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/summary")
def summary(
    store: EventStore = Depends(get_store),
    year_range: YearRange | None = Depends(parse_year_range),
    top: int = Depends(parse_top),
):
    """Full report payload: KPIs, uncategorized %, three top-N tables."""
    return JSONResponse(content=impact_report.generate_json(store, year_range, top))


@router.get("/top/{metric}")
def top_categories(
    metric: str,
    store: EventStore = Depends(get_store),
    year_range: YearRange | None = Depends(parse_year_range),
    top: int = Depends(parse_top),
):
    """Top-N categories for one metric (fatalities, injuries, damage)."""
    column = METRICS.get(metric)
    if column is None:
        raise HTTPException(400, f"Unknown metric: {metric}. Valid: {list(METRICS)}")

    events = store.get_events(year_range)
    ranked = fillna_numeric(top_n(totals_by_category(events), column, top))
    return JSONResponse(content=sanitize_for_json({
        "metric": metric,
        "period": year_range.label if year_range else "All Years",
        "date_range": store.date_range(year_range),
        "rows": ranked.to_dict("records"),
    }))


@router.get("/report/excel")
def report_excel(
    store: EventStore = Depends(get_store),
    year_range: YearRange | None = Depends(parse_year_range),
    top: int = Depends(parse_top),
):
    buf = io.BytesIO()
    impact_report.generate_excel(store, buf, year_range, top)
    return _download(buf, f"Storm_Impact_Report_{_suffix(year_range)}_top{top}.xlsx", XLSX_MEDIA_TYPE)


@router.get("/report/chart")
def report_chart(
    store: EventStore = Depends(get_store),
    year_range: YearRange | None = Depends(parse_year_range),
    top: int = Depends(parse_top),
):
    buf = io.BytesIO()
    figures.render_charts(impact_report.generate_json(store, year_range, top), buf)
    return _download(buf, f"Storm_Impact_Charts_{_suffix(year_range)}_top{top}.png", "image/png")
