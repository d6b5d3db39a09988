import io
import json
import zipfile

import pytest
from openpyxl import load_workbook

from storm_report.data.schemas import YearRange
from storm_report.reports.impact_report import generate_json, generate_excel, write_excel
from storm_report.reports.figures import render_charts


def test_generate_json(store):
    data = generate_json(store)

    assert data["period"] == "All Years"
    assert data["date_range"] == "1950-04-18 to 2011-12-01"
    assert data["uncategorized_pct"] == pytest.approx(25.0)
    assert data["summary"]["fatalities"] == 20
    assert [r["category"] for r in data["by_fatalities"]][:2] == ["Heat/Drought", "Tornado"]
    assert [r["category"] for r in data["by_damage"]][0] == "Hurricane/Tropical Storm"
    assert {r["label"] for r in data["unmatched_labels"]} == {"Fog", "OTHER"}
    json.dumps(data)  # plain Python types only


def test_generate_json_respects_top_and_years(store):
    data = generate_json(store, YearRange(start_year=2000), top=2)

    assert data["period"] == "2000 onwards"
    assert data["top"] == 2
    assert [r["category"] for r in data["by_fatalities"]] == ["Heat/Drought", "Flood/Heavy Rain"]
    assert [r["rank"] for r in data["by_injuries"]] == [1, 2]
    assert data["summary"]["events"] == 5


def test_generate_excel(store, tmp_path):
    path = generate_excel(store, tmp_path / "out" / "report.xlsx")
    assert path.exists()

    wb = load_workbook(path)
    assert wb.sheetnames == [
        "Executive Summary", "Fatalities", "Injuries", "Economic Damage", "Unmatched Labels",
    ]

    ws = wb["Fatalities"]
    assert [c.value for c in ws[1]] == ["Rank", "Category", "Fatalities", "% of Total", "Events"]
    assert ws["B2"].value == "Heat/Drought"
    assert ws["C2"].value == 10

    ws = wb["Economic Damage"]
    assert ws["B2"].value == "Hurricane/Tropical Storm"
    assert ws["C2"].value == 3_000_000_000
    assert ws["D2"].value == 500_000_000

    summary = wb["Executive Summary"]
    label = next(c for row in summary.iter_rows() for c in row if c.value == "UNCATEGORIZED EVENTS")
    assert summary.cell(row=label.row - 1, column=label.column).value == pytest.approx(25.0)


def test_generate_excel_has_three_charts(store, tmp_path):
    path = generate_excel(store, tmp_path / "report.xlsx")
    with zipfile.ZipFile(path) as zf:
        charts = [n for n in zf.namelist() if n.startswith("xl/charts/chart")]
    assert len(charts) == 3


def test_generate_excel_without_unmatched_sheet(store, tmp_path):
    path = generate_excel(store, tmp_path / "report.xlsx", YearRange(2005, 2005))
    assert "Unmatched Labels" not in load_workbook(path).sheetnames


def test_render_charts(store, tmp_path):
    data = generate_json(store)
    path = render_charts(data, tmp_path / "figs" / "charts.png")

    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def _fill(cell) -> str:
    return cell.fill.fgColor.rgb[-6:]


def test_ranking_sheets_shade_unmatched_and_total(store, tmp_path):
    wb = load_workbook(generate_excel(store, tmp_path / "report.xlsx"))
    ws = wb["Fatalities"]

    # Heat, Tornado, Flood, Hurricane, then the zero-fatality ties alphabetically
    assert [ws.cell(row=r, column=2).value for r in range(2, 9)] == [
        "Heat/Drought", "Tornado", "Flood/Heavy Rain", "Hurricane/Tropical Storm",
        "Fog", "OTHER", "Thunderstorm Wind",
    ]
    assert _fill(ws["B6"]) == "FFF8E1"
    assert _fill(ws["B7"]) == "FFF8E1"
    assert _fill(ws["B2"]) != "FFF8E1"
    assert _fill(ws["B8"]) != "FFF8E1"

    assert ws["A9"].value == "TOP 15"
    assert ws["C9"].value == 20
    assert ws["E9"].value == 8
    assert ws["A9"].font.bold

    unmatched = wb["Unmatched Labels"]
    assert unmatched["A4"].value == "TOTAL"
    assert unmatched["B4"].value == 2


def test_write_excel_into_buffer(store):
    data = generate_json(store, top=3)
    buf = io.BytesIO()
    assert write_excel(data, buf) is buf

    ws = load_workbook(io.BytesIO(buf.getvalue()))["Injuries"]
    assert [ws.cell(row=r, column=1).value for r in range(2, 6)] == [1, 2, 3, "TOP 3"]


def test_render_charts_into_buffer(store):
    buf = io.BytesIO()
    render_charts(generate_json(store), buf)
    assert buf.getvalue()[:4] == b"\x89PNG"
