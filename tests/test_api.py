import io
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from storm_report.excel.writer import ExcelWriter
from storm_report.main import create_app


@pytest.fixture
def client(api_store):
    return TestClient(create_app(load_on_startup=False))


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["rows"] == 8
    assert body["categorized_rows"] == 6
    assert body["uncategorized_pct"] == pytest.approx(25.0)
    assert (body["first_year"], body["last_year"]) == (1950, 2011)


@pytest.mark.parametrize("path", [
    "/api/health", "/api/summary", "/api/top/fatalities", "/api/report/excel", "/api/report/chart",
])
def test_before_load_returns_503(path):
    client = TestClient(create_app(load_on_startup=False))
    r = client.get(path)
    assert r.status_code == 503
    assert r.json()["detail"] == "Data not loaded yet"


def test_categories(client):
    body = client.get("/api/categories").json()
    assert len(body["rules"]) == 14
    assert body["rules"][0]["category"] == "Tornado"
    assert body["count"] == 7
    assert "Fog" in body["categories"]


def test_summary(client):
    body = client.get("/api/summary", params={"top": 3}).json()
    assert body["top"] == 3
    assert len(body["by_fatalities"]) == 3
    assert body["uncategorized_pct"] == pytest.approx(25.0)


def test_top_metric(client):
    body = client.get("/api/top/damage", params={"start_year": 2000}).json()
    assert body["metric"] == "damage"
    assert body["period"] == "2000 onwards"
    assert [r["category"] for r in body["rows"]][:2] == [
        "Hurricane/Tropical Storm", "Flood/Heavy Rain",
    ]


def test_top_unknown_metric(client):
    r = client.get("/api/top/deaths")
    assert r.status_code == 400
    assert "Unknown metric" in r.json()["detail"]


def test_bad_year_range(client):
    r = client.get("/api/top/fatalities", params={"start_year": 2010, "end_year": 2000})
    assert r.status_code == 400


def test_top_out_of_bounds(client):
    assert client.get("/api/top/fatalities", params={"top": 0}).status_code == 422


def _ranks(content: bytes) -> list:
    ws = load_workbook(io.BytesIO(content))["Fatalities"]
    return [ws.cell(row=r, column=1).value for r in range(2, ws.max_row + 1)]


def test_excel_download(client):
    r = client.get("/api/report/excel", params={"start_year": 1996, "end_year": 2011, "top": 3})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "Storm_Impact_Report_1996-2011_top3.xlsx" in r.headers["content-disposition"]
    assert _ranks(r.content) == [1, 2, 3, "TOP 3"]


def test_chart_download(client):
    r = client.get("/api/report/chart")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert "Storm_Impact_Charts_all_top15.png" in r.headers["content-disposition"]
    assert r.content[:4] == b"\x89PNG"


def test_concurrent_excel_downloads_are_independent(client, monkeypatch):
    save = ExcelWriter.save

    def slow_save(self, target):
        out = save(self, target)
        time.sleep(0.3)
        return out

    monkeypatch.setattr(ExcelWriter, "save", slow_save)
    tops = [1, 7, 3, 5]
    with ThreadPoolExecutor(max_workers=len(tops)) as pool:
        responses = list(pool.map(
            lambda top: client.get("/api/report/excel", params={"top": top}), tops,
        ))

    for top, r in zip(tops, responses):
        assert r.status_code == 200
        assert _ranks(r.content) == list(range(1, top + 1)) + [f"TOP {top}"]


def test_concurrent_chart_downloads(client):
    with ThreadPoolExecutor(max_workers=3) as pool:
        responses = list(pool.map(
            lambda top: client.get("/api/report/chart", params={"top": top}), [1, 4, 7],
        ))
    for r in responses:
        assert r.status_code == 200
        assert r.content[:8] == b"\x89PNG\r\n\x1a\n"
