from pathlib import Path

import pandas as pd
import pytest

from storm_report.data.store import EventStore
from storm_report.api.dependencies import set_store

RAW_COLUMNS = [
    "STATE", "BGN_DATE", "EVTYPE", "FATALITIES", "INJURIES",
    "PROPDMG", "PROPDMGEXP", "CROPDMG", "CROPDMGEXP", "REFNUM",
]

# 8 events, 7 categories (two fall back to their raw label: "Fog", "OTHER")
RAW_ROWS = [
    ("KS", "4/18/1950 0:00:00", "TORNADO", 4, 15, 25.0, "K", 0.0, "", 1),
    ("TX", "1/5/1996 0:00:00", "TSTM WIND", 0, 2, 1.5, "M", 10.0, "k", 2),
    ("MO", "6/1/2000 0:00:00", "FLASH FLOOD", 3, 0, 2.0, "B", 5.0, "M", 3),
    ("IL", "7/4/2005 0:00:00", "EXCESSIVE HEAT", 10, 20, 0.0, "", 0.0, "", 4),
    ("LA", "8/29/2005 0:00:00", "HURRICANE/TYPHOON", 1, 1, 3.0, "b", 0.5, "B", 5),
    ("CA", "3/3/2010 0:00:00", " Fog ", 0, 3, 0.0, "", 0.0, "", 6),
    ("OK", "12/1/2011 0:00:00", "TORNADO F0", 2, 5, 50.0, "K", 0.0, "", 7),
    ("AK", "not a date", "OTHER", 0, 0, 7.0, "?", 0.0, "", 8),
]


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    return pd.DataFrame(RAW_ROWS, columns=RAW_COLUMNS)


@pytest.fixture
def storm_csv(tmp_path, raw_frame) -> Path:
    path = tmp_path / "raw" / "StormData.csv.bz2"
    path.parent.mkdir(parents=True)
    raw_frame.to_csv(path, index=False, compression="bz2")
    return path


@pytest.fixture
def store(storm_csv) -> EventStore:
    return EventStore().load(storm_csv, url="http://invalid.example/never-fetched")


@pytest.fixture
def api_store(store):
    set_store(store)
    yield store
    set_store(None)
