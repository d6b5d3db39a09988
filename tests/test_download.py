import pytest
import requests

import storm_report.data.download as download
from storm_report.data.download import dataset_path, fetch_dataset


class FakeResponse:
    def __init__(self, chunks, status=200, fail_after=None):
        self.chunks = chunks
        self.status = status
        self.fail_after = fail_after
        self.headers = {"content-length": str(sum(len(c) for c in chunks))}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def iter_content(self, chunk_size=None):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield chunk


class CallLog(list):
    """Requested URLs, plus an install() hook for the fake response."""


@pytest.fixture
def calls(monkeypatch):
    seen = CallLog()

    def install(response):
        def fake_get(url, stream=False, timeout=None):
            seen.append(url)
            return response
        monkeypatch.setattr(download.requests, "get", fake_get)

    seen.install = install
    return seen


def test_dataset_path(tmp_path):
    assert dataset_path(tmp_path) == tmp_path / "StormData.csv.bz2"


def test_downloads_when_missing(tmp_path, calls):
    calls.install(FakeResponse([b"abc", b"", b"def"]))
    dest = tmp_path / "raw" / "StormData.csv.bz2"

    path = fetch_dataset("http://example.test/storms.bz2", dest)

    assert path == dest
    assert dest.read_bytes() == b"abcdef"
    assert calls == ["http://example.test/storms.bz2"]
    assert not (tmp_path / "raw" / "StormData.csv.bz2.part").exists()


def test_skips_download_when_cached(tmp_path, calls):
    calls.install(FakeResponse([b"new"]))
    dest = tmp_path / "StormData.csv.bz2"
    dest.write_bytes(b"cached")

    fetch_dataset("http://example.test/storms.bz2", dest)

    assert calls == []
    assert dest.read_bytes() == b"cached"


def test_empty_cache_file_is_refetched(tmp_path, calls):
    calls.install(FakeResponse([b"fresh"]))
    dest = tmp_path / "StormData.csv.bz2"
    dest.write_bytes(b"")

    fetch_dataset("http://example.test/storms.bz2", dest)

    assert dest.read_bytes() == b"fresh"


def test_force_redownloads(tmp_path, calls):
    calls.install(FakeResponse([b"fresh"]))
    dest = tmp_path / "StormData.csv.bz2"
    dest.write_bytes(b"stale")

    fetch_dataset("http://example.test/storms.bz2", dest, force=True)

    assert dest.read_bytes() == b"fresh"
    assert len(calls) == 1


def test_http_error_propagates(tmp_path, calls):
    calls.install(FakeResponse([b"nope"], status=404))
    dest = tmp_path / "StormData.csv.bz2"

    with pytest.raises(requests.HTTPError):
        fetch_dataset("http://example.test/missing.bz2", dest)
    assert not dest.exists()


def test_interrupted_download_leaves_no_files(tmp_path, calls):
    calls.install(FakeResponse([b"abc", b"def"], fail_after=1))
    dest = tmp_path / "StormData.csv.bz2"

    with pytest.raises(requests.ConnectionError):
        fetch_dataset("http://example.test/storms.bz2", dest)
    assert not dest.exists()
    assert not (tmp_path / "StormData.csv.bz2.part").exists()
