"""Tests for fauxapi.history — RequestHistory filtering."""

from fauxapi.history import RequestHistory, RequestRecord
from fauxapi.http.response import MockResponse


def _record(method: str, path: str, status: int = 200) -> RequestRecord:
    return RequestRecord(method=method, path=path, response=MockResponse(status=status))


class TestRequestHistory:
    def test_empty(self) -> None:
        history = RequestHistory()
        assert len(history) == 0
        assert history.filter() == []
        assert history.last() is None

    def test_records_in_order(self) -> None:
        history = RequestHistory()
        first, second = _record("GET", "/a"), _record("POST", "/b")
        history.record(first)
        history.record(second)
        assert history.filter() == [first, second]
        assert history.last() is second

    def test_filter_by_method_is_case_insensitive(self) -> None:
        history = RequestHistory()
        history.record(_record("GET", "/a"))
        history.record(_record("POST", "/a"))
        assert [r.method for r in history.filter("post")] == ["POST"]

    def test_filter_by_path(self) -> None:
        history = RequestHistory()
        history.record(_record("GET", "/a"))
        history.record(_record("GET", "/b"))
        assert [r.path for r in history.filter(path="/b")] == ["/b"]

    def test_filter_by_both(self) -> None:
        history = RequestHistory()
        history.record(_record("GET", "/a", 200))
        history.record(_record("GET", "/b", 201))
        history.record(_record("POST", "/b", 202))
        last = history.last("GET", "/b")
        assert last is not None
        assert last.response.status == 201

    def test_clear(self) -> None:
        history = RequestHistory()
        history.record(_record("GET", "/a"))
        history.clear()
        assert len(history) == 0
