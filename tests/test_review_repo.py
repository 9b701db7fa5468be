"""Tests for the Realtime Database history store and its REST client."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import requests
from conftest import make_record

from domain.errors import DatabaseError, PersistenceError
from infra.db.realtime_db import RealtimeDatabaseClient
from infra.db.repositories.review_repo import (
    FirebaseReviewRepository,
    format_local,
    materialize,
    parse_timestamp,
    sanitize_path_key,
)


class FakeDatabase:
    """In-memory stand-in for RealtimeDatabaseClient keyed by path."""

    def __init__(self, fail_indexed: bool = False, fail_plain_times: int = 0):
        self.tree = {}
        self.fail_indexed = fail_indexed
        self.fail_plain_times = fail_plain_times
        self.gets = []

    def get(self, path, order_by=None, limit_to_last=None):
        self.gets.append((path, order_by, limit_to_last))
        if order_by and self.fail_indexed:
            raise DatabaseError('Index not defined, add ".indexOn": "date"', status_code=400)
        if not order_by and self.fail_plain_times:
            self.fail_plain_times -= 1
            raise DatabaseError("boom", status_code=500)
        prefix = path.rstrip("/") + "/"
        children = {k[len(prefix):]: v for k, v in self.tree.items() if k.startswith(prefix)}
        return children or None

    def put(self, path, value):
        self.tree[path] = value


def _iso(minutes: int) -> str:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return (base + timedelta(minutes=minutes)).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _seed(db: FakeDatabase, repo: FirebaseReviewRepository, count: int) -> None:
    for i in range(count):
        repo.save("u1", make_record(record_id=_iso(i)))


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_sanitize_replaces_illegal_characters(self):
        assert sanitize_path_key("a.b#c") == "a_b_c"
        assert sanitize_path_key("x$y[0]") == "x_y_0_"
        assert sanitize_path_key("plain-id") == "plain-id"

    def test_parse_timestamp_accepts_js_iso_format(self):
        assert parse_timestamp("2024-05-01T10:00:00.000Z") == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    def test_parse_timestamp_garbage_sorts_oldest(self):
        assert parse_timestamp("not a date") < parse_timestamp("1970-01-01T00:00:00Z")

    def test_materialize_discards_incomplete_records(self):
        good = make_record().to_dict()
        data = {
            "ok": good,
            "no_date": {**good, "date": ""},
            "no_code": {k: v for k, v in good.items() if k != "code"},
            "no_result": {**good, "result": None},
            "junk": "string",
        }
        records = materialize(data)
        assert [r.id for r in records] == [good["id"]]

    def test_materialize_discards_unparsable_dates(self):
        good = make_record().to_dict()
        bad = {**make_record(record_id="r-bad").to_dict(), "date": "yesterday"}
        assert [r.id for r in materialize({"a": good, "b": bad})] == [good["id"]]

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_format_local_never_overflows_west_of_utc(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        time.tzset()
        try:
            assert ":" in format_local("0001-01-01T00:00:00Z")
            assert ":" in format_local("garbage")
        finally:
            monkeypatch.undo()
            time.tzset()

    def test_materialize_handles_array_snapshots(self):
        good = make_record().to_dict()
        assert len(materialize([None, good])) == 1

    def test_materialize_dedupes_by_id_keeping_newest(self):
        older = make_record(record_id="r1", date=_iso(1)).to_dict()
        newer = make_record(record_id="r1", date=_iso(5), score=99).to_dict()
        records = materialize({"a": older, "b": newer})
        assert len(records) == 1
        assert records[0].result.score == 99


# ---------------------------------------------------------------------------
# FirebaseReviewRepository
# ---------------------------------------------------------------------------


class TestFirebaseReviewRepository:
    def test_save_writes_under_sanitized_key_and_keeps_original_id(self):
        db = FakeDatabase()
        repo = FirebaseReviewRepository(db)
        repo.save("u1", make_record(record_id="a.b#c", date=_iso(0)))

        assert "users/u1/reviews/a_b_c" in db.tree
        listed = repo.list_reviews("u1")
        assert listed[0].id == "a.b#c"

    def test_save_overwrites_same_id(self):
        db = FakeDatabase()
        repo = FirebaseReviewRepository(db)
        repo.save("u1", make_record(record_id="r1", score=10))
        repo.save("u1", make_record(record_id="r1", score=90))
        listed = repo.list_reviews("u1")
        assert len(listed) == 1
        assert listed[0].result.score == 90

    def test_list_returns_newest_first_capped_at_twenty(self):
        db = FakeDatabase()
        repo = FirebaseReviewRepository(db)
        _seed(db, repo, 25)

        listed = repo.list_reviews("u1")
        assert len(listed) == 20
        assert listed[0].created_at == _iso(24)
        assert listed[-1].created_at == _iso(5)
        assert db.gets[0] == ("users/u1/reviews", "date", 20)

    def test_indexed_query_failure_falls_back_to_plain_read(self):
        db = FakeDatabase(fail_indexed=True)
        repo = FirebaseReviewRepository(db)
        _seed(db, repo, 3)

        listing = repo.fetch("u1")
        assert [r.created_at for r in listing.records] == [_iso(2), _iso(1), _iso(0)]
        assert listing.read_failed is False
        assert db.gets[-1] == ("users/u1/reviews", None, None)

    def test_last_resort_read_after_total_failure(self):
        db = FakeDatabase(fail_indexed=True, fail_plain_times=1)
        repo = FirebaseReviewRepository(db)
        _seed(db, repo, 2)

        assert len(repo.list_reviews("u1")) == 2
        assert len(db.gets) == 3

    def test_read_failure_is_swallowed_but_recorded(self):
        db = FakeDatabase(fail_indexed=True, fail_plain_times=5)
        repo = FirebaseReviewRepository(db)

        listing = repo.fetch("u1")
        assert listing.records == []
        assert listing.read_failed is True
        assert repo.list_reviews("u1") == []

    def test_empty_history_is_not_a_failure(self):
        listing = FirebaseReviewRepository(FakeDatabase()).fetch("nobody")
        assert listing.is_empty
        assert listing.read_failed is False

    def test_save_failure_raises_persistence_error(self):
        db = MagicMock()
        db.put.side_effect = DatabaseError("permission denied", status_code=401)
        with pytest.raises(PersistenceError):
            FirebaseReviewRepository(db).save("u1", make_record())


# ---------------------------------------------------------------------------
# RealtimeDatabaseClient
# ---------------------------------------------------------------------------


def _response(status=200, payload=None):
    resp = MagicMock()
    resp.status_code = status
    resp.content = b"x" if payload is not None else b""
    resp.json.return_value = payload
    resp.text = str(payload)
    return resp


class TestRealtimeDatabaseClient:
    def test_get_builds_query_and_auth(self):
        http = MagicMock()
        http.request.return_value = _response(payload={"a": 1})
        client = RealtimeDatabaseClient("https://db.example.com/", lambda: "tok", session=http, timeout=5)

        assert client.get("users/u1/reviews", order_by="date", limit_to_last=20) == {"a": 1}
        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        assert method == "GET"
        assert url == "https://db.example.com/users/u1/reviews.json"
        assert kwargs["params"] == {"orderBy": '"date"', "limitToLast": "20", "auth": "tok"}
        assert kwargs["timeout"] == 5

    def test_put_sends_json_body(self):
        http = MagicMock()
        http.request.return_value = _response(payload={"id": "r1"})
        client = RealtimeDatabaseClient("https://db.example.com", lambda: None, session=http)

        client.put("users/u1/reviews/r1", {"id": "r1"})
        assert http.request.call_args.args[0] == "PUT"
        assert http.request.call_args.kwargs["json"] == {"id": "r1"}
        assert "auth" not in http.request.call_args.kwargs["params"]

    def test_http_error_raises_database_error(self):
        http = MagicMock()
        http.request.return_value = _response(status=400, payload={"error": "Index not defined"})
        client = RealtimeDatabaseClient("https://db.example.com", lambda: "tok", session=http)

        with pytest.raises(DatabaseError) as exc:
            client.get("users/u1/reviews", order_by="date")
        assert exc.value.status_code == 400
        assert "Index not defined" in str(exc.value)

    def test_transport_error_raises_database_error(self):
        http = MagicMock()
        http.request.side_effect = requests.ConnectionError("down")
        client = RealtimeDatabaseClient("https://db.example.com", lambda: "tok", session=http)
        with pytest.raises(DatabaseError):
            client.get("users/u1/reviews")

    def test_missing_url_raises_database_error(self):
        with pytest.raises(DatabaseError):
            RealtimeDatabaseClient("", lambda: "tok", session=MagicMock()).get("x")

    def test_any_token_failure_raises_database_error(self):
        def broken_token():
            raise KeyError("id_token")

        http = MagicMock()
        client = RealtimeDatabaseClient("https://db.example.com", broken_token, session=http)
        with pytest.raises(DatabaseError):
            client.put("users/u1/reviews/r1", {"id": "r1"})
        http.request.assert_not_called()

    def test_non_json_success_body_raises_database_error(self):
        http = MagicMock()
        resp = _response(payload={})
        resp.json.side_effect = ValueError("not json")
        http.request.return_value = resp
        client = RealtimeDatabaseClient("https://db.example.com", lambda: "tok", session=http)
        with pytest.raises(DatabaseError):
            client.get("users/u1/reviews")
