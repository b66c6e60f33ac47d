"""Tests for the error taxonomy in taskdesk.errors."""

from __future__ import annotations

from taskdesk.errors import (
    NetworkError,
    RemoteError,
    TaskDeskError,
    ValidationError,
    excerpt,
)


class TestHierarchy:
    def test_all_errors_share_a_base(self):
        for exc in (
            NetworkError("GET", "http://x", "down"),
            RemoteError("boom"),
            ValidationError("missing"),
        ):
            assert isinstance(exc, TaskDeskError)
            assert isinstance(exc, RuntimeError)


class TestNetworkError:
    def test_message_names_request(self):
        err = NetworkError("POST", "http://x/tasks/", "Connection refused")
        assert str(err) == "POST http://x/tasks/ failed: Connection refused"
        assert err.reason == "Connection refused"


class TestRemoteError:
    def test_not_found(self):
        assert RemoteError("gone", status=404).is_not_found is True
        assert RemoteError("bad", status=500).is_not_found is False
        assert RemoteError("malformed").is_not_found is False

    def test_body_is_clipped(self):
        err = RemoteError("bad", status=500, body="x" * 500)
        assert len(err.body) == 203
        assert err.body.endswith("...")


class TestValidationError:
    def test_fields_default_empty(self):
        assert ValidationError("oops").fields == []

    def test_fields_are_copied(self):
        fields = ["title"]
        err = ValidationError("oops", fields=fields)
        fields.append("description")
        assert err.fields == ["title"]


class TestExcerpt:
    def test_collapses_whitespace(self):
        assert excerpt("a\n  b\tc") == "a b c"

    def test_empty(self):
        assert excerpt("") == ""

    def test_short_text_unchanged(self):
        assert excerpt("not found", limit=20) == "not found"
