"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest

from reading_tracker.core.errors import (
    AuthenticationRequiredError,
    InvalidReadingDayError,
    StoreUnavailableError,
)
from reading_tracker.services import progress_store


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_authentication_required_error(self):
        err = AuthenticationRequiredError(action="reading progress")
        assert err.http_status == 401
        assert err.code == "AUTHENTICATION_REQUIRED"
        assert err.to_dict()["details"]["action"] == "reading progress"

    def test_invalid_reading_day_error(self):
        err = InvalidReadingDayError(reading_day=400)
        assert err.http_status == 422
        assert err.code == "INVALID_READING_DAY"
        assert "400" in err.message
        assert err.to_dict()["details"]["reading_day"] == 400

    def test_store_unavailable_error(self):
        err = StoreUnavailableError("fetch_verse_pool")
        assert err.http_status == 503
        assert err.code == "STORE_UNAVAILABLE"
        assert "fetch_verse_pool" in err.message


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestAuthenticationRequired:
    @pytest.mark.parametrize("headers", [{}, {"X-User-Id": ""}])
    def test_complete_without_user_rejected_before_store(self, client, monkeypatch, headers):
        calls = []
        monkeypatch.setattr(
            progress_store, "upsert_completed_reading",
            lambda *a, **kw: calls.append((a, kw)),
        )
        r = client.post("/reading/complete", json={"reading_day": 3}, headers=headers)
        assert r.status_code == 401
        assert r.json()["code"] == "AUTHENTICATION_REQUIRED"
        assert calls == []

    @pytest.mark.parametrize("path", ["/reading/progress", "/reading/summary", "/achievements"])
    def test_user_endpoints_require_header(self, client, path):
        r = client.get(path)
        assert r.status_code == 401
        assert r.json()["code"] == "AUTHENTICATION_REQUIRED"

    def test_daily_reading_is_public(self, client):
        assert client.get("/reading/today").status_code == 200


class TestStoreUnavailable:
    def test_progress_returns_503_envelope(self, client, auth_headers, monkeypatch):
        def fail(*args, **kwargs):
            raise StoreUnavailableError("fetch_completed_readings")

        monkeypatch.setattr(progress_store, "fetch_completed_readings", fail)
        r = client.get("/reading/progress", headers=auth_headers)
        assert r.status_code == 503
        body = r.json()
        assert body["code"] == "STORE_UNAVAILABLE"
        assert body["details"]["operation"] == "fetch_completed_readings"

    def test_failed_completion_leaves_no_row(self, client, auth_headers, monkeypatch):
        def fail(*args, **kwargs):
            raise StoreUnavailableError("upsert_completed_reading")

        monkeypatch.setattr(progress_store, "upsert_completed_reading", fail)
        r = client.post("/reading/complete", json={"reading_day": 3}, headers=auth_headers)
        assert r.status_code == 503
        monkeypatch.undo()
        assert client.get("/reading/progress", headers=auth_headers).json()["total"] == 0


class TestValidationErrors:
    def test_non_integer_day(self, client, auth_headers):
        r = client.post("/reading/complete", json={"reading_day": "soon"}, headers=auth_headers)
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)

    def test_notes_too_long(self, client, auth_headers):
        r = client.post(
            "/reading/complete",
            json={"reading_day": 3, "notes": "x" * 2_001},
            headers=auth_headers,
        )
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"
