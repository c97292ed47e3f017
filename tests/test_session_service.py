"""
Tests for SessionResolver: minting, trusting and signing session tokens.
"""

import uuid

import pytest
from starlette.responses import Response

from services.session_service import SessionResolver
from app.exceptions import UnauthorizedError
from test_fixtures import make_settings


def test_ensure_session_mints_uuid_when_missing():
    resolver = SessionResolver()

    session_id, is_new = resolver.ensure_session(None)

    assert is_new is True
    assert str(uuid.UUID(session_id)) == session_id


def test_ensure_session_mints_distinct_tokens():
    resolver = SessionResolver()

    first = resolver.ensure_session("")
    second = resolver.ensure_session("")

    assert first.is_new and second.is_new
    assert first.session_id != second.session_id


def test_ensure_session_trusts_existing_token():
    resolver = SessionResolver()
    token = str(uuid.uuid4())

    resolved = resolver.ensure_session(token)

    assert resolved.session_id == token
    assert resolved.is_new is False


def test_require_session_returns_token_as_is():
    resolver = SessionResolver()
    token = str(uuid.uuid4())

    assert resolver.require_session(token) == token


@pytest.mark.parametrize("token", [None, ""])
def test_require_session_without_token_raises(token):
    resolver = SessionResolver()

    with pytest.raises(UnauthorizedError) as exc_info:
        resolver.require_session(token)

    assert exc_info.value.http_status == 400
    assert exc_info.value.to_dict() == {"error": "session not found"}


def test_issue_cookie_sets_seven_day_root_cookie():
    resolver = SessionResolver.from_settings(make_settings())
    response = Response()

    resolver.issue_cookie(response, "abc")

    header = response.headers["set-cookie"]
    assert header.startswith("session_id=abc;")
    assert "Max-Age=604800" in header
    assert "Path=/" in header
    assert "HttpOnly" in header


def test_signed_token_round_trip():
    resolver = SessionResolver(secret="s3cret")
    session_id = str(uuid.uuid4())

    token = resolver.encode(session_id)

    assert token != session_id
    assert token.startswith(session_id + ".")
    assert resolver.require_session(token) == session_id
    assert resolver.ensure_session(token) == (session_id, False)


def test_signed_resolver_rejects_unsigned_or_tampered_tokens():
    resolver = SessionResolver(secret="s3cret")
    session_id = str(uuid.uuid4())
    token = resolver.encode(session_id)
    forged = SessionResolver(secret="other").encode(session_id)

    for bad in (session_id, token[:-1] + ("0" if token[-1] != "0" else "1"), forged):
        with pytest.raises(UnauthorizedError):
            resolver.require_session(bad)
        resolved = resolver.ensure_session(bad)
        assert resolved.is_new is True
        assert resolved.session_id != session_id


def test_from_settings_reads_cookie_options():
    resolver = SessionResolver.from_settings(
        make_settings(
            session_cookie_name="diet_session",
            session_max_age_days=2,
            session_cookie_secure=True,
            session_secret="k",
        )
    )

    assert resolver.cookie_name == "diet_session"
    assert resolver.max_age_seconds == 2 * 24 * 60 * 60
    assert resolver.secure is True
    assert resolver.signs_tokens is True
