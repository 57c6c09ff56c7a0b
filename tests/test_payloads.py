"""Tests for payload construction and wire shapes."""

import pytest

from login_consent import payloads
from login_consent.models import (
    ConsentAccept,
    ConsentRequest,
    ConsentSubmission,
    Deny,
    LoginAccept,
    LoginRequest,
    Session,
)
from support import consent_request


class TestNormalizeScope:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, ()),
            ("openid", ("openid",)),
            (["openid"], ("openid",)),
            (["openid", "offline"], ("openid", "offline")),
            (["offline", "openid", "offline"], ("offline", "openid")),
            (["", "openid"], ("openid",)),
            ([], ()),
        ],
    )
    def test_shapes(self, raw, expected):
        assert payloads.normalize_scope(raw) == expected

    def test_idempotent(self):
        once = payloads.normalize_scope(["openid", "openid", "email"])
        assert payloads.normalize_scope(once) == once


class TestBuilders:
    def test_deny_is_fixed(self):
        assert payloads.access_denied() == Deny()
        assert set(Deny().to_payload()) == {"error", "error_description"}

    def test_is_deny_is_exact(self):
        assert payloads.is_deny("Deny access")
        assert not payloads.is_deny("deny access")
        assert not payloads.is_deny("")
        assert not payloads.is_deny(None)

    def test_consent_audience_comes_from_request(self):
        request = consent_request(audience=("https://api.example.com", "https://billing.example.com"))
        sub = ConsentSubmission(challenge="abc", grant_scope=("openid",))
        accept = payloads.accepted_consent(sub, request, 60)
        assert accept.grant_access_token_audience == ("https://api.example.com", "https://billing.example.com")
        assert accept.remember is False
        assert accept.remember_for == 60


class TestWireShapes:
    def test_login_accept_omits_unset_fields(self):
        assert LoginAccept(subject="thomas@plenty.com").to_payload() == {"subject": "thomas@plenty.com"}

    def test_login_accept_full(self):
        payload = LoginAccept(subject="s", remember=True, remember_for=0, acr="0").to_payload()
        assert payload == {"subject": "s", "remember": True, "remember_for": 0, "acr": "0"}

    def test_consent_accept(self):
        accept = ConsentAccept(
            grant_scope=("openid",),
            grant_access_token_audience=(),
            session=Session(id_token={"given_name": "Thomas"}),
            remember=False,
            remember_for=3600,
        )
        assert accept.to_payload() == {
            "grant_scope": ["openid"],
            "grant_access_token_audience": [],
            "session": {"access_token": {}, "id_token": {"given_name": "Thomas"}},
            "remember": False,
            "remember_for": 3600,
        }

    def test_requests_parse_admin_payload(self):
        login = LoginRequest.from_payload("xyz", {"skip": True, "subject": "u", "client": {"client_id": "app"}})
        assert login.skip is True and login.subject == "u" and login.challenge == "xyz"

        consent = ConsentRequest.from_payload(
            "abc",
            {
                "skip": False,
                "subject": "u",
                "requested_scope": ["openid", "offline", "openid"],
                "requested_access_token_audience": None,
            },
        )
        assert consent.requested_scope == ("openid", "offline")
        assert consent.requested_access_token_audience == ()
        assert consent.client == {}
