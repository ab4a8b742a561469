"""Unit tests for relay token authentication."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

import browser_proxy.handlers.websocket.auth as auth_mod
from browser_proxy.errors import AuthenticationFailedError
from browser_proxy.handlers.websocket.auth import (
    _select_token,
    validate_token,
    _validate_candidate,
    ensure_authenticated,
    authenticate_websocket,
    extract_websocket_token,
)


def _ws(query: dict[str, str] | None = None, headers: dict[str, str] | None = None):
    return SimpleNamespace(query_params=query or {}, headers=headers or {})


def test_validate_token_correct(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_mod, "AUTH_TOKEN", "secret123")
    assert validate_token("secret123") is True


def test_validate_token_wrong(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_mod, "AUTH_TOKEN", "secret123")
    assert validate_token("secret124") is False
    assert validate_token("secret12") is False


def test_validate_token_rejects_empty_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_mod, "AUTH_TOKEN", "")
    assert validate_token("") is False
    assert validate_token("anything") is False


def test_validate_token_explicit_expected_overrides_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_mod, "AUTH_TOKEN", "configured")
    assert validate_token("other", expected="other") is True
    assert validate_token("configured", expected="other") is False


def test_validate_token_is_case_sensitive() -> None:
    assert validate_token("Secret", expected="secret") is False


def test_select_token_returns_first_non_empty() -> None:
    assert _select_token(None, "", "header-token") == "header-token"
    assert _select_token(None, None) is None


def test_validate_candidate_missing() -> None:
    assert _validate_candidate(None, context="test", expected="secret") == (False, "missing")


def test_validate_candidate_invalid() -> None:
    assert _validate_candidate("wrong", context="test", expected="secret") == (False, "invalid")


def test_validate_candidate_correct() -> None:
    assert _validate_candidate("secret", context="test", expected="secret") == (True, None)


def test_extract_token_prefers_query_over_header() -> None:
    ws = _ws(query={"token": "from-query"}, headers={"x-auth-token": "from-header"})
    assert extract_websocket_token(ws) == "from-query"


def test_extract_token_falls_back_to_header() -> None:
    assert extract_websocket_token(_ws(headers={"x-auth-token": "from-header"})) == "from-header"


def test_ensure_authenticated_raises_with_reason() -> None:
    with pytest.raises(AuthenticationFailedError) as missing:
        ensure_authenticated(_ws(), expected="secret")
    assert missing.value.reason == "missing"

    with pytest.raises(AuthenticationFailedError) as invalid:
        ensure_authenticated(_ws(query={"token": "nope"}), expected="secret")
    assert invalid.value.reason == "invalid"


def test_authenticate_websocket_returns_bool() -> None:
    assert asyncio.run(authenticate_websocket(_ws(query={"token": "secret"}), expected="secret")) is True
    assert asyncio.run(authenticate_websocket(_ws(query={"token": "bad"}), expected="secret")) is False
